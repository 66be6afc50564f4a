"""
Documentation answer prompts.

Builds the completion prompt from a question and its retrieved chunks.
Chunks are grouped per file and replayed in chunk_index order under a
"--- Content from: <path> ---" header. Questions asking for a full guide
or raw content get the complete-content template, all others the
selective-extraction template.

Dependencies: re (stdlib), doc_assistant.models.chunk
System role: Prompt templates for the chat service
"""

import re
from collections.abc import Sequence

from doc_assistant.models.chunk import Chunk

NO_CONTEXT_PROMPT = """USER QUESTION: {question}

No relevant documentation found for this query. Please try different keywords or check if the topic is covered under different terminology in the available documentation.
"""

COMPLETE_CONTENT_PROMPT = """Return the COMPLETE content related to: "{question}"

CRITICAL: Provide ALL steps, commands, and procedures from the document.
Do NOT summarize, truncate, or skip any details.
Include ALL download links, installation steps, configuration details, and verification commands.
Maintain exact formatting, commands, file paths, and structure from the original documentation.
When the document contains numbered steps, include ALL steps in order.

CONTENT:
{context}

RETURN COMPLETE CONTENT:
"""

SELECTIVE_PROMPT = """You are an expert technical assistant. Analyze the user's question and extract ONLY the relevant information from the provided documentation.

USER QUESTION: "{question}"

INSTRUCTIONS:
1. Read and understand what the user is specifically asking for
2. From the documentation below, extract ONLY the section(s) that directly answer the question
3. Do NOT return the entire document
4. If they ask how to create, query, update or delete something, provide ONLY that operation
5. Maintain the exact formatting, commands, and structure of the documentation
6. Include ALL details needed for the requested operation
7. If the documentation has prerequisites for the operation, list them first

COMPLETE DOCUMENTATION:
{context}

EXTRACT AND PROVIDE ONLY THE SPECIFIC SECTION THAT ANSWERS: {question}
"""

_COMPLETE_CONTENT_PATTERN = re.compile(
    r"\b(only|just|exact|exactly|raw|direct|setup|install|guide|complete|full|entire|all steps|walkthrough)\b",
    re.IGNORECASE,
)


def wants_complete_content(question: str) -> bool:
    """True when the question asks for a full guide or the raw file content."""
    return bool(_COMPLETE_CONTENT_PATTERN.search(question))


def build_context(chunks: Sequence[Chunk]) -> str:
    """
    Render chunks as per-file sections.

    Files appear in order of first occurrence; chunks within a file are
    sorted by chunk_index.
    """
    by_file: dict[str, list[Chunk]] = {}
    for chunk in chunks:
        by_file.setdefault(chunk.file_path, []).append(chunk)

    sections = []
    for file_path, file_chunks in by_file.items():
        body = "\n".join(c.text for c in sorted(file_chunks, key=lambda c: c.chunk_index))
        sections.append(f"--- Content from: {file_path} ---\n{body}")
    return "\n\n".join(sections)


def build_prompt(question: str, chunks: Sequence[Chunk]) -> str:
    """
    Build the completion prompt for a question.

    Args:
        question: User question
        chunks: Retrieved chunks (may be empty)

    Returns:
        str: Prompt text
    """
    if not chunks:
        return NO_CONTEXT_PROMPT.format(question=question)

    context = build_context(chunks)
    template = COMPLETE_CONTENT_PROMPT if wants_complete_content(question) else SELECTIVE_PROMPT
    return template.format(question=question, context=context)
