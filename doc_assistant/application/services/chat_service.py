"""
Chat service for documentation Q&A.

Retrieves documentation chunks for a question, builds the prompt and
asks the completion client for the answer.

Dependencies: doc_assistant.core.retrieval, doc_assistant.core.prompting, doc_assistant.boundary.llm
System role: Chat service orchestration layer
"""

import logging
import time

from doc_assistant.boundary.llm import CompletionClient
from doc_assistant.core.prompting import build_prompt
from doc_assistant.core.retrieval import Retriever
from doc_assistant.models.chat import ChatAnswer
from doc_assistant.models.retrieval import RetrievalResult, RetrievalStrategy

logger = logging.getLogger(__name__)


class ChatService:
    """Retrieval-augmented answers over the indexed documentation."""

    def __init__(self, retriever: Retriever, completion_client: CompletionClient) -> None:
        """
        Initialize chat service.

        Args:
            retriever: Keyword retriever over the chunk store
            completion_client: Generates the answer text
        """
        self.retriever = retriever
        self.completion_client = completion_client

    async def answer(self, message: str, include_context: bool = True) -> ChatAnswer:
        """
        Answer a question.

        Flow:
        1. Run the retrieval fallback chain (unless include_context is False)
        2. Build the prompt from the retrieved chunks
        3. Generate the answer

        Args:
            message: User question
            include_context: Retrieve documentation context

        Returns:
            ChatAnswer: Answer text, retrieval strategy and source files

        Raises:
            CompletionError: Completion service failed
        """
        start = time.perf_counter()

        if include_context:
            result = self.retriever.retrieve(message)
        else:
            result = RetrievalResult(strategy=RetrievalStrategy.NONE, chunks=[])
        logger.info(
            f"{__name__}:answer - Retrieved {len(result.chunks)} chunks via {result.strategy.value}"
        )

        prompt = build_prompt(message, result.chunks)
        response = await self.completion_client.generate(prompt)

        source_files = list(dict.fromkeys(chunk.file_path for chunk in result.chunks))
        return ChatAnswer(
            response=response,
            model=self.completion_client.model,
            strategy=result.strategy,
            source_files=source_files,
            response_time_ms=round((time.perf_counter() - start) * 1000, 2),
        )
