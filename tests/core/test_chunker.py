"""
Test suite for the paragraph-then-sentence chunker.

System role: Verification of chunk boundaries and size limits
"""

import re

import pytest

from doc_assistant.configs.chunking import ChunkingSettings
from doc_assistant.core.chunking import Chunker, split_text


def _normalize(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


class TestSplitTextBasics:
    """Paragraph packing and edge inputs."""

    def test_small_paragraphs_share_one_chunk(self) -> None:
        """Short paragraphs are joined with a blank line."""
        assert split_text("a\n\nb", max_chunk_size=100, min_viable_size=1) == ["a\n\nb"]

    def test_paragraphs_that_do_not_fit_together_are_split(self) -> None:
        """Two 80-character paragraphs under a 100 limit end up in separate chunks."""
        first = "x" * 80
        second = "y" * 80

        chunks = split_text(f"{first}\n\n{second}", max_chunk_size=100, min_viable_size=1)

        assert chunks == [first, second]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\n", None])
    def test_blank_input_yields_no_chunks(self, text) -> None:
        assert split_text(text, max_chunk_size=100, min_viable_size=0) == []

    def test_fragments_below_min_viable_size_are_dropped(self) -> None:
        text = "tiny\n\n" + "z" * 120
        chunks = split_text(text, max_chunk_size=100, min_viable_size=50)

        assert all(len(c.strip()) >= 50 for c in chunks)
        assert "tiny" not in "".join(chunks)

    def test_min_viable_size_is_inclusive(self) -> None:
        assert split_text("abcde", max_chunk_size=100, min_viable_size=5) == ["abcde"]

    def test_whitespace_only_lines_separate_paragraphs(self) -> None:
        chunks = split_text("x" * 60 + "\n  \n" + "y" * 60, max_chunk_size=100, min_viable_size=1)

        assert chunks == ["x" * 60, "y" * 60]

    @pytest.mark.parametrize(
        "max_size,min_size",
        [(0, 10), (-5, 10), (100, -1)],
    )
    def test_invalid_limits_raise(self, max_size: int, min_size: int) -> None:
        with pytest.raises(ValueError):
            split_text("text", max_chunk_size=max_size, min_viable_size=min_size)


class TestSentenceFallback:
    """Oversized paragraphs are packed sentence by sentence."""

    def test_oversized_paragraph_respects_bound(self) -> None:
        sentences = [f"Sentence number {i} has some words in it." for i in range(30)]
        paragraph = " ".join(sentences)

        chunks = split_text(paragraph, max_chunk_size=120, min_viable_size=1)

        assert len(chunks) > 1
        assert all(len(c) <= 120 for c in chunks)

    def test_single_long_sentence_is_kept_whole(self) -> None:
        sentence = "w" * 250 + "."

        chunks = split_text(sentence, max_chunk_size=100, min_viable_size=1)

        assert chunks == [sentence]

    def test_sentence_buffer_continues_into_next_paragraph(self) -> None:
        long_paragraph = "First sentence here. " + "Second one is much longer than the first. " * 3
        text = long_paragraph.strip() + "\n\nTail."

        chunks = split_text(text, max_chunk_size=80, min_viable_size=1)

        assert chunks[-1].endswith("Tail.")
        assert all(len(c) <= 80 for c in chunks)


def _manual() -> str:
    paragraphs = []
    for i in range(12):
        sentences = " ".join(f"Step {i}.{j} configures the server component." for j in range(i + 1))
        paragraphs.append(f"## Section {i}\n{sentences}")
    return "\n\n".join(paragraphs)


def _long_sentences() -> str:
    long_sentence = "This sentence keeps describing the deployment pipeline " + "and its stages " * 12 + "end."
    return "\n\n".join(
        [
            "Intro.",
            f"{long_sentence} Short one. {long_sentence}",
            "Between.",
            long_sentence,
        ]
    )


def _mixed_paragraphs() -> str:
    sizes = [1, 7, 2, 30, 1, 3, 15, 1]
    paragraphs = []
    for i, count in enumerate(sizes):
        paragraphs.append(" ".join(f"Paragraph {i} sentence {j} covers item {i * 31 + j}." for j in range(count)))
    return "\n\n\n".join(paragraphs)


def _single_block() -> str:
    return " ".join(f"Line {i} of a README without blank lines." for i in range(60))


def _markdown() -> str:
    return (
        "# Title\n\n"
        "- item one\n- item two\n- item three\n\n"
        "```bash\npip install doc-assistant\ndoc-assistant --help\n```\n\n"
        "   \n\n"
        + "Setup needs Python. Then configure the token. Then restart. " * 8
        + "\n\nDone."
    )


DOCUMENTS = {
    "manual": _manual,
    "long-sentences": _long_sentences,
    "mixed-paragraphs": _mixed_paragraphs,
    "single-block": _single_block,
    "markdown": _markdown,
}


class TestChunkerProperties:
    """Properties that must hold for any input."""

    @pytest.fixture(params=sorted(DOCUMENTS))
    def document(self, request) -> str:
        return DOCUMENTS[request.param]()

    @pytest.mark.parametrize("max_chunk_size", [80, 200, 1000])
    def test_every_chunk_within_bound(self, document: str, max_chunk_size: int) -> None:
        """Only a chunk that is one indivisible sentence may exceed the bound."""
        chunks = split_text(document, max_chunk_size=max_chunk_size, min_viable_size=1)

        assert chunks
        for chunk in chunks:
            assert len(chunk) <= max_chunk_size or len(re.split(r"(?<=\.) ", chunk)) == 1

    def test_output_is_deterministic(self, document: str) -> None:
        assert split_text(document, 200, 1) == split_text(document, 200, 1)

    @pytest.mark.parametrize("max_chunk_size", [80, 200, 1000])
    def test_content_is_preserved_modulo_whitespace(self, document: str, max_chunk_size: int) -> None:
        chunks = split_text(document, max_chunk_size=max_chunk_size, min_viable_size=1)

        assert _normalize(" ".join(chunks)) == _normalize(document)

    def test_chunks_keep_document_order(self, document: str) -> None:
        chunks = split_text(document, max_chunk_size=120, min_viable_size=1)
        normalized = _normalize(document)

        cursor = 0
        for chunk in chunks:
            position = normalized.find(_normalize(chunk), cursor)
            assert position >= cursor
            cursor = position + len(_normalize(chunk))


class TestChunker:
    """Chunker wrapper configuration."""

    def test_from_settings_uses_configured_limits(self) -> None:
        settings = ChunkingSettings(max_chunk_size=500, min_viable_size=10)

        chunker = Chunker.from_settings(settings)

        assert chunker.max_chunk_size == 500
        assert chunker.min_viable_size == 10

    def test_defaults(self) -> None:
        chunker = Chunker()

        assert chunker.max_chunk_size == 3000
        assert chunker.min_viable_size == 50

    def test_split_delegates_to_split_text(self) -> None:
        chunker = Chunker(max_chunk_size=100, min_viable_size=1)

        assert chunker.split("a\n\nb") == ["a\n\nb"]

    def test_invalid_limits_raise(self) -> None:
        with pytest.raises(ValueError):
            Chunker(max_chunk_size=0)
