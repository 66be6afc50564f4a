"""
Test suite for prompt construction.

System role: Verification of chat prompt templates
"""

from doc_assistant.core.prompting import build_context, build_prompt, wants_complete_content


class TestBuildContext:
    """Per-file context sections."""

    def test_groups_by_file_in_chunk_order(self, make_chunk) -> None:
        chunks = [
            make_chunk("b1", file_path="b.md", chunk_index=1),
            make_chunk("a0", file_path="a.md", chunk_index=0),
            make_chunk("b0", file_path="b.md", chunk_index=0),
        ]

        context = build_context(chunks)

        assert context == "--- Content from: b.md ---\nb0\nb1\n\n--- Content from: a.md ---\na0"


class TestBuildPrompt:
    """Template selection."""

    def test_no_chunks_uses_no_context_prompt(self) -> None:
        prompt = build_prompt("what is x", [])

        assert "USER QUESTION: what is x" in prompt
        assert "No relevant documentation found" in prompt

    def test_complete_guide_request(self, make_chunk) -> None:
        prompt = build_prompt("give me the full install guide", [make_chunk("Step 1")])

        assert prompt.startswith('Return the COMPLETE content related to: "give me the full install guide"')
        assert "Step 1" in prompt

    def test_selective_request(self, make_chunk) -> None:
        prompt = build_prompt("how do I delete an asset", [make_chunk("Delete with DELETE /assets/{id}")])

        assert "extract ONLY the relevant information" in prompt
        assert "DELETE /assets/{id}" in prompt

    def test_wants_complete_content(self) -> None:
        assert wants_complete_content("show the raw file")
        assert wants_complete_content("Complete setup walkthrough")
        assert not wants_complete_content("how do I delete an asset")
