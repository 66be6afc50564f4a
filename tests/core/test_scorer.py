"""
Test suite for keyword relevance scoring.

System role: Verification of score rules, bonuses and score properties
"""

import pytest

from doc_assistant.core.retrieval import normalize_query, score_chunk, tokenize_query
from doc_assistant.core.retrieval.scorer import content_match_score, filename_relevance
from doc_assistant.core.retrieval.synonyms import SemanticRule, SynonymTable

EMPTY_TABLE = SynonymTable()


def _score(text: str, query: str, path: str = "docs/api.md", synonyms: SynonymTable = EMPTY_TABLE) -> float:
    return score_chunk(text, path, tokenize_query(query), normalize_query(query), synonyms)


class TestContentMatchScore:
    """Per-word content matching."""

    def test_boundary_match(self) -> None:
        assert content_match_score("create an asset", "create") == 15.0

    def test_partial_match(self) -> None:
        assert content_match_score("recreate the asset", "create") == 8.0

    def test_occurrences_accumulate(self) -> None:
        assert content_match_score("create, then create again; recreate", "create") == 15.0 * 2 + 8.0

    def test_no_match(self) -> None:
        assert content_match_score("nothing relevant", "create") == 0.0


class TestScoreChunk:
    """Additive chunk score."""

    def test_heading_with_exact_phrase(self) -> None:
        """Two word matches, the exact phrase and the bigram all count."""
        score = _score("## Create Asset", "create asset")

        assert score == 15.0 + 15.0 + 50.0 + 25.0
        assert score - 50.0 >= 30.0

    def test_default_table_adds_semantic_bonus(self) -> None:
        from doc_assistant.core.retrieval import DEFAULT_SYNONYM_TABLE

        score = _score("## Create Asset", "create asset", synonyms=DEFAULT_SYNONYM_TABLE)

        assert score == 105.0 + 30.0

    def test_path_match_adds_small_bonus(self) -> None:
        assert _score("unrelated text", "asset", path="docs/asset-guide.md") == 3.0

    def test_short_words_are_ignored(self) -> None:
        assert _score("it is on", "is on", path="x.md") == 50.0 + 25.0

    def test_bigram_counts_each_occurrence(self) -> None:
        text = "create   asset here. later: create asset there"
        score = _score(text, "create asset")

        # 2 boundary matches per word, 2 bigrams; phrase matches once
        assert score == 2 * 15.0 * 2 + 2 * 25.0 + 50.0

    def test_case_insensitive(self) -> None:
        assert _score("CREATE ASSET", "Create Asset") == _score("create asset", "create asset")

    def test_semantic_rule_needs_query_and_content(self) -> None:
        table = SynonymTable(
            rules=[SemanticRule(concept="org", query_terms=["org"], content_terms=["site"], bonus=60.0)]
        )

        with_site = _score("configure the site", "org", synonyms=table)
        without_site = _score("configure the plant", "org", synonyms=table)

        assert with_site == 60.0
        assert without_site == 0.0

    def test_multi_word_query_term_matches_phrase(self) -> None:
        table = SynonymTable(
            rules=[
                SemanticRule(
                    concept="tablespace",
                    query_terms=["table space"],
                    content_terms=["maxdata"],
                    bonus=40.0,
                )
            ]
        )

        assert _score("maxdata settings", "add a table space", synonyms=table) == 40.0

    def test_rule_bonus_applied_once_per_chunk(self) -> None:
        table = SynonymTable(
            rules=[SemanticRule(concept="c", query_terms=["zzz"], content_terms=["site", "plant"], bonus=10.0)]
        )

        assert _score("site plant site", "zzz", synonyms=table) == 10.0


class TestScoreProperties:
    """Properties that hold for any chunk and query."""

    @pytest.mark.parametrize(
        "text,query",
        [
            ("", "create asset"),
            ("some text", ""),
            ("!!! ??? ...", "!!!"),
            ("Configure DB2 tablespace", "how to create a tablespace"),
        ],
    )
    def test_score_is_never_negative(self, text: str, query: str) -> None:
        from doc_assistant.core.retrieval import DEFAULT_SYNONYM_TABLE

        assert _score(text, query, synonyms=DEFAULT_SYNONYM_TABLE) >= 0.0

    @pytest.mark.parametrize(
        "base,extra",
        [
            ("create the organization", " create"),
            ("asset list", " asset asset"),
            ("## Create Asset", "\ncreate asset again"),
            ("nothing", " recreate"),
        ],
    )
    def test_more_matches_never_lower_the_score(self, base: str, extra: str) -> None:
        from doc_assistant.core.retrieval import DEFAULT_SYNONYM_TABLE

        query = "create asset organization"
        before = _score(base, query, synonyms=DEFAULT_SYNONYM_TABLE)
        after = _score(base + extra, query, synonyms=DEFAULT_SYNONYM_TABLE)

        assert after >= before


class TestFilenameRelevance:
    """File-level path bonus."""

    def test_bonus_per_matched_word(self) -> None:
        assert filename_relevance("docs/create-user.md", ["create", "user"], bonus=20.0) == 40.0

    def test_plural_variant_matches(self) -> None:
        assert filename_relevance("docs/asset.md", ["assets"], bonus=20.0) == 20.0
        assert filename_relevance("docs/sites.md", ["site"], bonus=20.0) == 40.0

    def test_no_match(self) -> None:
        assert filename_relevance("docs/readme-other.md", ["asset"], bonus=20.0) == 0.0

    def test_short_words_ignored(self) -> None:
        assert filename_relevance("to/do.md", ["to", "do"], bonus=20.0) == 0.0
