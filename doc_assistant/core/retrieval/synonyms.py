"""
Synonym table for semantic score bonuses and keyword expansion.

The table is data: a list of rules (query concept -> content synonyms ->
bonus) and a mapping of keyword expansions. The built-in default can be
replaced by a JSON file with the same shape.

Dependencies: pydantic
System role: Scorer configuration data
"""

import json
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field

from doc_assistant.core.retrieval.tokenizer import word_variants


class SemanticRule(BaseModel):
    """Bonus applied when the query names a concept and the chunk mentions a synonym."""

    concept: str = Field(description="Rule name, for logs and tests")
    query_terms: list[str] = Field(min_length=1, description="Terms that activate the rule")
    content_terms: list[str] = Field(min_length=1, description="Synonyms searched in the chunk")
    bonus: float = Field(ge=0.0, description="Score added once per matching chunk")

    def matches_query(self, query_words: Sequence[str], full_query: str) -> bool:
        """Single-word terms match query words, multi-word terms match the query phrase."""
        words = set(query_words)
        for term in self.query_terms:
            term = term.lower()
            if " " in term:
                if term in full_query:
                    return True
            elif term in words:
                return True
        return False

    def matches_content(self, lowered_text: str) -> bool:
        """Content terms are plain substrings of the lower-cased chunk."""
        return any(term.lower() in lowered_text for term in self.content_terms)


class SynonymTable(BaseModel):
    """Semantic rules plus keyword expansions."""

    rules: list[SemanticRule] = Field(default_factory=list)
    expansions: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "SynonymTable":
        """
        Load a table from a JSON file.

        Args:
            path: File with {"rules": [...], "expansions": {...}}

        Returns:
            SynonymTable: Validated table

        Raises:
            OSError: File cannot be read
            pydantic.ValidationError: Content does not match the schema
        """
        raw = json.loads(Path(path).expanduser().read_text(encoding="utf-8"))
        return cls.model_validate(raw)

    def active_rules(self, query_words: Sequence[str], full_query: str) -> list[SemanticRule]:
        """Rules whose concept the query mentions."""
        return [rule for rule in self.rules if rule.matches_query(query_words, full_query)]

    def expand(self, query_words: Sequence[str]) -> list[str]:
        """
        Widen query words with expansions and singular/plural variants.

        Original words come first, order is stable and duplicates are removed.
        """
        expanded: list[str] = []
        seen: set[str] = set()

        def add(term: str) -> None:
            term = term.lower()
            if term and term not in seen:
                seen.add(term)
                expanded.append(term)

        for word in query_words:
            add(word)
        for word in query_words:
            extra = self.expansions.get(word)
            if extra is not None:
                for term in extra:
                    add(term)
            else:
                for term in word_variants(word):
                    add(term)
        return expanded


DEFAULT_SYNONYM_TABLE = SynonymTable(
    rules=[
        SemanticRule(
            concept="create",
            query_terms=["create", "creating", "setup", "configure", "how to create"],
            content_terms=["create", "setup", "configure", "build", "make", "generate"],
            bonus=30.0,
        ),
        SemanticRule(
            concept="organization",
            query_terms=["organization", "organisation", "org", "create organization", "create org"],
            content_terms=["organization", "organisation", "site"],
            bonus=60.0,
        ),
        SemanticRule(
            concept="tablespace",
            query_terms=["tablespace", "tablespaces", "table space"],
            content_terms=["tablespace", "table space", "maxindex", "maxdata", "db2 create"],
            bonus=40.0,
        ),
        SemanticRule(
            concept="database",
            query_terms=["tablespace", "database", "db2"],
            content_terms=["tablespace", "database", "db2"],
            bonus=25.0,
        ),
        SemanticRule(
            concept="configuration",
            query_terms=["config", "configuration", "prerequisite", "prerequisites"],
            content_terms=["configuration", "prerequisite", "setup"],
            bonus=20.0,
        ),
        SemanticRule(
            concept="maximo",
            query_terms=["maximo", "mas"],
            content_terms=["maximo", "mas", "manage"],
            bonus=15.0,
        ),
    ],
    expansions={
        "create": ["creating", "creation", "setup", "configure", "build", "make", "generate"],
        "organization": ["organisation", "org", "site", "sites"],
        "organisation": ["organization", "org", "site", "sites"],
        "org": ["organization", "organisation", "site", "sites"],
        "commodity": ["commodities", "item", "items", "product", "products"],
        "commodities": ["commodity", "item", "items", "product", "products"],
        "get": ["retrieve", "fetch", "obtain", "access", "find"],
        "tablespace": ["tablespaces", "table space", "table spaces", "database space", "db space"],
        "tablespaces": ["tablespace", "table space", "table spaces", "database space", "db space"],
        "how": ["steps", "procedure", "process", "method", "way", "guide"],
        "to": [],
        "install": ["installation", "installing", "deploy", "deployment", "setup"],
        "configure": ["configuration", "config", "setup", "setting", "settings"],
        "configuration": ["configure", "config", "setup", "setting", "settings"],
        "maximo": ["mas", "manage"],
        "db2": ["database", "db"],
        "prerequisite": ["prerequisites", "requirement", "requirements", "prereq"],
        "prerequisites": ["prerequisite", "requirement", "requirements", "prereq"],
    },
)
