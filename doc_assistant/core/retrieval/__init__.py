"""Keyword scoring and retrieval."""

from .retriever import Retriever
from .scorer import filename_relevance, score_chunk
from .synonyms import DEFAULT_SYNONYM_TABLE, SemanticRule, SynonymTable
from .tokenizer import normalize_query, tokenize_query

__all__ = [
    "DEFAULT_SYNONYM_TABLE",
    "Retriever",
    "SemanticRule",
    "SynonymTable",
    "filename_relevance",
    "normalize_query",
    "score_chunk",
    "tokenize_query",
]
