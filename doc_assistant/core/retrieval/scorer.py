"""
Keyword relevance scoring.

Additive score of one chunk against a query. Every rule applies
independently and repeated matches compound, so the score only grows as a
chunk gains matches and is never negative.

Dependencies: re (stdlib), doc_assistant.core.retrieval.synonyms
System role: Per-chunk relevance signal for the Retriever
"""

import re
from collections.abc import Sequence
from functools import lru_cache

from doc_assistant.core.retrieval.synonyms import DEFAULT_SYNONYM_TABLE, SynonymTable
from doc_assistant.core.retrieval.tokenizer import word_variants

BOUNDARY_MATCH_SCORE = 15.0
PARTIAL_MATCH_SCORE = 8.0
PATH_MATCH_SCORE = 3.0
EXACT_PHRASE_SCORE = 50.0
BIGRAM_SCORE = 25.0

# Words must be longer than this to count for content and path matches.
MIN_SIGNIFICANT_LENGTH = 2
# Bigram words must be longer than this.
MIN_BIGRAM_WORD_LENGTH = 1


@lru_cache(maxsize=4096)
def _boundary_pattern(word: str) -> re.Pattern[str]:
    return re.compile(rf"(?<!\w){re.escape(word)}(?!\w)")


@lru_cache(maxsize=4096)
def _bigram_pattern(first: str, second: str) -> re.Pattern[str]:
    return re.compile(rf"(?<!\w){re.escape(first)}\s+{re.escape(second)}(?!\w)")


def _significant(words: Sequence[str], min_length: int) -> list[str]:
    return [word for word in words if len(word) > min_length]


def content_match_score(lowered_text: str, word: str) -> float:
    """
    Score one query word against lower-cased chunk text.

    Each word-boundary occurrence earns BOUNDARY_MATCH_SCORE, each remaining
    substring occurrence earns PARTIAL_MATCH_SCORE.
    """
    boundary = len(_boundary_pattern(word).findall(lowered_text))
    partial = max(lowered_text.count(word) - boundary, 0)
    return boundary * BOUNDARY_MATCH_SCORE + partial * PARTIAL_MATCH_SCORE


def score_chunk(
    chunk_text: str,
    file_path: str,
    query_words: Sequence[str],
    full_query: str,
    synonyms: SynonymTable = DEFAULT_SYNONYM_TABLE,
) -> float:
    """
    Compute the relevance of one chunk.

    Args:
        chunk_text: Chunk content
        file_path: Path of the chunk's source file
        query_words: Lower-cased query words (see tokenize_query)
        full_query: Lower-cased, trimmed query (see normalize_query)
        synonyms: Semantic rule table

    Returns:
        float: Non-negative score
    """
    text = chunk_text.lower()
    path = file_path.lower()
    phrase = full_query.lower().strip()
    score = 0.0

    significant = _significant(query_words, MIN_SIGNIFICANT_LENGTH)
    for word in significant:
        score += content_match_score(text, word)
        if word in path:
            score += PATH_MATCH_SCORE

    if phrase and phrase in text:
        score += EXACT_PHRASE_SCORE

    bigram_words = _significant(query_words, MIN_BIGRAM_WORD_LENGTH)
    for first, second in zip(bigram_words, bigram_words[1:]):
        score += len(_bigram_pattern(first, second).findall(text)) * BIGRAM_SCORE

    for rule in synonyms.active_rules(query_words, phrase):
        if rule.matches_content(text):
            score += rule.bonus

    return score


def filename_relevance(
    file_path: str,
    query_words: Sequence[str],
    bonus: float = 20.0,
) -> float:
    """
    File-level bonus for query words found in a path.

    Each distinct word (or its singular/plural variant) longer than two
    characters that occurs in the path adds the bonus once.
    """
    path = file_path.lower()
    matched: set[str] = set()
    for word in _significant(query_words, MIN_SIGNIFICANT_LENGTH):
        for variant in word_variants(word):
            if len(variant) > MIN_SIGNIFICANT_LENGTH and variant in path:
                matched.add(variant)
    return len(matched) * bonus
