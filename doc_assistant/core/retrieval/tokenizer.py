"""
Query tokenization.

Whitespace split with punctuation trimmed from token edges. Nothing beyond
that: no stemming, no stop-word lists.

Dependencies: string (stdlib)
System role: Shared query normalization for scoring
"""

import string

_EDGE_PUNCTUATION = string.punctuation + "“”‘’«»"


def normalize_query(query: str | None) -> str:
    """Lower-case and trim a query."""
    return (query or "").lower().strip()


def tokenize_query(query: str | None) -> list[str]:
    """
    Split a query into lower-cased words.

    Args:
        query: Free-text query

    Returns:
        list[str]: Words in query order, duplicates kept
    """
    words = []
    for raw in normalize_query(query).split():
        word = raw.strip(_EDGE_PUNCTUATION)
        if word:
            words.append(word)
    return words


def word_variants(word: str) -> list[str]:
    """Return the word and its naive singular/plural counterpart."""
    if word.endswith("s") and len(word) > 3:
        return [word, word[:-1]]
    return [word, word + "s"]
