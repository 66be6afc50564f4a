"""
Keyword retrieval over chunk store snapshots.

Answers "best file" and "best chunks" queries and chains them into the
fallback sequence best-file -> scored top-N -> widened keyword top-N.
Every call works on one find_all() snapshot and never writes.

Dependencies: doc_assistant.boundary.chunk_store, doc_assistant.core.retrieval
System role: RAG retrieval business logic
"""

import logging
from collections.abc import Sequence

from doc_assistant.boundary.chunk_store import ChunkStore
from doc_assistant.configs.retrieval import RetrievalSettings
from doc_assistant.core.retrieval.scorer import filename_relevance, score_chunk
from doc_assistant.core.retrieval.synonyms import DEFAULT_SYNONYM_TABLE, SynonymTable
from doc_assistant.core.retrieval.tokenizer import normalize_query, tokenize_query
from doc_assistant.models.chunk import Chunk
from doc_assistant.models.retrieval import (
    FileScore,
    RetrievalResult,
    RetrievalStrategy,
    ScoredChunk,
)

logger = logging.getLogger(__name__)

FileKey = tuple[str, str, str, str]


def _file_key(chunk: Chunk) -> FileKey:
    return (chunk.file_path, chunk.repository_owner, chunk.repository_name, chunk.branch)


class Retriever:
    """Keyword retrieval business logic."""

    def __init__(
        self,
        store: ChunkStore,
        top_k: int = 5,
        relevant_limit: int = 25,
        keyword_limit: int = 50,
        filename_bonus: float = 20.0,
        synonyms: SynonymTable = DEFAULT_SYNONYM_TABLE,
    ) -> None:
        """
        Initialize retriever.

        Args:
            store: Chunk store read through find_all() snapshots
            top_k: Chunk scores averaged per file in best-file mode
            relevant_limit: Default limit of the scored top-N search
            keyword_limit: Default limit of the widened keyword search
            filename_bonus: Bonus per query word found in a file path
            synonyms: Semantic rules and keyword expansions
        """
        if top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {top_k}")
        self._store = store
        self.top_k = top_k
        self.relevant_limit = relevant_limit
        self.keyword_limit = keyword_limit
        self.filename_bonus = filename_bonus
        self.synonyms = synonyms

    @classmethod
    def from_settings(
        cls,
        store: ChunkStore,
        settings: RetrievalSettings,
    ) -> "Retriever":
        """Build a retriever, loading the synonym table file when configured."""
        synonyms = DEFAULT_SYNONYM_TABLE
        if settings.synonyms_path:
            synonyms = SynonymTable.from_json_file(settings.synonyms_path)
            logger.info(
                f"{__name__}:from_settings - Loaded {len(synonyms.rules)} semantic rules "
                f"from {settings.synonyms_path}"
            )
        return cls(
            store=store,
            top_k=settings.top_k_files,
            relevant_limit=settings.relevant_limit,
            keyword_limit=settings.keyword_limit,
            filename_bonus=settings.filename_bonus,
            synonyms=synonyms,
        )

    def _score(self, chunk: Chunk, query_words: Sequence[str], full_query: str) -> float:
        return score_chunk(
            chunk.text,
            chunk.file_path,
            query_words,
            full_query,
            self.synonyms,
        )

    def _score_groups(
        self,
        groups: dict[FileKey, list[Chunk]],
        query_words: Sequence[str],
        full_query: str,
    ) -> list[FileScore]:
        file_scores = []
        for (file_path, owner, name, branch), chunks in groups.items():
            scores = sorted(
                (self._score(chunk, query_words, full_query) for chunk in chunks),
                reverse=True,
            )
            top = scores[: self.top_k]
            top_k_average = sum(top) / len(top) if top else 0.0
            bonus = filename_relevance(file_path, query_words, self.filename_bonus)
            file_scores.append(
                FileScore(
                    file_path=file_path,
                    repository_owner=owner,
                    repository_name=name,
                    branch=branch,
                    score=top_k_average + bonus,
                    top_k_average=top_k_average,
                    filename_bonus=bonus,
                    max_chunk_score=scores[0] if scores else 0.0,
                    chunk_count=len(chunks),
                )
            )
        file_scores.sort(key=lambda fs: (-fs.score, fs.sort_key))
        return file_scores

    @staticmethod
    def _group_by_file(chunks: Sequence[Chunk]) -> dict[FileKey, list[Chunk]]:
        groups: dict[FileKey, list[Chunk]] = {}
        for chunk in chunks:
            groups.setdefault(_file_key(chunk), []).append(chunk)
        return groups

    def score_files(self, query: str) -> list[FileScore]:
        """
        Aggregate file scores for a query.

        Args:
            query: Free-text query

        Returns:
            list[FileScore]: Highest score first, ties in lexicographic
                (file_path, owner, name, branch) order
        """
        query_words = tokenize_query(query)
        if not query_words:
            return []
        groups = self._group_by_file(self._store.find_all())
        return self._score_groups(groups, query_words, normalize_query(query))

    def find_best_matching_file(self, query: str) -> list[Chunk]:
        """
        Return every chunk of the single best matching file.

        Files are ranked by the average of their top-K chunk scores plus a
        filename bonus. Only files with at least one positively scored chunk
        qualify; ties go to the lexicographically smallest path.

        Args:
            query: Free-text query

        Returns:
            list[Chunk]: The file's chunks in chunk_index order, or an empty list
        """
        query_words = tokenize_query(query)
        if not query_words:
            return []

        groups = self._group_by_file(self._store.find_all())
        file_scores = self._score_groups(groups, query_words, normalize_query(query))
        candidates = [fs for fs in file_scores if fs.max_chunk_score > 0]
        if not candidates:
            logger.warning(f"{__name__}:find_best_matching_file - No matching file for query: {query}")
            return []

        best = candidates[0]
        logger.info(
            f"{__name__}:find_best_matching_file - Best matching file: {best.file_path} "
            f"(score={best.score:.1f}, chunks={best.chunk_count})"
        )
        chunks = groups[(best.file_path, best.repository_owner, best.repository_name, best.branch)]
        return sorted(chunks, key=lambda chunk: chunk.chunk_index)

    def rank_chunks(
        self,
        query: str,
        limit: int,
        expand_keywords: bool = False,
    ) -> list[ScoredChunk]:
        """
        Score every chunk independently and keep the best ones.

        Args:
            query: Free-text query
            limit: Maximum number of results
            expand_keywords: Widen query words with the synonym expansions

        Returns:
            list[ScoredChunk]: Positive scores only, highest first; equal
                scores keep snapshot order
        """
        query_words = tokenize_query(query)
        if not query_words or limit <= 0:
            return []
        if expand_keywords:
            query_words = self.synonyms.expand(query_words)
        full_query = normalize_query(query)

        scored = []
        for chunk in self._store.find_all():
            score = self._score(chunk, query_words, full_query)
            if score > 0:
                scored.append(ScoredChunk(chunk=chunk, score=score))
        scored.sort(key=lambda item: item.score, reverse=True)
        return scored[:limit]

    def find_relevant_chunks(self, query: str, limit: int | None = None) -> list[Chunk]:
        """Top-N chunks by score (default limit: relevant_limit)."""
        logger.info(f"{__name__}:find_relevant_chunks - Searching for: {query}")
        limit = self.relevant_limit if limit is None else limit
        return [item.chunk for item in self.rank_chunks(query, limit)]

    def find_relevant_chunks_by_keywords(self, query: str, limit: int | None = None) -> list[Chunk]:
        """Widened top-N search over expanded keywords (default limit: keyword_limit)."""
        logger.info(f"{__name__}:find_relevant_chunks_by_keywords - Keyword fallback for: {query}")
        limit = self.keyword_limit if limit is None else limit
        return [item.chunk for item in self.rank_chunks(query, limit, expand_keywords=True)]

    def retrieve(self, query: str) -> RetrievalResult:
        """
        Run the fallback chain.

        Each stage runs only when the previous one returned nothing:
        best file, then scored top-N, then the widened keyword search.

        Args:
            query: Free-text query

        Returns:
            RetrievalResult: Chunks and the stage that produced them
        """
        chunks = self.find_best_matching_file(query)
        if chunks:
            return RetrievalResult(strategy=RetrievalStrategy.BEST_FILE, chunks=chunks)

        logger.info(f"{__name__}:retrieve - No best file, trying scored search for: {query}")
        chunks = self.find_relevant_chunks(query)
        if chunks:
            return RetrievalResult(strategy=RetrievalStrategy.RELEVANT_CHUNKS, chunks=chunks)

        logger.info(f"{__name__}:retrieve - No scored results, trying keyword fallback for: {query}")
        chunks = self.find_relevant_chunks_by_keywords(query)
        if chunks:
            return RetrievalResult(strategy=RetrievalStrategy.KEYWORD_FALLBACK, chunks=chunks)

        return RetrievalResult(strategy=RetrievalStrategy.NONE, chunks=[])
