"""Retrieval engine for lexical relevance ranking of document chunks."""
import logging
import math
import re
from typing import List, Optional, Sequence

from models.chunk import Chunk, ScoredChunk
from config import MAX_RELEVANT_CHUNKS

logger = logging.getLogger(__name__)


class RetrievalEngine:
    """
    Rank a document's chunks against a free-text query by word overlap.

    No embeddings or model calls: scoring is a hand-tuned heuristic over exact
    and partial term matches. Changing any weight below changes ranking
    output and should ship as a behavior change.
    """

    STOP_WORDS = frozenset({
        "the", "is", "at", "which", "on", "a", "an", "and", "or", "but",
        "in", "with", "to", "for", "of", "as", "by", "this", "that", "it",
        "what", "where", "when", "who", "how", "why", "are", "was", "were",
        "be", "been",
    })

    MIN_TERM_LENGTH = 3
    # Sentence punctuation stripped from token edges; "+" and "#" stay so "c++" survives
    TERM_EDGE_CHARS = ".,;:!?\"'()[]{}"

    EXACT_MATCH_WEIGHT = 3.0
    PARTIAL_MATCH_WEIGHT = 1.5
    MULTI_TERM_BONUS = 2.0
    POSITION_DECAY = 0.1

    def __init__(self, max_chunks: int = MAX_RELEVANT_CHUNKS):
        """
        Initialize the retrieval engine.

        Args:
            max_chunks: Default number of chunks returned by find_relevant
        """
        if max_chunks <= 0:
            raise ValueError(f"max_chunks must be positive, got {max_chunks}")
        self.max_chunks = max_chunks

    @classmethod
    def tokenize_query(cls, query: str) -> List[str]:
        """Lower-case and split the query, trim edge punctuation, drop short words and stop words."""
        if not query:
            return []
        words = (word.strip(cls.TERM_EDGE_CHARS) for word in query.lower().split())
        return [
            word for word in words
            if len(word) >= cls.MIN_TERM_LENGTH and word not in cls.STOP_WORDS
        ]

    def find_relevant(
        self,
        chunks: Sequence[Chunk],
        query: str,
        max_chunks: Optional[int] = None
    ) -> List[Chunk]:
        """
        Return the chunks most likely to answer the query.

        Chunks with a non-positive score are dropped. Order is score
        descending, then number of matched query terms descending, then
        chunk_index ascending.

        Args:
            chunks: A document's chunk list, in document order
            query: User question or concept
            max_chunks: Result size limit (defaults to the engine's max_chunks)

        Returns:
            At most max_chunks of the given Chunk objects, best first
        """
        limit = self.max_chunks if max_chunks is None else max_chunks
        if not chunks or not query or limit <= 0:
            return []

        terms = self.tokenize_query(query)
        if not terms:
            logger.debug(f"No searchable terms in query: {query[:100]!r}")
            return []

        scored = [s for s in self._score(chunks, terms) if s.score > 0]
        scored.sort(key=lambda s: (-s.score, -s.matched_words, s.chunk.chunk_index))

        selected = [s.chunk for s in scored[:limit]]
        logger.debug(
            f"Selected chunks {[c.chunk_index for c in selected]} "
            f"from {len(scored)}/{len(chunks)} matching (terms={terms})"
        )
        return selected

    def score_chunks(self, chunks: Sequence[Chunk], query: str) -> List[ScoredChunk]:
        """
        Score every chunk against the query without filtering or sorting.

        Returns:
            One ScoredChunk per input chunk, in input order; empty if the
            query has no searchable terms
        """
        terms = self.tokenize_query(query)
        if not chunks or not terms:
            return []
        return self._score(chunks, terms)

    def _score(self, chunks: Sequence[Chunk], terms: List[str]) -> List[ScoredChunk]:
        total = len(chunks)
        patterns = [(term, re.compile(r"\b" + re.escape(term) + r"\b")) for term in terms]

        scored = []
        for position, chunk in enumerate(chunks):
            content = chunk.content.lower()
            raw_score = 0.0

            for term, pattern in patterns:
                exact = len(pattern.findall(content))
                partial = content.count(term)
                raw_score += exact * self.EXACT_MATCH_WEIGHT
                # Substring hits that were not already counted as whole words
                raw_score += max(0, partial - exact) * self.PARTIAL_MATCH_WEIGHT

            matched_words = sum(1 for term in terms if term in content)
            if matched_words > 1:
                raw_score += matched_words * self.MULTI_TERM_BONUS

            word_count = max(1, len(content.split()))
            normalized = raw_score / math.sqrt(word_count)
            position_weight = 1 - (position / total) * self.POSITION_DECAY

            scored.append(ScoredChunk(
                chunk=chunk,
                score=normalized * position_weight,
                raw_score=raw_score,
                matched_words=matched_words,
            ))

        return scored
