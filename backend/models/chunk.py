"""Chunk data models."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Chunk:
    """Represents one contiguous window of document text."""
    content: str
    chunk_index: int  # 0-based, contiguous in emission order
    page_number: int = 0  # page attribution not tracked yet
    chunk_id: Optional[str] = None  # caller-side identity, passed through untouched

    @property
    def word_count(self) -> int:
        return len(self.content.split())


@dataclass
class ScoredChunk:
    """Chunk with lexical relevance score from retrieval."""
    chunk: Chunk
    score: float
    raw_score: float  # match weights plus multi-term bonus, before length and position weighting
    matched_words: int  # distinct query terms found in the chunk
