"""Data models for the PDF Study Assistant backend."""
from .document import Document, Page
from .chunk import Chunk, ScoredChunk
from .study import Flashcard, QuizQuestion, ChatAnswer, ConceptExplanation

__all__ = [
    "Document",
    "Page",
    "Chunk",
    "ScoredChunk",
    "Flashcard",
    "QuizQuestion",
    "ChatAnswer",
    "ConceptExplanation",
]
