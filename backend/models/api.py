"""Request and response models for the HTTP API."""
from typing import List, Optional

from pydantic import BaseModel, Field

from config import CHUNK_SIZE, CHUNK_OVERLAP, MAX_RELEVANT_CHUNKS, FLASHCARD_COUNT, QUIZ_QUESTION_COUNT
from .chunk import Chunk


class ChunkPayload(BaseModel):
    """Wire form of a Chunk."""
    content: str
    chunk_index: int = Field(ge=0)
    page_number: int = 0
    chunk_id: Optional[str] = None

    def to_chunk(self) -> Chunk:
        return Chunk(
            content=self.content,
            chunk_index=self.chunk_index,
            page_number=self.page_number,
            chunk_id=self.chunk_id,
        )

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> "ChunkPayload":
        return cls(
            content=chunk.content,
            chunk_index=chunk.chunk_index,
            page_number=chunk.page_number,
            chunk_id=chunk.chunk_id,
        )


class ChunkTextRequest(BaseModel):
    text: str
    chunk_size: int = CHUNK_SIZE
    overlap: int = CHUNK_OVERLAP


class ChunkTextResponse(BaseModel):
    chunks: List[ChunkPayload]
    total_chunks: int


class RelevantChunksRequest(BaseModel):
    chunks: List[ChunkPayload]
    query: str
    max_chunks: int = Field(default=MAX_RELEVANT_CHUNKS, gt=0)


class RelevantChunksResponse(BaseModel):
    chunks: List[ChunkPayload]
    relevant_chunk_indices: List[int]


class ChatRequest(BaseModel):
    question: str
    chunks: List[ChunkPayload]


class ChatResponse(BaseModel):
    question: str
    answer: str
    relevant_chunk_indices: List[int]


class ExplainConceptRequest(BaseModel):
    concept: str
    chunks: List[ChunkPayload]


class ExplainConceptResponse(BaseModel):
    concept: str
    explanation: str
    relevant_chunk_indices: List[int]


class FlashcardsRequest(BaseModel):
    text: str
    count: int = Field(default=FLASHCARD_COUNT, gt=0)


class FlashcardPayload(BaseModel):
    question: str
    answer: str
    difficulty: str


class FlashcardsResponse(BaseModel):
    flashcards: List[FlashcardPayload]


class QuizRequest(BaseModel):
    text: str
    num_questions: int = Field(default=QUIZ_QUESTION_COUNT, gt=0)


class QuizQuestionPayload(BaseModel):
    question: str
    options: List[str]
    correct_answer: str
    explanation: str
    difficulty: str


class QuizResponse(BaseModel):
    questions: List[QuizQuestionPayload]


class SummaryRequest(BaseModel):
    text: str


class SummaryResponse(BaseModel):
    summary: str
