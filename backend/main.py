"""Main entry point for the PDF Study Assistant API."""
import logging
from contextlib import contextmanager
from dataclasses import asdict
from typing import Optional
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import PORT, CORS_ORIGINS, LOG_LEVEL, LOG_FORMAT
from logger import setup_logging
from models.api import (
    ChunkPayload,
    ChunkTextRequest,
    ChunkTextResponse,
    RelevantChunksRequest,
    RelevantChunksResponse,
    ChatRequest,
    ChatResponse,
    ExplainConceptRequest,
    ExplainConceptResponse,
    FlashcardsRequest,
    FlashcardPayload,
    FlashcardsResponse,
    QuizRequest,
    QuizQuestionPayload,
    QuizResponse,
    SummaryRequest,
    SummaryResponse,
)
from services.chunking_engine import ChunkingEngine, ChunkingConfigError
from services.retrieval_engine import RetrievalEngine
from services.llm_client import LLMClient, LLMClientError
from services.study_generator import StudyGenerator

logger = logging.getLogger(__name__)

app = FastAPI(
    title="PDF Study Assistant",
    description="Chunking, retrieval and study material generation for uploaded PDFs",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Stateless ranker shared by all requests
retrieval_engine = RetrievalEngine()

# Requires GROQ_API_KEY; set on startup
study_generator: Optional[StudyGenerator] = None


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    global study_generator

    setup_logging(LOG_LEVEL, LOG_FORMAT)
    logger.info("Initializing PDF Study Assistant services...")

    try:
        llm_client = LLMClient()
    except ValueError as e:
        logger.warning(f"AI endpoints disabled: {e}")
        return

    study_generator = StudyGenerator(llm_client, retrieval_engine)
    logger.info("All services initialized successfully")


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "service": "pdf-study-assistant",
        "version": "1.0.0",
        "ai_enabled": study_generator is not None
    }


@app.post("/documents/chunks", response_model=ChunkTextResponse)
async def chunk_document_text(request: ChunkTextRequest) -> ChunkTextResponse:
    """
    Split extracted document text into overlapping chunks.

    The returned list is meant to be stored with the document and replaced
    wholesale when the document is processed again.
    """
    try:
        engine = ChunkingEngine(chunk_size=request.chunk_size, chunk_overlap=request.overlap)
    except ChunkingConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))

    chunks = engine.chunk_text(request.text)
    return ChunkTextResponse(
        chunks=[ChunkPayload.from_chunk(chunk) for chunk in chunks],
        total_chunks=len(chunks)
    )


@app.post("/documents/relevant-chunks", response_model=RelevantChunksResponse)
async def relevant_chunks(request: RelevantChunksRequest) -> RelevantChunksResponse:
    """Rank a document's chunks against a query and return the best ones."""
    chunks = [payload.to_chunk() for payload in request.chunks]
    selected = retrieval_engine.find_relevant(chunks, request.query, max_chunks=request.max_chunks)
    return RelevantChunksResponse(
        chunks=[ChunkPayload.from_chunk(chunk) for chunk in selected],
        relevant_chunk_indices=[chunk.chunk_index for chunk in selected]
    )


@app.post("/ai/chat", response_model=ChatResponse)
def chat(request: ChatRequest) -> ChatResponse:
    """Answer a question from the document's most relevant chunks."""
    _require(request.question, "question")
    generator = _generator()
    with _llm_errors():
        result = generator.chat(request.question, [p.to_chunk() for p in request.chunks])
    return ChatResponse(**asdict(result))


@app.post("/ai/explain-concept", response_model=ExplainConceptResponse)
def explain_concept(request: ExplainConceptRequest) -> ExplainConceptResponse:
    _require(request.concept, "concept")
    generator = _generator()
    with _llm_errors():
        result = generator.explain_concept(request.concept, [p.to_chunk() for p in request.chunks])
    return ExplainConceptResponse(**asdict(result))


@app.post("/ai/flashcards", response_model=FlashcardsResponse)
def flashcards(request: FlashcardsRequest) -> FlashcardsResponse:
    _require(request.text, "text")
    generator = _generator()
    with _llm_errors():
        cards = generator.generate_flashcards(request.text, request.count)
    return FlashcardsResponse(flashcards=[FlashcardPayload(**asdict(card)) for card in cards])


@app.post("/ai/quiz", response_model=QuizResponse)
def quiz(request: QuizRequest) -> QuizResponse:
    _require(request.text, "text")
    generator = _generator()
    with _llm_errors():
        questions = generator.generate_quiz(request.text, request.num_questions)
    return QuizResponse(questions=[QuizQuestionPayload(**asdict(q)) for q in questions])


@app.post("/ai/summary", response_model=SummaryResponse)
def summary(request: SummaryRequest) -> SummaryResponse:
    _require(request.text, "text")
    generator = _generator()
    with _llm_errors():
        text = generator.generate_summary(request.text)
    return SummaryResponse(summary=text)


def _require(value: str, field_name: str) -> None:
    if not value or not value.strip():
        raise HTTPException(status_code=400, detail=f"{field_name} field is required and cannot be empty")


def _generator() -> StudyGenerator:
    if study_generator is None:
        raise HTTPException(status_code=503, detail="AI generation is not configured")
    return study_generator


@contextmanager
def _llm_errors():
    """Map generation failures to HTTP errors."""
    try:
        yield
    except HTTPException:
        raise
    except LLMClientError as e:
        logger.error(f"LLM client error: {e.error.message}")
        raise HTTPException(
            status_code=503,
            detail={
                "error": {
                    "code": e.error.code,
                    "message": e.error.message,
                    "details": e.error.details
                }
            }
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error during generation: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )


if __name__ == "__main__":
    import uvicorn
    setup_logging(LOG_LEVEL, LOG_FORMAT)
    logger.info(f"Starting PDF Study Assistant API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
