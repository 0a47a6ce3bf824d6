"""LLM Client for Groq API integration and study prompt templates."""
import time
from dataclasses import dataclass
from typing import Optional, Dict, Any, Sequence
from groq import Groq
from groq import RateLimitError, AuthenticationError, APIError, APITimeoutError
import logging

from models.chunk import Chunk
from config import (
    GROQ_API_KEY,
    GENERATION_MODEL,
    GENERATION_MAX_TOKENS,
    FLASHCARD_TEXT_LIMIT,
    QUIZ_TEXT_LIMIT,
    SUMMARY_TEXT_LIMIT,
    EXPLAIN_CONTEXT_LIMIT,
)

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM generation."""
    text: str
    tokens_input: int
    tokens_output: int
    latency_ms: int
    model_used: str


@dataclass
class LLMError:
    """Structured error response from LLM operations."""
    code: str
    message: str
    details: Dict[str, Any]


class LLMClientError(Exception):
    """Custom exception for LLM client errors with structured error information."""

    def __init__(self, error: LLMError):
        self.error = error
        super().__init__(error.message)


class LLMClient:
    """Client for interfacing with Groq API for text generation."""

    def __init__(self, api_key: Optional[str] = None, model: str = GENERATION_MODEL):
        """
        Initialize LLM client with Groq API key.

        Args:
            api_key: Groq API key (defaults to GROQ_API_KEY from environment)
            model: Chat model used for every generation
        """
        self.api_key = api_key or GROQ_API_KEY
        if not self.api_key:
            raise ValueError("GROQ_API_KEY must be provided or set in environment")

        self.model = model
        self.client = Groq(api_key=self.api_key)
        logger.info(f"LLMClient initialized with model {model}")

    def generate(self, prompt: str, max_tokens: int = GENERATION_MAX_TOKENS) -> LLMResponse:
        """
        Generate a completion for a single-turn prompt.

        Args:
            prompt: Complete prompt text
            max_tokens: Maximum tokens to generate

        Returns:
            LLMResponse with text, token counts, and latency

        Raises:
            LLMClientError: Structured error with code, message, and details
        """
        start_time = time.time()

        try:
            logger.debug(f"Generating response with model: {self.model}")

            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
                temperature=0.7
            )
        except RateLimitError as e:
            raise self._error(
                "RATE_LIMIT_ERROR",
                "Rate limit exceeded. Please try again in a few moments.",
                e, start_time, retry_after=60
            )
        except AuthenticationError as e:
            raise self._error(
                "AUTHENTICATION_ERROR",
                "Authentication failed. Please check your API key.",
                e, start_time
            )
        except APITimeoutError as e:
            raise self._error("TIMEOUT_ERROR", "Request timed out. Please try again.", e, start_time)
        except APIError as e:
            raise self._error("API_ERROR", f"Groq API error: {e}", e, start_time)
        except Exception as e:
            raise self._error(
                "UNKNOWN_ERROR",
                f"Unexpected error during generation: {e}",
                e, start_time, error_type=type(e).__name__
            )

        latency_ms = int((time.time() - start_time) * 1000)
        text = response.choices[0].message.content or ""
        tokens_input = response.usage.prompt_tokens
        tokens_output = response.usage.completion_tokens

        logger.info(
            f"Generated response: model={self.model}, "
            f"input_tokens={tokens_input}, output_tokens={tokens_output}, "
            f"latency={latency_ms}ms"
        )

        return LLMResponse(
            text=text,
            tokens_input=tokens_input,
            tokens_output=tokens_output,
            latency_ms=latency_ms,
            model_used=self.model
        )

    def _error(
        self,
        code: str,
        message: str,
        cause: Exception,
        start_time: float,
        **extra_details: Any
    ) -> LLMClientError:
        latency_ms = int((time.time() - start_time) * 1000)
        details = {
            "model": self.model,
            "latency_ms": latency_ms,
            "original_error": str(cause),
            **extra_details
        }
        error = LLMError(code=code, message=message, details=details)
        logger.error(
            f"{code}: model={self.model}, latency={latency_ms}ms, error={cause}",
            exc_info=True,
            extra={"error_code": code, "error_details": details}
        )
        return LLMClientError(error)

    @staticmethod
    def build_chat_prompt(question: str, chunks: Sequence[Chunk]) -> str:
        """
        Build a question-answering prompt over retrieved chunks.

        Args:
            question: User question
            chunks: Relevant chunks, best first

        Returns:
            Complete prompt string
        """
        context = "\n\n".join(
            f"[Chunk {position}]\n{chunk.content}"
            for position, chunk in enumerate(chunks, start=1)
        )

        return f"""Based on the following context from a document, analyse the context and answer the user's question.
If the answer is not in the context, say so.

Context:
{context}

Question: {question}

Answer:"""

    @staticmethod
    def build_explain_prompt(concept: str, context: str) -> str:
        """Build a prompt asking for an explanation of one concept."""
        return f"""Explain the concept of "{concept}" based on the following context.
Provide a clear, educational explanation that's easy to understand.
Include examples if relevant.

Context:
{context[:EXPLAIN_CONTEXT_LIMIT]}"""

    @staticmethod
    def build_flashcards_prompt(text: str, count: int) -> str:
        """Build a prompt for ``count`` flashcards in the Q/A/D block format."""
        return f"""Generate exactly {count} educational flashcards from the following text.
STRICT Format each flashcard as:
Q: [clear, specific question]
A: [concise, accurate answer]
D: [Difficulty level: easy, medium, or hard]

Separate each flashcard with "---"

Text:
{text[:FLASHCARD_TEXT_LIMIT]}"""

    @staticmethod
    def build_quiz_prompt(text: str, num_questions: int) -> str:
        """Build a prompt for multiple-choice questions in the Q/O1-O4/C/E/D block format."""
        return f"""Generate exactly {num_questions} multiple choice questions from the following text.
STRICT Format each question as:
Q: [Question]
O1: [Option 1]
O2: [Option 2]
O3: [Option 3]
O4: [Option 4]
C: [Correct option - exactly as written above]
E: [Brief explanation]
D: [Difficulty: easy, medium, or hard]

Separate questions with "---"

Text:
{text[:QUIZ_TEXT_LIMIT]}"""

    @staticmethod
    def build_summary_prompt(text: str) -> str:
        return f"""Provide a concise summary of the following text, highlighting the key concepts, main ideas, and important points.
Keep the summary clear and structured.

Text:
{text[:SUMMARY_TEXT_LIMIT]}"""
