"""Study material generation on top of retrieval and the LLM client."""
import logging
import re
from typing import List, Sequence

from models.chunk import Chunk
from models.study import DIFFICULTIES, Flashcard, QuizQuestion, ChatAnswer, ConceptExplanation
from services.llm_client import LLMClient
from services.retrieval_engine import RetrievalEngine
from config import FLASHCARD_COUNT, QUIZ_QUESTION_COUNT

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "---"
QUIZ_OPTION_COUNT = 4

_OPTION_LINE = re.compile(r"^O\d+:")


class StudyGenerator:
    """Generates answers, explanations, flashcards, quizzes and summaries for a document."""

    def __init__(self, llm_client: LLMClient, retrieval_engine: RetrievalEngine):
        """
        Initialize the generator.

        Args:
            llm_client: Client used for every generation call
            retrieval_engine: Ranker that picks context chunks for chat and explanations
        """
        self.llm_client = llm_client
        self.retrieval_engine = retrieval_engine

    def chat(self, question: str, chunks: Sequence[Chunk]) -> ChatAnswer:
        """
        Answer a question about a document from its most relevant chunks.

        Args:
            question: User question
            chunks: The document's chunk list

        Returns:
            ChatAnswer with the chunk indices that were given to the model

        Raises:
            ValueError: If the question is empty
            LLMClientError: If generation fails
        """
        if not question or not question.strip():
            raise ValueError("question must not be empty")

        relevant = self.retrieval_engine.find_relevant(chunks, question)
        indices = [chunk.chunk_index for chunk in relevant]
        logger.info(f"Answering question with chunks {indices}")

        prompt = LLMClient.build_chat_prompt(question, relevant)
        response = self.llm_client.generate(prompt)

        return ChatAnswer(question=question, answer=response.text, relevant_chunk_indices=indices)

    def explain_concept(self, concept: str, chunks: Sequence[Chunk]) -> ConceptExplanation:
        """Explain a concept using the chunks most relevant to it."""
        if not concept or not concept.strip():
            raise ValueError("concept must not be empty")

        relevant = self.retrieval_engine.find_relevant(chunks, concept)
        context = "\n\n".join(chunk.content for chunk in relevant)

        prompt = LLMClient.build_explain_prompt(concept, context)
        response = self.llm_client.generate(prompt)

        return ConceptExplanation(
            concept=concept,
            explanation=response.text,
            relevant_chunk_indices=[chunk.chunk_index for chunk in relevant]
        )

    def generate_flashcards(self, text: str, count: int = FLASHCARD_COUNT) -> List[Flashcard]:
        """Generate up to ``count`` flashcards from document text."""
        self._require_text(text)
        response = self.llm_client.generate(LLMClient.build_flashcards_prompt(text, count))
        flashcards = self.parse_flashcards(response.text, count)
        logger.info(f"Parsed {len(flashcards)} of {count} requested flashcards")
        return flashcards

    def generate_quiz(self, text: str, num_questions: int = QUIZ_QUESTION_COUNT) -> List[QuizQuestion]:
        """Generate up to ``num_questions`` multiple-choice questions from document text."""
        self._require_text(text)
        response = self.llm_client.generate(LLMClient.build_quiz_prompt(text, num_questions))
        questions = self.parse_quiz(response.text, num_questions)
        logger.info(f"Parsed {len(questions)} of {num_questions} requested quiz questions")
        return questions

    def generate_summary(self, text: str) -> str:
        self._require_text(text)
        return self.llm_client.generate(LLMClient.build_summary_prompt(text)).text

    @staticmethod
    def parse_flashcards(raw: str, count: int) -> List[Flashcard]:
        """
        Parse ``Q:``/``A:``/``D:`` blocks separated by ``---``.

        Blocks missing a question or an answer are dropped. Unknown
        difficulties fall back to medium.
        """
        flashcards = []
        for block in _blocks(raw):
            question, answer, difficulty = "", "", "medium"
            for line in block.splitlines():
                line = line.strip()
                if line.startswith("Q:"):
                    question = line[2:].strip()
                elif line.startswith("A:"):
                    answer = line[2:].strip()
                elif line.startswith("D:"):
                    difficulty = _difficulty(line[2:], difficulty)

            if question and answer:
                flashcards.append(Flashcard(question=question, answer=answer, difficulty=difficulty))

        return flashcards[:count]

    @staticmethod
    def parse_quiz(raw: str, num_questions: int) -> List[QuizQuestion]:
        """
        Parse ``Q:``/``O<n>:``/``C:``/``E:``/``D:`` blocks separated by ``---``.

        A question is kept only with exactly four options and a correct answer.
        """
        questions = []
        for block in _blocks(raw):
            question, correct, explanation, difficulty = "", "", "", "medium"
            options: List[str] = []
            for line in block.splitlines():
                line = line.strip()
                if line.startswith("Q:"):
                    question = line[2:].strip()
                elif _OPTION_LINE.match(line):
                    options.append(_OPTION_LINE.sub("", line, count=1).strip())
                elif line.startswith("C:"):
                    correct = line[2:].strip()
                elif line.startswith("E:"):
                    explanation = line[2:].strip()
                elif line.startswith("D:"):
                    difficulty = _difficulty(line[2:], difficulty)

            if question and len(options) == QUIZ_OPTION_COUNT and correct:
                questions.append(QuizQuestion(
                    question=question,
                    options=options,
                    correct_answer=correct,
                    explanation=explanation,
                    difficulty=difficulty
                ))

        return questions[:num_questions]

    @staticmethod
    def _require_text(text: str) -> None:
        if not text or not text.strip():
            raise ValueError("text must not be empty")


def _blocks(raw: str) -> List[str]:
    return [block.strip() for block in (raw or "").split(BLOCK_SEPARATOR) if block.strip()]


def _difficulty(value: str, default: str) -> str:
    value = value.strip().lower()
    return value if value in DIFFICULTIES else default
