"""Study material models produced from generated text."""
from dataclasses import dataclass, field
from typing import List

DIFFICULTIES = ("easy", "medium", "hard")


@dataclass
class Flashcard:
    """A single question/answer card."""
    question: str
    answer: str
    difficulty: str = "medium"


@dataclass
class QuizQuestion:
    """
    A multiple-choice question.

    Attributes:
        question: Question text
        options: Exactly four answer options
        correct_answer: The correct option, as written in ``options``
        explanation: Short reasoning for the correct answer
        difficulty: One of easy, medium or hard
    """
    question: str
    options: List[str]
    correct_answer: str
    explanation: str = ""
    difficulty: str = "medium"


@dataclass
class ChatAnswer:
    """Answer to a document question with the chunks that supported it."""
    question: str
    answer: str
    relevant_chunk_indices: List[int] = field(default_factory=list)


@dataclass
class ConceptExplanation:
    """Explanation of a concept with the chunks that supported it."""
    concept: str
    explanation: str
    relevant_chunk_indices: List[int] = field(default_factory=list)
