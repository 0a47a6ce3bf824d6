"""Document data models."""
from dataclasses import dataclass, field
from typing import List

from .chunk import Chunk


@dataclass
class Page:
    """Represents a single page from a document."""
    page_number: int
    text: str
    word_count: int


@dataclass
class Document:
    """Represents a loaded PDF document and its current chunk list."""
    filename: str
    pages: List[Page]
    total_pages: int
    chunks: List[Chunk] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Full extracted text, pages separated by a blank line."""
        return "\n\n".join(page.text for page in self.pages if page.text.strip())
