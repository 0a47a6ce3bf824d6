"""Chunking engine: paragraph-aware word windows with overlap."""
import logging
import re
from typing import Iterator, List

from models.chunk import Chunk
from models.document import Document
from config import CHUNK_SIZE, CHUNK_OVERLAP

logger = logging.getLogger(__name__)

_HORIZONTAL_WS = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" *\n *")
_BLANK_LINE_RUN = re.compile(r"\n{3,}")
_PARAGRAPH_BREAK = re.compile(r"\n+")


class ChunkingConfigError(ValueError):
    """Raised when chunk size and overlap cannot produce an advancing window."""


class ChunkingEngine:
    """Splits extracted document text into ordered, overlapping chunks."""

    def __init__(self, chunk_size: int = CHUNK_SIZE, chunk_overlap: int = CHUNK_OVERLAP):
        """
        Initialize ChunkingEngine.

        Args:
            chunk_size: Target chunk size in words
            chunk_overlap: Trailing words carried into the next chunk

        Raises:
            ChunkingConfigError: If chunk_size is not positive or the overlap
                is outside [0, chunk_size)
        """
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
            raise ChunkingConfigError(f"chunk_size must be a positive integer, got {chunk_size!r}")
        if isinstance(chunk_overlap, bool) or not isinstance(chunk_overlap, int):
            raise ChunkingConfigError(f"chunk_overlap must be an integer, got {chunk_overlap!r}")
        if not 0 <= chunk_overlap < chunk_size:
            raise ChunkingConfigError(
                f"chunk_overlap must satisfy 0 <= overlap < chunk_size "
                f"(overlap={chunk_overlap}, chunk_size={chunk_size})"
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def stride(self) -> int:
        return self.chunk_size - self.chunk_overlap

    @staticmethod
    def normalize_text(text: str) -> str:
        """
        Normalize whitespace while keeping line structure.

        Line endings become ``\\n``, runs of spaces/tabs collapse to a single
        space, spaces around line breaks are dropped and blank-line runs are
        capped at one blank line.
        """
        if not text:
            return ""
        cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
        cleaned = _HORIZONTAL_WS.sub(" ", cleaned)
        cleaned = _SPACE_AROUND_NEWLINE.sub("\n", cleaned)
        cleaned = _BLANK_LINE_RUN.sub("\n\n", cleaned)
        return cleaned.strip()

    def chunk_text(self, text: str) -> List[Chunk]:
        """
        Chunk text into paragraph-aware windows.

        Paragraphs are packed together until the next one would overflow
        ``chunk_size``; the following chunk then starts with the last
        ``chunk_overlap`` words of the flushed one. Paragraphs longer than
        ``chunk_size`` are cut with a sliding word window.

        Args:
            text: Extracted document text (may be empty)

        Returns:
            Chunks with chunk_index 0..n-1 in emission order
        """
        cleaned = self.normalize_text(text)
        if not cleaned:
            return []

        paragraphs = [p.strip() for p in _PARAGRAPH_BREAK.split(cleaned) if p.strip()]

        chunks: List[Chunk] = []
        pending: List[str] = []
        pending_words = 0

        for paragraph in paragraphs:
            words = paragraph.split()
            word_count = len(words)

            if word_count > self.chunk_size:
                if pending:
                    chunks.append(self._make_chunk("\n\n".join(pending), len(chunks)))
                    pending = []
                    pending_words = 0
                for window in self._windows(words):
                    chunks.append(self._make_chunk(window, len(chunks)))
                continue

            if pending and pending_words + word_count > self.chunk_size:
                chunks.append(self._make_chunk("\n\n".join(pending), len(chunks)))

                tail = self._overlap_tail(" ".join(pending).split(), word_count)
                if tail:
                    pending = [" ".join(tail), paragraph]
                else:
                    pending = [paragraph]
                pending_words = len(tail) + word_count
            else:
                pending.append(paragraph)
                pending_words += word_count

        if pending:
            chunks.append(self._make_chunk("\n\n".join(pending), len(chunks)))

        # Plain word windows when paragraph splitting produced nothing
        if not chunks:
            logger.debug("No paragraph chunks produced, falling back to plain word windows")
            for window in self._windows(cleaned.split()):
                chunks.append(self._make_chunk(window, len(chunks)))

        logger.info(
            f"Created {len(chunks)} chunks from {len(paragraphs)} paragraphs "
            f"(chunk_size={self.chunk_size}, overlap={self.chunk_overlap})"
        )
        return chunks

    def chunk_document(self, document: Document) -> List[Chunk]:
        """
        Chunk a loaded document and replace its chunk list.

        Args:
            document: Document with extracted page text

        Returns:
            The new chunk list, also assigned to ``document.chunks``
        """
        logger.info(f"Chunking document: {document.filename}")
        chunks = self.chunk_text(document.text)
        document.chunks = chunks
        return chunks

    def _windows(self, words: List[str]) -> Iterator[str]:
        """Slide a chunk_size window with stride chunk_size - overlap; stop once a window reaches the end."""
        for start in range(0, len(words), self.stride):
            yield " ".join(words[start:start + self.chunk_size])
            if start + self.chunk_size >= len(words):
                break

    def _overlap_tail(self, flushed_words: List[str], next_word_count: int) -> List[str]:
        """
        Trailing words of a flushed chunk to seed the next one.

        Capped so that tail plus the incoming paragraph stays within chunk_size.
        """
        take = min(self.chunk_overlap, len(flushed_words), self.chunk_size - next_word_count)
        if take <= 0:
            return []
        return flushed_words[-take:]

    @staticmethod
    def _make_chunk(content: str, chunk_index: int) -> Chunk:
        return Chunk(content=content, chunk_index=chunk_index, page_number=0)
