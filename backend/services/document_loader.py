"""Document loading service for PDF text extraction."""
import logging
import os
from typing import List
import fitz  # PyMuPDF

from models.document import Document, Page

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Loads PDF files and extracts their text page by page."""

    def __init__(self, docs_directory: str = "documents"):
        """
        Initialize DocumentLoader.

        Args:
            docs_directory: Path to directory containing PDF files
        """
        self.docs_directory = docs_directory

    def load_documents(self) -> List[Document]:
        """
        Load all PDF files from the documents directory.

        Files that fail to parse are logged and skipped.

        Returns:
            List of Document objects in filename order
        """
        documents = []

        if not os.path.isdir(self.docs_directory):
            logger.error(f"Documents directory not found: {self.docs_directory}")
            return documents

        pdf_files = sorted(
            f for f in os.listdir(self.docs_directory) if f.lower().endswith(".pdf")
        )
        logger.info(f"Found {len(pdf_files)} PDF files in {self.docs_directory}")

        for filename in pdf_files:
            filepath = os.path.join(self.docs_directory, filename)
            try:
                document = self.load_pdf(filepath)
            except Exception as e:
                logger.error(f"Error loading {filename}: {e}", exc_info=True)
                continue
            documents.append(document)
            logger.info(f"Loaded {filename}: {document.total_pages} pages")

        logger.info(f"Successfully loaded {len(documents)} documents")
        return documents

    def load_pdf(self, filepath: str) -> Document:
        """
        Extract text from a single PDF.

        Args:
            filepath: Path to the PDF file

        Returns:
            Document with one Page per PDF page, numbered from 1

        Raises:
            Exception: Whatever PyMuPDF raises for missing or corrupt files
        """
        filename = os.path.basename(filepath)
        try:
            with fitz.open(filepath) as pdf_document:
                pages = []
                for page_index, page in enumerate(pdf_document):
                    text = page.get_text()
                    pages.append(Page(
                        page_number=page_index + 1,
                        text=text,
                        word_count=len(text.split())
                    ))
        except Exception as e:
            logger.error(f"Failed to load PDF {filename}: {e}")
            raise

        return Document(filename=filename, pages=pages, total_pages=len(pages))
