"""
Document Ingestion Script for the PDF Study Assistant.

This script:
1. Loads all PDFs from a directory
2. Chunks each document's extracted text
3. Writes one <name>.chunks.json file per document

Usage:
    python ingest_documents.py documents/ --output chunks/
"""
import sys
import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from services.document_loader import DocumentLoader
from services.chunking_engine import ChunkingEngine, ChunkingConfigError
from models.document import Document
from config import CHUNK_SIZE, CHUNK_OVERLAP, LOG_LEVEL, LOG_FORMAT
from logger import setup_logging

logger = logging.getLogger(__name__)


def write_chunks(document: Document, output_dir: Path) -> Path:
    """
    Write a document's chunk list as JSON.

    Args:
        document: Chunked document
        output_dir: Destination directory (created if missing)

    Returns:
        Path of the written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{Path(document.filename).stem}.chunks.json"

    payload = {
        "filename": document.filename,
        "total_pages": document.total_pages,
        "total_chunks": len(document.chunks),
        "chunks": [asdict(chunk) for chunk in document.chunks],
    }
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    return output_path


def ingest(docs_directory: str, output_dir: str, chunk_size: int, overlap: int) -> List[Path]:
    """Load, chunk and write every PDF in docs_directory."""
    engine = ChunkingEngine(chunk_size=chunk_size, chunk_overlap=overlap)
    documents = DocumentLoader(docs_directory).load_documents()

    written = []
    for document in documents:
        engine.chunk_document(document)
        if not document.chunks:
            logger.warning(f"No text extracted from {document.filename}, skipping")
            continue
        path = write_chunks(document, Path(output_dir))
        logger.info(f"✓ {document.filename}: {len(document.chunks)} chunks -> {path}")
        written.append(path)

    logger.info(f"Ingested {len(written)} of {len(documents)} documents")
    return written


def main(argv: Optional[List[str]] = None) -> int:
    """Main ingestion process."""
    parser = argparse.ArgumentParser(
        description="Chunk PDF documents for the PDF Study Assistant"
    )
    parser.add_argument(
        "docs_directory",
        help="Directory containing PDF files"
    )
    parser.add_argument(
        "--output",
        default="chunks",
        help="Output directory for chunk JSON files (default: chunks)"
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=CHUNK_SIZE,
        help=f"Target chunk size in words (default: {CHUNK_SIZE})"
    )
    parser.add_argument(
        "--overlap",
        type=int,
        default=CHUNK_OVERLAP,
        help=f"Words carried over between chunks (default: {CHUNK_OVERLAP})"
    )

    args = parser.parse_args(argv)
    setup_logging(LOG_LEVEL, LOG_FORMAT)

    try:
        ingest(args.docs_directory, args.output, args.chunk_size, args.overlap)
    except ChunkingConfigError as e:
        logger.error(f"Invalid chunking configuration: {e}")
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
