"""Tests for the document ingestion script."""
import json
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import fitz  # PyMuPDF
from ingest_documents import main


def write_pdf(path, text):
    pdf = fitz.open()
    pdf.new_page().insert_text((72, 72), text)
    pdf.save(str(path))
    pdf.close()


class TestIngestDocuments:

    def test_writes_chunk_json_per_document(self, tmp_path):
        docs = tmp_path / "docs"
        docs.mkdir()
        write_pdf(docs / "enzymes.pdf", "Enzymes lower activation energy")
        out = tmp_path / "out"

        exit_code = main([str(docs), "--output", str(out), "--chunk-size", "3", "--overlap", "1"])

        assert exit_code == 0
        data = json.loads((out / "enzymes.chunks.json").read_text(encoding="utf-8"))
        assert data["filename"] == "enzymes.pdf"
        assert data["total_pages"] == 1
        assert data["total_chunks"] == len(data["chunks"]) == 2
        assert data["chunks"][0] == {
            "content": "Enzymes lower activation",
            "chunk_index": 0,
            "page_number": 0,
            "chunk_id": None,
        }
        assert data["chunks"][1]["content"] == "activation energy"

    def test_invalid_configuration_exits_non_zero(self, tmp_path):
        assert main([str(tmp_path), "--chunk-size", "5", "--overlap", "5"]) == 2
