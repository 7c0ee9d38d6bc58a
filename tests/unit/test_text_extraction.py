"""Unit tests for file-to-text extraction."""

import io

import pytest
from docx import Document

from vitae.contexts.intake.text_extraction import (
    TextExtractionError,
    UnsupportedFileTypeError,
    extract_text,
    extract_text_from_bytes,
)


def _docx_bytes() -> bytes:
    document = Document()
    document.add_paragraph("Jane Doe")
    document.add_paragraph("")
    document.add_paragraph("Skills")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Python"
    table.rows[0].cells[1].text = "SQL"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.mark.unit
@pytest.mark.parametrize("file_type", ["txt", ".md", "TXT"])
def test_plain_text(file_type):
    assert extract_text_from_bytes("Jane Doe\nEngineer".encode("utf-8"), file_type) == "Jane Doe\nEngineer"


@pytest.mark.unit
def test_docx_paragraphs_then_tables():
    assert extract_text_from_bytes(_docx_bytes(), "docx") == "Jane Doe\nSkills\nPython | SQL"


@pytest.mark.unit
@pytest.mark.parametrize("file_type", ["pdf", "docx"])
def test_corrupt_files(file_type):
    with pytest.raises(TextExtractionError):
        extract_text_from_bytes(b"definitely not a document", file_type)


@pytest.mark.unit
def test_unsupported_type():
    with pytest.raises(UnsupportedFileTypeError) as exc_info:
        extract_text_from_bytes(b"", "rtf")
    assert exc_info.value.file_type == "rtf"
    assert isinstance(exc_info.value, ValueError)


@pytest.mark.unit
def test_extract_text_from_path(tmp_path):
    path = tmp_path / "resume.docx"
    path.write_bytes(_docx_bytes())
    assert extract_text(path).startswith("Jane Doe")


@pytest.mark.unit
def test_extract_text_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        extract_text(tmp_path / "missing.pdf")
