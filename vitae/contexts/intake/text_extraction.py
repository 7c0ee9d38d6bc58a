"""
File-to-text extraction for uploaded resumes.

Supports PDF (pdfplumber), DOCX (python-docx) and plain text. The extracted
text is handed to the parsers unchanged; cleanup belongs to the normalizer.
"""

import io
import zipfile
from pathlib import Path
from typing import Union

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from pdfminer.pdfparser import PDFSyntaxError
from pdfplumber.utils.exceptions import PdfminerException

from vitae.contexts.intake.logger import _log_debug
from vitae.utils.pdf_processing import extract_pdf_text

SUPPORTED_FILE_TYPES = ("pdf", "docx", "txt", "md")


class TextExtractionError(Exception):
    """Raised when a supported file cannot be read."""


class UnsupportedFileTypeError(ValueError):
    """Raised for file types other than SUPPORTED_FILE_TYPES."""

    def __init__(self, file_type: str):
        self.file_type = file_type
        super().__init__(
            f"Unsupported file type '{file_type}'. Supported: {', '.join(SUPPORTED_FILE_TYPES)}"
        )


def _docx_text(data: bytes) -> str:
    """Paragraph text followed by table rows (cells joined with ' | ')."""
    document = Document(io.BytesIO(data))
    parts = [paragraph.text for paragraph in document.paragraphs if paragraph.text.strip()]

    # Many resume templates lay out contact info and skills in tables
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                parts.append(" | ".join(cells))

    return "\n".join(parts)


def _normalize_file_type(file_type: str) -> str:
    return file_type.lower().lstrip(".")


def extract_text_from_bytes(data: bytes, file_type: str) -> str:
    """
    Extract text from uploaded file contents.

    Args:
        data: Raw file bytes
        file_type: Extension or type name ("pdf", ".docx", "txt", ...)

    Returns:
        Extracted text (may be empty for image-only PDFs)

    Raises:
        UnsupportedFileTypeError: Unknown file type
        TextExtractionError: Corrupt or unreadable file
    """
    file_type = _normalize_file_type(file_type)
    if file_type not in SUPPORTED_FILE_TYPES:
        raise UnsupportedFileTypeError(file_type)

    try:
        if file_type == "pdf":
            text = extract_pdf_text(data)
        elif file_type == "docx":
            text = _docx_text(data)
        else:
            text = data.decode("utf-8", errors="replace")
    except (
        PdfminerException,
        PDFSyntaxError,
        PackageNotFoundError,
        zipfile.BadZipFile,
        KeyError,
        ValueError,
        OSError,
    ) as e:
        raise TextExtractionError(f"Could not read {file_type.upper()} file: {e}") from e

    _log_debug(f"Extracted {len(text)} characters from {file_type} upload")
    return text


def extract_text(path: Union[str, Path]) -> str:
    """
    Extract text from a resume file on disk.

    Args:
        path: Path to a .pdf, .docx, .txt or .md file

    Raises:
        FileNotFoundError: Path does not exist
        UnsupportedFileTypeError: Unknown extension
        TextExtractionError: Corrupt or unreadable file
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume file not found: {path}")
    return extract_text_from_bytes(path.read_bytes(), path.suffix)
