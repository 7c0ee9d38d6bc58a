"""
PDF helpers.

    page_count: Quick page count without full extraction.
    extract_pdf_text: Page-ordered text extraction with pdfplumber.
"""

import io
from pathlib import Path
from typing import Optional, Union

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except (OSError, PdfReadError):
        return None


def extract_pdf_text(source: Union[Path, bytes]) -> str:
    """
    Extract text from every page of a PDF, pages separated by newlines.

    Args:
        source: Path to a PDF file, or the raw PDF bytes

    Returns:
        Concatenated page text (pages without a text layer contribute nothing)
    """
    handle = io.BytesIO(source) if isinstance(source, bytes) else str(source)

    pages = []
    with pdfplumber.open(handle) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            if text:
                pages.append(text)

    return "\n".join(pages)
