"""Text extraction from uploaded resume files (PDF, DOCX, DOC, TXT)."""
import io
import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

import pdfplumber
import pytesseract
from docx import Document
from pdf2image import convert_from_bytes

from resumatch.exceptions import DocumentDecodeError, EmptyDocumentError, UnsupportedFormatError

logger = logging.getLogger(__name__)


MIME_FORMATS = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/msword": "doc",
    "text/plain": "txt",
}
EXTENSION_FORMATS = {".pdf": "pdf", ".docx": "docx", ".doc": "doc", ".txt": "txt"}

CONTROL_CHARACTERS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")


@dataclass
class ExtractedDocument:
    text: str
    page_count: Optional[int] = None


def resolve_format(mime_type: Optional[str], file_name: Optional[str]) -> str:
    """Decide the document format from the MIME type first, then the file extension."""
    if mime_type:
        declared = MIME_FORMATS.get(mime_type.split(";")[0].strip().lower())
        if declared:
            return declared

    extension = os.path.splitext(file_name or "")[1].lower()
    if extension in EXTENSION_FORMATS:
        return EXTENSION_FORMATS[extension]

    raise UnsupportedFormatError(
        f"Unsupported file format: {mime_type or extension or 'unknown'}. "
        "Supported formats: PDF, DOCX, DOC, TXT",
        mime_type=mime_type,
        file_name=file_name,
    )


def is_text_garbled(text: str) -> bool:
    """Check if extracted text appears garbled/corrupted."""
    if not text or len(text.strip()) < 50:
        return True

    # Count alphanumeric vs special characters
    alnum_count = sum(1 for c in text if c.isalnum())
    total_count = len(text.replace(" ", "").replace("\n", ""))

    if total_count == 0:
        return True

    # If less than 70% alphanumeric, likely garbled
    return alnum_count / total_count < 0.7


def count_pdf_pages(data: bytes) -> Optional[int]:
    """Page count of a PDF, or None when the bytes are not a readable PDF."""
    if not data or b"%PDF" not in data[:1024]:
        return None
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            return len(pdf.pages)
    except Exception as e:
        logger.info(f"Could not count PDF pages: {e}")
        return None


def extract_with_pdfplumber(pdf_bytes: bytes) -> str:
    """Extract text using pdfplumber (handles most font encodings)."""
    text = ""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            page_text = page.extract_text()
            if page_text:
                text += page_text + "\n"
    return text.strip()


def extract_with_ocr(pdf_bytes: bytes, dpi: int = 300) -> str:
    """Extract text using OCR (Tesseract) - slower but reliable."""
    images = convert_from_bytes(pdf_bytes, dpi=dpi)
    text = ""
    for image in images:
        page_text = pytesseract.image_to_string(image)
        text += page_text + "\n"
    return text.strip()


def extract_text_from_pdf(pdf_bytes: bytes, ocr_fallback: bool = True, ocr_dpi: int = 300) -> str:
    """
    Extract text from PDF bytes.

    pdfplumber runs first; when its output looks garbled and OCR is enabled,
    the pages are rasterized and OCR'd, and the longer result wins.
    """
    try:
        text = extract_with_pdfplumber(pdf_bytes)
    except Exception as e:
        raise DocumentDecodeError("Failed to read PDF file", document_format="pdf", cause=e)

    if not ocr_fallback or not is_text_garbled(text):
        return text

    logger.info(f"PDF text looks garbled ({len(text)} chars), trying OCR")
    try:
        ocr_text = extract_with_ocr(pdf_bytes, dpi=ocr_dpi)
    except Exception as e:
        logger.warning(f"OCR extraction failed, keeping pdfplumber text: {e}")
        return text

    logger.info(f"OCR text length: {len(ocr_text)}")
    return ocr_text if len(ocr_text.strip()) > len(text.strip()) else text


def extract_text_from_docx(data: bytes, document_format: str = "docx") -> str:
    """Paragraph and table-cell text of a Word document."""
    try:
        document = Document(io.BytesIO(data))
    except Exception as e:
        raise DocumentDecodeError(
            f"Failed to read {document_format.upper()} file",
            document_format=document_format,
            cause=e,
        )

    parts = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            parts.append("\t".join(cell.text for cell in row.cells))
    return "\n".join(parts).strip()


def extract_text_from_txt(data: bytes) -> str:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        text = None

    if text is None or CONTROL_CHARACTERS.search(text):
        logger.info("TXT file is not clean UTF-8, decoding as latin-1")
        text = data.decode("latin-1")
    return text.strip()


def extract_text(
    data: bytes,
    declared_format: str,
    ocr_fallback: bool = True,
    ocr_dpi: int = 300,
) -> ExtractedDocument:
    """
    Extract plain text from document bytes.

    Raises:
        UnsupportedFormatError: the declared format is not pdf, docx, doc or txt
        DocumentDecodeError: the bytes cannot be read as the declared format
        EmptyDocumentError: the document contains no text
    """
    page_count = None
    if declared_format == "pdf":
        text = extract_text_from_pdf(data, ocr_fallback=ocr_fallback, ocr_dpi=ocr_dpi)
        page_count = count_pdf_pages(data)
    elif declared_format in ("docx", "doc"):
        text = extract_text_from_docx(data, declared_format)
    elif declared_format == "txt":
        text = extract_text_from_txt(data)
    else:
        raise UnsupportedFormatError(f"Unsupported file format: {declared_format}")

    if not text or not text.strip():
        raise EmptyDocumentError(
            "No text could be extracted from the document",
            document_format=declared_format,
        )

    logger.info(f"Extracted {len(text)} characters from {declared_format.upper()} document")
    return ExtractedDocument(text=text.strip(), page_count=page_count)
