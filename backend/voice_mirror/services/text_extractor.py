"""Text extraction for uploaded writing samples (TXT, PDF, DOCX)."""
import io
from pathlib import Path
from typing import List

import pdfplumber
from docx import Document as DocxDocument

from voice_mirror.exceptions import (
    DocumentEmptyError,
    ExtractionError,
    FileSizeExceededError,
    FileTypeNotSupportedError,
)
from voice_mirror.models.document import ExtractedText
from voice_mirror.utils.logger import logger
from voice_mirror.utils.text_cleaner import clean_text, count_words

SUPPORTED_EXTENSIONS = {".txt": "txt", ".pdf": "pdf", ".docx": "docx"}


def get_file_type(filename: str) -> str:
    """
    Determine file type based on file extension.

    Raises:
        FileTypeNotSupportedError: If the extension is not .txt, .pdf or .docx
    """
    if not filename:
        raise FileTypeNotSupportedError("File name is required.")

    extension = Path(filename).suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise FileTypeNotSupportedError(
            f"Unsupported file type: {extension or 'none'}. "
            f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return SUPPORTED_EXTENSIONS[extension]


def validate_file_size(file_size_bytes: int, max_size_mb: float) -> None:
    """Validate upload size against the configured limit."""
    file_size_mb = file_size_bytes / (1024 * 1024)
    if file_size_mb > max_size_mb:
        raise FileSizeExceededError(
            f"File size ({file_size_mb:.2f} MB) exceeds maximum allowed size ({max_size_mb} MB)."
        )


def extract_text_from_txt(content: bytes) -> str:
    """Decode a UTF-8 text file, ignoring undecodable bytes."""
    return content.decode("utf-8", errors="ignore")


def extract_text_from_pdf(content: bytes) -> str:
    """
    Extract text from a PDF using pdfplumber.

    Args:
        content: Raw PDF bytes

    Returns:
        Page texts joined with blank lines

    Raises:
        ExtractionError: If the PDF cannot be opened
    """
    pages: List[str] = []
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            for page_num, page in enumerate(pdf.pages, 1):
                try:
                    pages.append(page.extract_text() or "")
                except Exception as e:
                    logger.warning(f"Error extracting text from PDF page {page_num}: {str(e)}")
    except Exception as e:
        logger.error(f"Error opening PDF file: {str(e)}")
        raise ExtractionError(f"Failed to process PDF file: {str(e)}")

    return "\n\n".join(pages)


def extract_text_from_docx(content: bytes) -> str:
    """
    Extract text from DOCX paragraphs and table cells.

    Raises:
        ExtractionError: If the document cannot be parsed
    """
    try:
        doc = DocxDocument(io.BytesIO(content))
        full_text = [p.text for p in doc.paragraphs if p.text.strip()]

        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    if cell.text.strip():
                        full_text.append(cell.text)

        return "\n\n".join(full_text)

    except Exception as e:
        logger.error(f"Error processing DOCX file: {str(e)}")
        raise ExtractionError(f"Failed to process DOCX file: {str(e)}")


_EXTRACTORS = {
    "txt": extract_text_from_txt,
    "pdf": extract_text_from_pdf,
    "docx": extract_text_from_docx,
}


def extract_text(content: bytes, filename: str) -> ExtractedText:
    """
    Extract and clean text from an uploaded writing sample.

    Args:
        content: Raw file content
        filename: Original filename, used to pick the extractor

    Returns:
        ExtractedText with cleaned text and word count

    Raises:
        FileTypeNotSupportedError: If the file type is not supported
        ExtractionError: If extraction fails
        DocumentEmptyError: If no text could be extracted
    """
    file_type = get_file_type(filename)
    text = clean_text(_EXTRACTORS[file_type](content))

    if not text:
        raise DocumentEmptyError(f"No readable text found in {filename}.")

    word_count = count_words(text)
    logger.info(
        f"Extracted text from {filename}",
        extra={"file_type": file_type, "word_count": word_count},
    )
    return ExtractedText(filename=filename, file_type=file_type, text=text, word_count=word_count)
