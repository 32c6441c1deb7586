"""Text cleaning and normalization utilities."""
import re

CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x0c\x0e-\x1f\x7f]")


def strip_control_characters(text: str) -> str:
    """Remove control characters, keeping newline, tab and carriage return."""
    return CONTROL_CHARS.sub("", text)


def clean_text(text: str) -> str:
    """
    Clean and normalize extracted text.

    Paragraph breaks are kept; runs of spaces and tabs collapse to one space.

    Args:
        text: Raw text to clean

    Returns:
        Cleaned text with normalized whitespace
    """
    text = strip_control_characters(text)

    # Normalize line breaks
    text = re.sub(r"\r\n", "\n", text)
    text = re.sub(r"\r", "\n", text)

    # Collapse horizontal whitespace
    text = re.sub(r"[ \t\f\v]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)

    # Remove excessive newlines (more than 2 consecutive)
    text = re.sub(r"\n{3,}", "\n\n", text)

    return text.strip()


def count_words(text: str) -> int:
    """Count whitespace-delimited words."""
    return len(text.split())
