"""Pydantic schemas for API requests and responses."""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from voice_mirror.prompts import AnswerLength
from voice_mirror.utils.text_cleaner import count_words, strip_control_characters

MAX_INPUT_CHARS = 50000
MAX_INPUT_WORDS = 5000
MALICIOUS_MARKERS = ("<script>", "javascript:")


def clean_input_text(value: str, field_name: str, max_length: int = MAX_INPUT_CHARS) -> str:
    """
    Clean and validate a free-text request field.

    Args:
        value: Raw field value
        field_name: Name used in error messages
        max_length: Maximum length after stripping

    Returns:
        Cleaned text

    Raises:
        ValueError: If the text is empty, too long, or looks like script injection
    """
    cleaned = strip_control_characters(value).strip()

    if not cleaned:
        raise ValueError(f"{field_name} cannot be empty")

    if len(cleaned) > max_length:
        raise ValueError(f"{field_name} exceeds maximum length of {max_length} characters")

    lowered = cleaned.lower()
    if any(marker in lowered for marker in MALICIOUS_MARKERS):
        raise ValueError(f"{field_name} contains potentially malicious content")

    return cleaned


class AskRequest(BaseModel):
    """Request schema for asking a question about source material."""

    question: str = Field(..., min_length=1, description="User's question")
    source_text: str = Field(..., min_length=1, description="Source document to answer from")
    writing_samples: List[str] = Field(
        default_factory=list, description="Extracted texts of the user's writing samples"
    )
    answer_length: AnswerLength = Field(AnswerLength.MEDIUM, description="short, medium, or long")

    @field_validator("question")
    @classmethod
    def clean_question(cls, v: str) -> str:
        return clean_input_text(v, "Question")

    @field_validator("source_text")
    @classmethod
    def clean_source_text(cls, v: str) -> str:
        return clean_input_text(v, "Source text")


class AskResponse(BaseModel):
    """Response schema for research answers."""

    success: bool = True
    answer: str = Field(..., description="Answer written in the user's voice")
    question: str = Field(..., description="The question that was answered")
    chunks_used: int = Field(..., ge=0, description="Number of source chunks sent to the model")
    token_usage: Optional[dict] = Field(None, description="Token usage statistics")
    response_time_ms: Optional[float] = Field(None, description="Response time in milliseconds")


class StyleTransferRequest(BaseModel):
    """Request schema for rewriting text in the user's voice."""

    input_text: str = Field(..., min_length=1, description="Text to rewrite")
    writing_samples: List[str] = Field(
        default_factory=list, description="Extracted texts of the user's writing samples"
    )

    @field_validator("input_text")
    @classmethod
    def clean_input(cls, v: str) -> str:
        """
        Clean input text and enforce the word limit.

        Args:
            v: Raw input text

        Returns:
            Cleaned input text
        """
        cleaned = clean_input_text(v, "Input text")
        if count_words(cleaned) > MAX_INPUT_WORDS:
            raise ValueError(f"Text cannot exceed {MAX_INPUT_WORDS} words")
        return cleaned


class StyleTransferResponse(BaseModel):
    """Response schema for style transfer."""

    success: bool = True
    rewritten_text: str = Field(..., description="Input text rewritten in the user's voice")
    input_word_count: int = Field(..., ge=0)
    output_word_count: int = Field(..., ge=0)
    token_usage: Optional[dict] = Field(None, description="Token usage statistics")
    response_time_ms: Optional[float] = Field(None, description="Response time in milliseconds")


class ExtractTextResponse(BaseModel):
    """Response schema for writing sample text extraction."""

    filename: str = Field(..., description="Original filename")
    file_type: str = Field(..., description="Detected file type")
    extracted_text: str = Field(..., description="Cleaned extracted text")
    word_count: int = Field(..., ge=0, description="Number of words extracted")
