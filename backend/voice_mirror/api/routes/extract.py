"""Upload endpoint for extracting text from writing samples."""
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from voice_mirror.api.dependencies import get_app_settings, get_caller_id, get_rate_limiter, rate_limited
from voice_mirror.api.schemas import ExtractTextResponse
from voice_mirror.exceptions import ExtractionError, ValidationError
from voice_mirror.services.rate_limiter import EXTRACT_TEXT, EXTRACT_TEXT_WORDS, RateLimiter, RateLimitResult
from voice_mirror.services.text_extractor import extract_text, validate_file_size
from voice_mirror.utils.logger import logger
from voice_mirror.utils.metrics import REQUESTS_TOTAL

router = APIRouter()


def word_limit_message(word_count: int) -> str:
    return (
        f"Word limit exceeded. You can process up to {EXTRACT_TEXT_WORDS.limit} words per minute. "
        f"This file has {word_count} words."
    )


@router.post("/extract-text", response_model=ExtractTextResponse)
async def extract_writing_sample(
    file: Annotated[UploadFile, File(...)],
    response: Response,
    app_settings=Depends(get_app_settings),
    file_limit: RateLimitResult = Depends(rate_limited(EXTRACT_TEXT)),
    limiter: RateLimiter = Depends(get_rate_limiter),
    caller_id: str = Depends(get_caller_id),
):
    """
    Extract text from an uploaded writing sample (TXT, PDF, or DOCX).

    Uploads are limited both by file count and by extracted words per
    minute; a file that would push the caller past the word budget is
    rejected with 429 after extraction.

    Args:
        file: Writing sample file
        response: Outgoing response, used for the rate limit headers
        app_settings: Application settings with the upload size limit
        file_limit: Result of the per-user file count check
        limiter: Shared rate limiter for the word budget
        caller_id: Rate limit identity of the caller

    Returns:
        ExtractTextResponse with the cleaned text and its word count
    """
    try:
        file_content = await file.read()
        validate_file_size(len(file_content), app_settings.max_file_size_mb)
        extracted = extract_text(file_content, file.filename or "")

    except (ValidationError, ExtractionError) as e:
        REQUESTS_TOTAL.labels(endpoint="extract_text", outcome="rejected").inc()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        REQUESTS_TOTAL.labels(endpoint="extract_text", outcome="error").inc()
        logger.error(f"Unexpected error extracting text: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to process document: {str(e)}")

    word_limit = await limiter.consume(EXTRACT_TEXT_WORDS, caller_id, extracted.word_count)
    headers = {
        "X-RateLimit-Remaining-Words": str(word_limit.remaining),
        "X-RateLimit-Remaining-Files": str(file_limit.remaining),
        "X-RateLimit-Reset": str(max(word_limit.reset_time, file_limit.reset_time)),
    }
    if not word_limit.allowed:
        REQUESTS_TOTAL.labels(endpoint="extract_text", outcome="rate_limited").inc()
        raise HTTPException(
            status_code=429,
            detail={
                "error": word_limit_message(extracted.word_count),
                "reset_time": word_limit.reset_time,
                "word_count": extracted.word_count,
            },
            headers=headers,
        )

    response.headers.update(headers)
    REQUESTS_TOTAL.labels(endpoint="extract_text", outcome="success").inc()
    return ExtractTextResponse(
        filename=extracted.filename,
        file_type=extracted.file_type,
        extracted_text=extracted.text,
        word_count=extracted.word_count,
    )
