"""Ask endpoint for answering questions about source material."""
from fastapi import APIRouter, Depends, HTTPException

from voice_mirror.api.dependencies import get_research_service, rate_limited
from voice_mirror.api.schemas import AskRequest, AskResponse
from voice_mirror.exceptions import LLMServiceError, ValidationError, NoRelevantMaterialError
from voice_mirror.services.rate_limiter import RAG_QA, RateLimitResult
from voice_mirror.services.research_service import ResearchService
from voice_mirror.utils.logger import logger
from voice_mirror.utils.metrics import REQUESTS_TOTAL

router = APIRouter()


@router.post("/ask", response_model=AskResponse)
async def ask_question(
    request: AskRequest,
    research_service: ResearchService = Depends(get_research_service),
    rate_limit: RateLimitResult = Depends(rate_limited(RAG_QA)),
):
    """
    Answer a question about the supplied source text in the user's voice.

    The source is split into word chunks, the chunks that best match the
    question are selected, and the model answers from those chunks only.

    Args:
        request: AskRequest with question, source text, and writing samples
        research_service: Research service instance
        rate_limit: Result of the per-user rate limit check

    Returns:
        AskResponse with the answer and the number of chunks used
    """
    try:
        result = await research_service.answer(
            question=request.question,
            source_text=request.source_text,
            writing_samples=request.writing_samples,
            answer_length=request.answer_length,
        )
        REQUESTS_TOTAL.labels(endpoint="ask", outcome="success").inc()
        return AskResponse(**result)

    except (NoRelevantMaterialError, ValidationError) as e:
        REQUESTS_TOTAL.labels(endpoint="ask", outcome="rejected").inc()
        logger.info(f"Question rejected: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except LLMServiceError as e:
        REQUESTS_TOTAL.labels(endpoint="ask", outcome="error").inc()
        logger.error(f"Error answering question: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate answer")
    except Exception as e:
        REQUESTS_TOTAL.labels(endpoint="ask", outcome="error").inc()
        logger.error(f"Unexpected error answering question: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
