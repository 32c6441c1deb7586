"""Style transfer endpoint."""
from fastapi import APIRouter, Depends, HTTPException

from voice_mirror.api.dependencies import get_style_transfer_service, rate_limited
from voice_mirror.api.schemas import StyleTransferRequest, StyleTransferResponse
from voice_mirror.exceptions import LLMServiceError, ValidationError
from voice_mirror.services.rate_limiter import STYLE_TRANSFER, RateLimitResult
from voice_mirror.services.style_transfer_service import StyleTransferService
from voice_mirror.utils.logger import logger
from voice_mirror.utils.metrics import REQUESTS_TOTAL

router = APIRouter()


@router.post("/style-transfer", response_model=StyleTransferResponse)
async def style_transfer(
    request: StyleTransferRequest,
    service: StyleTransferService = Depends(get_style_transfer_service),
    rate_limit: RateLimitResult = Depends(rate_limited(STYLE_TRANSFER)),
):
    """Rewrite the input text in the style of the user's writing samples."""
    try:
        result = await service.rewrite(request.input_text, request.writing_samples)
        REQUESTS_TOTAL.labels(endpoint="style_transfer", outcome="success").inc()
        return StyleTransferResponse(**result)

    except ValidationError as e:
        REQUESTS_TOTAL.labels(endpoint="style_transfer", outcome="rejected").inc()
        raise HTTPException(status_code=400, detail=str(e))
    except LLMServiceError as e:
        REQUESTS_TOTAL.labels(endpoint="style_transfer", outcome="error").inc()
        logger.error(f"Error rewriting text: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate text")
    except Exception as e:
        REQUESTS_TOTAL.labels(endpoint="style_transfer", outcome="error").inc()
        logger.error(f"Unexpected error rewriting text: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
