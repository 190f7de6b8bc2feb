"""
AI assistant API endpoints.

Async routes awaiting the Gemini SDK. Flow failures are logged and returned
as 502 with a friendly Indonesian message; nothing is retried.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from genhpp.ai import flows
from genhpp.ai.client import AIError, AINotConfiguredError, GeminiClient, get_ai_client
from genhpp.api.schemas import (
    AIChatResponse,
    BusinessCoachRequest,
    ConsultantRequest,
    ImageModerationRequest,
    ImageModerationResult,
    ProductDescriptionRequest,
    ProductDescriptionResult,
    ProfitAnalysisRequest,
    ProfitAnalysisResult,
)

logger = logging.getLogger(__name__)

AI_FAILED_MESSAGE = "Maaf, AI sedang tidak dapat memberikan jawaban. Silakan coba lagi nanti."
AI_UNAVAILABLE_MESSAGE = "Fitur AI belum dikonfigurasi di server ini."

router = APIRouter()


def require_ai_client() -> GeminiClient:
    """Dependency yielding the Gemini client, 503 when no API key is set."""
    try:
        return get_ai_client()
    except AINotConfiguredError as e:
        logger.warning(f"AI request rejected: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=AI_UNAVAILABLE_MESSAGE)


def _flow_failed(flow: str, error: Exception) -> HTTPException:
    logger.error(f"AI flow '{flow}' failed: {type(error).__name__}: {error}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=AI_FAILED_MESSAGE)


@router.post("/business-coach", response_model=AIChatResponse)
async def business_coach(request: BusinessCoachRequest, client=Depends(require_ai_client)):
    """Chat with "Teman Bisnis AI"."""
    try:
        text = await flows.business_coach(client, [t.model_dump() for t in request.history])
    except AIError as e:
        raise _flow_failed("business_coach", e)
    return {"text": text}


@router.post("/consultant", response_model=AIChatResponse)
async def consultant(request: ConsultantRequest, client=Depends(require_ai_client)):
    """Chat with "Konsultan AI"."""
    try:
        text = await flows.consult(client, request.prompt, [t.model_dump() for t in request.history])
    except AIError as e:
        raise _flow_failed("consultant", e)
    return {"text": text}


@router.post("/product-description", response_model=ProductDescriptionResult)
async def product_description(request: ProductDescriptionRequest, client=Depends(require_ai_client)):
    try:
        return await flows.generate_description(client, request.product_name)
    except AIError as e:
        raise _flow_failed("product_description", e)


@router.post("/profit-analysis", response_model=ProfitAnalysisResult)
async def profit_analysis(request: ProfitAnalysisRequest, client=Depends(require_ai_client)):
    try:
        return await flows.analyze_profit(client, request.model_dump())
    except AIError as e:
        raise _flow_failed("profit_analysis", e)


@router.post("/moderate-image", response_model=ImageModerationResult)
async def moderate_image(request: ImageModerationRequest, client=Depends(require_ai_client)):
    """Screen an uploaded image. Never errors: failures come back as unsafe."""
    return await flows.moderate_image(client, request.image_data_uri)
