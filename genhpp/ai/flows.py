"""
AI flows: fixed prompt templates with pydantic-validated outputs.

Every flow takes a client exposing ``chat``, ``generate_json`` and
``moderate_image`` (see ``genhpp.ai.client.GeminiClient``). Flows raise
``AIError`` on failure, except image moderation which always answers and
treats its own failure as "unsafe".
"""

import base64
import binascii
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from genhpp.ai import prompts
from genhpp.ai.client import AIError
from genhpp.api.schemas import (
    ImageModerationResult,
    ProductDescriptionResult,
    ProfitAnalysisResult,
)

logger = logging.getLogger(__name__)

MODERATION_FAILED_REASON = "Gagal menganalisis gambar. Silakan coba gambar lain."
MODERATION_DEFAULT_UNSAFE_REASON = "Gambar mengandung konten yang tidak pantas."


async def business_coach(client, history: List[Dict[str, str]]) -> str:
    """
    Reply as "Teman Bisnis AI".

    Args:
        client: AI client
        history: Conversation turns; the last one is the user's new message
    """
    *previous, latest = history
    return await client.chat(prompts.BUSINESS_COACH_SYSTEM, previous, latest["content"])


async def consult(client, prompt: str, history: List[Dict[str, str]]) -> str:
    """Reply as "Konsultan AI" to a new prompt after optional history."""
    return await client.chat(prompts.CONSULTANT_SYSTEM, history, prompt)


def _validated(model, data: Dict[str, Any]):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise AIError(f"AI response did not match {model.__name__}: {e}") from e


async def generate_description(client, product_name: str) -> ProductDescriptionResult:
    data = await client.generate_json(
        prompts.PRODUCT_DESCRIPTION_SYSTEM,
        prompts.PRODUCT_DESCRIPTION_PROMPT.format(product_name=product_name),
    )
    return _validated(ProductDescriptionResult, data)


async def analyze_profit(client, request: Dict[str, Any]) -> ProfitAnalysisResult:
    """
    Suggest how to move from the current margin to the target margin.

    Args:
        client: AI client
        request: Product name, materials, costs, margins, HPP and quantity
    """
    prompt = prompts.PROFIT_ANALYSIS_PROMPT.format(
        product_name=request["product_name"],
        target_margin=request["target_margin"],
        current_margin=request["current_margin"],
        product_quantity=request["product_quantity"],
        total_hpp=request["total_hpp"],
        materials=prompts.format_materials(request["materials"]),
        labor_cost=request["labor_cost"],
        overhead=request["overhead"],
        packaging=request["packaging"],
    )
    data = await client.generate_json(prompts.PROFIT_ANALYSIS_SYSTEM, prompt)
    return _validated(ProfitAnalysisResult, data)


def decode_data_uri(data_uri: str):
    """
    Split ``data:<mime>;base64,<data>`` into (mime_type, bytes).

    Raises:
        ValueError: If the URI is malformed
    """
    header, _, encoded = data_uri.partition(",")
    if not header.startswith("data:") or not header.endswith(";base64") or not encoded:
        raise ValueError("Invalid data URI")
    mime_type = header[len("data:"):-len(";base64")]
    try:
        return mime_type, base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


async def moderate_image(client, image_data_uri: str) -> ImageModerationResult:
    """
    Decide whether an uploaded image may be shown publicly.

    - blocked by safety filters: unsafe, naming the categories
    - model says unsafe: unsafe with its reason (or a default)
    - anything else that succeeds: safe
    - any failure: unsafe with a generic retry message
    """
    try:
        mime_type, data = decode_data_uri(image_data_uri)
        response = await client.moderate_image(prompts.IMAGE_MODERATION_PROMPT, mime_type, data)
    except Exception as e:
        logger.error(f"Image moderation flow error: {e}")
        return ImageModerationResult(is_safe=False, reason=MODERATION_FAILED_REASON)

    if response.blocked:
        categories = ", ".join(response.blocked_categories)
        return ImageModerationResult(is_safe=False, reason=f"Gambar ditolak karena mengandung unsur: {categories}.")

    payload = response.payload or {}
    if payload.get("is_safe") is False:
        return ImageModerationResult(
            is_safe=False,
            reason=payload.get("reason") or MODERATION_DEFAULT_UNSAFE_REASON,
        )
    return ImageModerationResult(is_safe=True)
