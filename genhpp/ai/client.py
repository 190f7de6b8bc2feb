"""
Google Gemini client used by the AI flows.

Wraps ``google.generativeai`` with three calls the flows need:
- ``chat``: multi-turn text with a system instruction
- ``generate_json``: single-turn prompt answered as a JSON object
- ``moderate_image``: image + prompt under strict safety settings

No retries: a failed call raises ``AIError`` and the caller decides what to
show the user.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import google.generativeai as genai

logger = logging.getLogger("genhpp.ai.gemini")

DEFAULT_MODEL = "gemini-2.5-flash"

# Strictest thresholds for user-uploaded images
MODERATION_SAFETY_SETTINGS = {
    "HARM_CATEGORY_HATE_SPEECH": "BLOCK_LOW_AND_ABOVE",
    "HARM_CATEGORY_DANGEROUS_CONTENT": "BLOCK_LOW_AND_ABOVE",
    "HARM_CATEGORY_HARASSMENT": "BLOCK_LOW_AND_ABOVE",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT": "BLOCK_LOW_AND_ABOVE",
}


class AIError(Exception):
    """An AI call failed or returned something unusable."""


class AINotConfiguredError(AIError):
    """No Gemini API key is available."""


@dataclass
class ModerationResponse:
    """Raw moderation outcome before the flow interprets it."""

    blocked_categories: List[str] = field(default_factory=list)
    payload: Optional[Dict[str, Any]] = None

    @property
    def blocked(self) -> bool:
        return bool(self.blocked_categories)


def to_gemini_history(history: List[Dict[str, str]]) -> List[Dict[str, Any]]:
    """Convert ``{role, content}`` turns to Gemini's ``{role, parts}`` format."""
    return [{"role": turn["role"], "parts": [turn["content"]]} for turn in history]


def _category_name(rating: Any) -> str:
    category = getattr(rating, "category", rating)
    name = getattr(category, "name", str(category))
    return name.replace("HARM_CATEGORY_", "")


def blocked_categories(response: Any) -> List[str]:
    """
    Safety categories that caused a response to be blocked, if any.

    Checks the prompt feedback first, then candidates that stopped for
    safety reasons.
    """
    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None and getattr(feedback, "block_reason", None):
        ratings = list(getattr(feedback, "safety_ratings", []) or [])
        return [_category_name(r) for r in ratings if getattr(r, "blocked", True)] or ["UNSPECIFIED"]

    for candidate in getattr(response, "candidates", []) or []:
        finish_reason = getattr(candidate, "finish_reason", None)
        if getattr(finish_reason, "name", str(finish_reason)) == "SAFETY":
            ratings = list(getattr(candidate, "safety_ratings", []) or [])
            flagged = [
                _category_name(r) for r in ratings
                if getattr(r, "blocked", False)
                or getattr(getattr(r, "probability", None), "name", "NEGLIGIBLE") not in ("NEGLIGIBLE", "LOW")
            ]
            return flagged or ["UNSPECIFIED"]
    return []


def parse_json_text(text: str) -> Dict[str, Any]:
    """Parse a JSON object from model output, tolerating a markdown fence."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AIError(f"Model returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise AIError("Model returned JSON that is not an object")
    return data


class GeminiClient:
    """Thin async wrapper around ``google.generativeai``."""

    def __init__(self, api_key: str, model: Optional[str] = None):
        self._api_key = api_key
        self._model = model or DEFAULT_MODEL
        genai.configure(api_key=self._api_key)

    @property
    def model(self) -> str:
        return self._model

    def _model_for(self, system_instruction: Optional[str], **config: Any) -> "genai.GenerativeModel":
        safety_settings = config.pop("safety_settings", None)
        return genai.GenerativeModel(
            model_name=self._model,
            system_instruction=system_instruction,
            generation_config=genai.GenerationConfig(**config),
            safety_settings=safety_settings,
        )

    async def chat(
        self,
        system_instruction: str,
        history: List[Dict[str, str]],
        message: str,
        temperature: float = 0.8,
        max_tokens: int = 2048,
    ) -> str:
        """
        Continue a conversation.

        Args:
            system_instruction: Persona and rules for the assistant
            history: Previous ``{role: user|model, content}`` turns
            message: The user's new message

        Returns:
            The model's reply text
        """
        logger.info(
            "Gemini chat started",
            extra={"model": self._model, "turns": len(history)},
        )
        gen_model = self._model_for(system_instruction, temperature=temperature, max_output_tokens=max_tokens)
        try:
            chat = gen_model.start_chat(history=to_gemini_history(history))
            response = await chat.send_message_async(message)
            text = response.text
        except Exception as e:
            logger.error(f"Gemini chat failed: {e}", extra={"model": self._model})
            raise AIError(str(e)) from e

        if not text or not text.strip():
            raise AIError("Failed to get a response from the AI.")
        return text

    async def generate_json(
        self,
        system_instruction: Optional[str],
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> Dict[str, Any]:
        """Single-turn prompt whose answer must be a JSON object."""
        logger.info("Gemini JSON generation started", extra={"model": self._model})
        gen_model = self._model_for(
            system_instruction,
            temperature=temperature,
            max_output_tokens=max_tokens,
            response_mime_type="application/json",
        )
        try:
            response = await gen_model.generate_content_async(prompt)
            text = response.text
        except Exception as e:
            logger.error(f"Gemini JSON generation failed: {e}", extra={"model": self._model})
            raise AIError(str(e)) from e
        return parse_json_text(text)

    async def moderate_image(self, prompt: str, mime_type: str, data: bytes) -> ModerationResponse:
        """
        Ask the model to judge an image under strict safety settings.

        A response stopped by the safety filters is reported through
        ``blocked_categories`` rather than raised.
        """
        gen_model = self._model_for(
            None,
            temperature=0.0,
            response_mime_type="application/json",
            safety_settings=MODERATION_SAFETY_SETTINGS,
        )
        try:
            response = await gen_model.generate_content_async(
                [prompt, {"mime_type": mime_type, "data": data}]
            )
        except Exception as e:
            logger.error(f"Gemini moderation failed: {e}", extra={"model": self._model})
            raise AIError(str(e)) from e

        categories = blocked_categories(response)
        if categories:
            return ModerationResponse(blocked_categories=categories)
        try:
            return ModerationResponse(payload=parse_json_text(response.text))
        except ValueError as e:
            raise AIError(str(e)) from e


def get_ai_client() -> GeminiClient:
    """
    FastAPI dependency returning a configured Gemini client.

    Raises:
        AINotConfiguredError: If neither GEMINI_API_KEY nor GOOGLE_API_KEY is set
    """
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if not api_key:
        raise AINotConfiguredError("GEMINI_API_KEY is not configured")
    return GeminiClient(api_key=api_key, model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL))
