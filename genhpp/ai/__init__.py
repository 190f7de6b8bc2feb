"""
AI assistants for GenHPP, backed by Google Gemini.
"""

from genhpp.ai.client import AIError, AINotConfiguredError, GeminiClient, ModerationResponse, get_ai_client

__all__ = [
    "AIError",
    "AINotConfiguredError",
    "GeminiClient",
    "ModerationResponse",
    "get_ai_client",
]
