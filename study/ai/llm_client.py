"""
LLM Client Module

Transport for Google Gemini: sends one ModelRequest, returns the raw text.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types

from .exceptions import ConfigurationError, TransportError
from .schemas import ModelProfile, ModelRequest

logger = logging.getLogger(__name__)

DEFAULT_DEEP_MODEL = "gemini-2.5-pro"
DEFAULT_FAST_MODEL = "gemini-2.5-flash-lite"
DEFAULT_TIMEOUT_SECONDS = 120.0

BLOCKED_FINISH_REASONS = {
    types.FinishReason.SAFETY,
    types.FinishReason.RECITATION,
    types.FinishReason.BLOCKLIST,
    types.FinishReason.PROHIBITED_CONTENT,
    types.FinishReason.SPII,
}


class LLMClient:
    """Google Gemini API client holding one credential."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        deep_model: str = DEFAULT_DEEP_MODEL,
        fast_model: str = DEFAULT_FAST_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Args:
            api_key: Gemini API key (falls back to GEMINI_API_KEY / GOOGLE_API_KEY)
            deep_model: model id used for ModelProfile.DEEP
            fast_model: model id used for ModelProfile.FAST
            timeout: per-request timeout in seconds; expiry is a TransportError

        Raises:
            ConfigurationError: no API key could be found
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not self.api_key:
            raise ConfigurationError(
                "A Gemini API key is required. Set GEMINI_API_KEY or GOOGLE_API_KEY, "
                "or pass api_key."
            )

        self.models: Dict[ModelProfile, str] = {
            ModelProfile.DEEP: _strip_models_prefix(deep_model),
            ModelProfile.FAST: _strip_models_prefix(fast_model),
        }
        self.timeout = timeout

        # HttpOptions.timeout is in milliseconds
        self._client = genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )

    def model_name_for(self, profile: ModelProfile) -> str:
        return self.models[profile]

    def send(self, request: ModelRequest) -> str:
        """
        Send a request to Gemini and return the raw response text.

        Args:
            request: the built ModelRequest

        Returns:
            Response text, stripped. Empty string when the model produced no text.

        Raises:
            TransportError: the call failed, timed out, or was blocked by the model
        """
        model_name = self.model_name_for(request.profile)
        logger.info(
            "[AI] send model=%s profile=%s parts=%s schema=%s thinking_budget=%s",
            model_name,
            request.profile.value,
            [("inline:" + p.mime_type) if p.is_inline else "text" for p in request.parts],
            request.expects_json,
            request.thinking_budget,
        )

        contents = _to_contents(request.parts)
        config = _to_generate_config(request)

        try:
            response = self._client.models.generate_content(
                model=model_name,
                contents=contents,
                config=config,
            )
        except Exception as e:
            logger.error("[AI] Gemini call failed model=%s: %s", model_name, e)
            raise TransportError(f"Gemini API call failed: {e}") from e

        return _extract_text(response)


def _strip_models_prefix(model_name: str) -> str:
    # the SDK adds the models/ prefix itself
    if model_name.startswith("models/"):
        return model_name[len("models/"):]
    return model_name


def _to_contents(parts) -> List[types.Part]:
    contents: List[types.Part] = []
    for part in parts:
        if part.is_inline:
            contents.append(types.Part.from_bytes(data=part.data, mime_type=part.mime_type))
        else:
            contents.append(types.Part.from_text(text=part.text))
    return contents


def _to_generate_config(request: ModelRequest) -> types.GenerateContentConfig:
    # Reasoning tokens count against the output limit, so the budget widens it.
    max_output_tokens = request.max_output_tokens + (request.thinking_budget or 0)

    options: Dict[str, Any] = {
        "temperature": request.temperature,
        "max_output_tokens": max_output_tokens,
    }
    if request.thinking_budget is not None:
        options["thinking_config"] = types.ThinkingConfig(
            thinking_budget=request.thinking_budget
        )
    if request.response_schema is not None:
        options["response_mime_type"] = "application/json"
        options["response_schema"] = request.response_schema

    return types.GenerateContentConfig(**options)


def _extract_text(response: Any) -> str:
    candidates = getattr(response, "candidates", None)
    if not candidates:
        feedback = getattr(response, "prompt_feedback", None)
        block_reason = getattr(feedback, "block_reason", None)
        if block_reason:
            raise TransportError(f"The prompt was blocked ({block_reason}).")

    finish_reason = candidates[0].finish_reason if candidates else None
    if finish_reason in BLOCKED_FINISH_REASONS:
        raise TransportError(f"The response was blocked by the model ({finish_reason}).")

    response_text: Optional[str] = response.text
    if response_text is None and candidates:
        # no plain text accessor result; read the non-thought parts directly
        content = getattr(candidates[0], "content", None)
        if content is not None and content.parts:
            text_parts = [
                p.text
                for p in content.parts
                if getattr(p, "text", None) and not getattr(p, "thought", False)
            ]
            if text_parts:
                response_text = "".join(text_parts)

    if not response_text or not response_text.strip():
        logger.warning("[AI] Gemini returned no text (finish_reason=%s)", finish_reason)
        return ""

    return response_text.strip()
