"""
Response decoders: plain text pass-through and schema-validated JSON.
"""

import json
import logging
import math
from typing import Any, Dict, Optional, Type

from rest_framework import serializers

from .exceptions import DecodeError
from .schemas import EvaluationResult, ModelSolution

logger = logging.getLogger(__name__)

RAW_PREVIEW_CHARS = 500


class StrictCharField(serializers.CharField):
    """CharField that refuses numbers and other non-string JSON values."""

    def __init__(self, **kwargs):
        kwargs.setdefault("allow_blank", True)
        kwargs.setdefault("trim_whitespace", False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


class StrictFloatField(serializers.FloatField):
    """FloatField that accepts only finite JSON numbers (not strings or booleans)."""

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("invalid")
        if not math.isfinite(data):
            self.fail("invalid")
        return float(data)


class EvaluationPayloadSerializer(serializers.Serializer):
    """Validates the model's grading JSON (wire keys are camelCase)."""

    score = StrictFloatField(min_value=0, max_value=10)
    transcription = StrictCharField()
    gapAnalysis = StrictCharField()
    keyPoints = serializers.ListField(child=StrictCharField(), allow_empty=True)
    tips = StrictCharField()

    def to_result(self) -> EvaluationResult:
        data = self.validated_data
        return EvaluationResult(
            score=data["score"],
            transcription=data["transcription"],
            gap_analysis=data["gapAnalysis"],
            key_points=list(data["keyPoints"]),
            tips=data["tips"],
        )


class SolutionPayloadSerializer(serializers.Serializer):
    """Validates the model-solution JSON."""

    intro = StrictCharField()
    body = StrictCharField()
    conclusion = StrictCharField()
    keywords = serializers.ListField(child=StrictCharField(), allow_empty=True)

    def to_result(self) -> ModelSolution:
        data = self.validated_data
        return ModelSolution(
            intro=data["intro"],
            body=data["body"],
            conclusion=data["conclusion"],
            keywords=list(data["keywords"]),
        )


def decode_text(raw: Optional[str]) -> Optional[str]:
    """Return the stripped text, or None when the model said nothing."""
    if raw is None:
        return None
    text = raw.strip()
    return text or None


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ``` / ```json Markdown fence, if any."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]

    if text.endswith("```"):
        text = text[:-3]

    return text.strip()


def decode_json(raw: Optional[str], validator_class: Type[serializers.Serializer]) -> Any:
    """
    Parse raw model text as JSON and validate it against a serializer.

    Args:
        raw: raw response text
        validator_class: serializer class with a to_result() method

    Returns:
        whatever validator_class.to_result() builds

    Raises:
        DecodeError: empty text, invalid JSON, a non-object, or a schema mismatch
    """
    preview = (raw or "")[:RAW_PREVIEW_CHARS]
    text = strip_code_fence(raw or "")
    if not text:
        raise DecodeError("The model returned an empty response.", raw_text=raw)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("[AI] JSON parse failed: %s; raw=%r", e, preview)
        raise DecodeError(
            f"JSON parse failed: {e}\nResponse (first {RAW_PREVIEW_CHARS} chars): {preview}",
            raw_text=raw,
        ) from e

    if not isinstance(payload, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(payload).__name__}.", raw_text=raw
        )

    validator = validator_class(data=payload)
    if not validator.is_valid():
        errors: Dict[str, Any] = dict(validator.errors)
        logger.warning("[AI] response failed schema validation: %s", errors)
        raise DecodeError(f"Response does not match the schema: {errors}", raw_text=raw)

    return validator.to_result()


def decode_evaluation(raw: Optional[str]) -> EvaluationResult:
    return decode_json(raw, EvaluationPayloadSerializer)


def decode_solution(raw: Optional[str]) -> ModelSolution:
    return decode_json(raw, SolutionPayloadSerializer)
