"""
Request and result value objects for the AI gateway.

Everything here is created per call and discarded once rendered.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ModelProfile(str, Enum):
    """Which model tier a request targets; the transport maps it to a model id."""

    DEEP = "deep"  # schema-validated, deliberate
    FAST = "fast"  # free text, low latency


@dataclass(frozen=True)
class ContentPart:
    text: Optional[str] = None
    data: Optional[bytes] = None
    mime_type: Optional[str] = None

    def __post_init__(self):
        if (self.text is None) == (self.data is None):
            raise ValueError("ContentPart needs exactly one of text or data.")
        if self.data is not None and not self.mime_type:
            raise ValueError("Inline data parts need a mime_type.")

    @classmethod
    def from_text(cls, text: str) -> "ContentPart":
        return cls(text=text)

    @classmethod
    def inline(cls, data: bytes, mime_type: str) -> "ContentPart":
        return cls(data=data, mime_type=mime_type)

    @property
    def is_inline(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class ModelRequest:
    """
    A fully built model request.

    Attributes:
        profile: model tier to call
        parts: ordered content parts (text and/or inline binary)
        response_schema: structured-output schema; None means free text
        thinking_budget: reasoning-effort hint in tokens; None means no extra effort
        temperature: sampling temperature
        max_output_tokens: tokens reserved for the visible answer
    """

    profile: ModelProfile
    parts: Tuple[ContentPart, ...]
    response_schema: Optional[Dict[str, Any]] = None
    thinking_budget: Optional[int] = None
    temperature: float = 0.7
    max_output_tokens: int = 4096

    @property
    def expects_json(self) -> bool:
        return self.response_schema is not None


@dataclass(frozen=True)
class EvaluationResult:
    score: float
    transcription: str
    gap_analysis: str
    key_points: List[str] = field(default_factory=list)
    tips: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "transcription": self.transcription,
            "gapAnalysis": self.gap_analysis,
            "keyPoints": list(self.key_points),
            "tips": self.tips,
        }


@dataclass(frozen=True)
class ModelSolution:
    intro: str
    body: str
    conclusion: str
    keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intro": self.intro,
            "body": self.body,
            "conclusion": self.conclusion,
            "keywords": list(self.keywords),
        }


# Structured-output schemas (Gemini OpenAPI subset)
EVALUATION_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "NUMBER"},
        "transcription": {"type": "STRING"},
        "gapAnalysis": {"type": "STRING"},
        "keyPoints": {"type": "ARRAY", "items": {"type": "STRING"}},
        "tips": {"type": "STRING"},
    },
    "required": ["score", "transcription", "gapAnalysis", "keyPoints", "tips"],
}

SOLUTION_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "intro": {"type": "STRING"},
        "body": {"type": "STRING"},
        "conclusion": {"type": "STRING"},
        "keywords": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["intro", "body", "conclusion", "keywords"],
}
