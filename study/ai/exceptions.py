"""
Gateway error kinds.

TransportError and DecodeError are siblings so callers can tell "could not
reach the AI" apart from "the AI gave an unexpected answer".
"""

from typing import Optional


class AIGatewayError(Exception):
    """Base class for failures raised by the study.ai package."""


class ConfigurationError(AIGatewayError):
    """The gateway cannot be constructed (e.g. no API key)."""


class TransportError(AIGatewayError):
    """The request never reached the model, or the model reported a failure."""


class DecodeError(AIGatewayError):
    """The model answered but the text does not fit the requested schema."""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text
