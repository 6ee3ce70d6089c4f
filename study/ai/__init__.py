"""
AI gateway package for the study app.

This package contains:
- llm_client: Gemini transport
- prompt_templates: prompt texts and request builders
- decoders: text and schema-validated JSON decoders
- evaluate / notes / tutor / solution: one module per operation
- gateway: the facade used by views and tasks
"""

from .exceptions import AIGatewayError, ConfigurationError, DecodeError, TransportError
from .gateway import StudyGateway, get_default_gateway
from .llm_client import LLMClient
from .schemas import EvaluationResult, ModelSolution


__all__ = [
    'AIGatewayError',
    'ConfigurationError',
    'DecodeError',
    'TransportError',
    'StudyGateway',
    'get_default_gateway',
    'LLMClient',
    'EvaluationResult',
    'ModelSolution',
]
