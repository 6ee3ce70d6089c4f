"""
Gateway facade: the four operations the rest of the app is allowed to call.
"""

from typing import Optional, Union

from .evaluate import evaluate_answer
from .llm_client import LLMClient
from .notes import generate_notes
from .schemas import EvaluationResult, ModelSolution
from .solution import get_model_solution
from .tutor import ask_tutor


class StudyGateway:
    """Binds the operations to one explicitly constructed LLMClient."""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    def evaluate_answer(
        self, image: Union[bytes, str], vault_context: str = ""
    ) -> EvaluationResult:
        return evaluate_answer(self.llm_client, image, vault_context)

    def generate_notes(self, url: str, topic: Optional[str] = None) -> str:
        return generate_notes(self.llm_client, url, topic)

    def ask_tutor(self, query: str, institution: str) -> str:
        return ask_tutor(self.llm_client, query, institution)

    def get_model_solution(self, question_text: str) -> ModelSolution:
        return get_model_solution(self.llm_client, question_text)


_default_gateway: Optional[StudyGateway] = None


def get_default_gateway() -> StudyGateway:
    """Build the gateway from Django settings on first use, then reuse it."""
    global _default_gateway
    if _default_gateway is None:
        from django.conf import settings

        client = LLMClient(
            api_key=settings.GEMINI_API_KEY,
            deep_model=settings.GEMINI_DEEP_MODEL,
            fast_model=settings.GEMINI_FAST_MODEL,
            timeout=settings.GEMINI_REQUEST_TIMEOUT,
        )
        _default_gateway = StudyGateway(client)
    return _default_gateway


def set_default_gateway(gateway: Optional[StudyGateway]) -> None:
    """Replace (or with None, reset) the shared gateway."""
    global _default_gateway
    _default_gateway = gateway
