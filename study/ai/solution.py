"""
Model Solution Module

"Perfect score" structured answers for question bank entries.
"""

from .decoders import decode_solution
from .llm_client import LLMClient
from .prompt_templates import build_solution_request
from .schemas import ModelSolution


def get_model_solution(llm_client: LLMClient, question_text: str) -> ModelSolution:
    """
    Generate a structured model solution.

    Args:
        llm_client: transport client
        question_text: exam question

    Returns:
        ModelSolution (intro, body, conclusion, keywords)

    Raises:
        ValueError: question_text is blank
        TransportError: the model call failed
        DecodeError: the model answered with malformed JSON
    """
    if not question_text or not question_text.strip():
        raise ValueError("Question is empty.")

    raw = llm_client.send(build_solution_request(question_text))
    return decode_solution(raw)
