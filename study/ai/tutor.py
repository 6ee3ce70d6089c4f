"""
Quick Tutor Module

Short academic answers scoped to the student's institution.
"""

import logging

from .decoders import decode_text
from .llm_client import LLMClient
from .prompt_templates import build_tutor_request

logger = logging.getLogger(__name__)

TUTOR_FALLBACK_ANSWER = "I couldn't find an answer for that right now."


def ask_tutor(llm_client: LLMClient, query: str, institution: str) -> str:
    """
    Ask the tutor a question. Never returns an empty answer.

    Raises:
        ValueError: query is blank
        TransportError: the model call failed
    """
    if not query or not query.strip():
        raise ValueError("Query is empty.")

    raw = llm_client.send(build_tutor_request(query, institution or ""))
    answer = decode_text(raw)
    if answer is None:
        # empty text is a low-confidence answer, not a failure
        logger.info("[AI] tutor returned no text, using fallback answer")
        return TUTOR_FALLBACK_ANSWER
    return answer
