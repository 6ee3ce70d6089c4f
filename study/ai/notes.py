"""
Video-to-Notes Module

Turns a lecture URL into a Markdown study guide.
"""

from typing import Optional

from .decoders import decode_text
from .exceptions import TransportError
from .llm_client import LLMClient
from .prompt_templates import build_notes_request


def generate_notes(
    llm_client: LLMClient,
    url: str,
    topic: Optional[str] = None,
) -> str:
    """
    Generate study notes for a lecture video.

    Args:
        llm_client: transport client
        url: lecture video URL
        topic: optional topic hint

    Returns:
        Markdown notes, shown to the student verbatim

    Raises:
        ValueError: url is blank
        TransportError: the call failed or the model returned no notes
    """
    if not url or not url.strip():
        raise ValueError("Lecture URL is empty.")

    raw = llm_client.send(build_notes_request(url, topic))
    notes = decode_text(raw)
    if notes is None:
        raise TransportError("The model returned no notes.")
    return notes
