"""
Answer Evaluation Module

Scan-to-Score: grade a photographed handwritten answer out of 10, biased
toward the documents the student keeps in the vault.
"""

import base64
import binascii
from io import BytesIO
from typing import Tuple, Union

from PIL import Image, UnidentifiedImageError

from .decoders import decode_evaluation
from .llm_client import LLMClient
from .prompt_templates import build_evaluation_request
from .schemas import EvaluationResult

DEFAULT_IMAGE_MIME = "image/jpeg"


def evaluate_answer(
    llm_client: LLMClient,
    image: Union[bytes, str],
    vault_context: str = "",
) -> EvaluationResult:
    """
    Grade a handwritten answer image.

    Args:
        llm_client: transport client
        image: image bytes, or a base64 `data:` URL as produced by a browser canvas
        vault_context: flattened names/content of known reference documents

    Returns:
        EvaluationResult with score in [0, 10] and every text field present

    Raises:
        ValueError: the image is empty or unreadable
        TransportError: the model call failed
        DecodeError: the model answered with malformed JSON
    """
    data, mime_type = load_image(image)
    request = build_evaluation_request(data, vault_context, mime_type=mime_type)
    raw = llm_client.send(request)
    return decode_evaluation(raw)


def load_image(image: Union[bytes, str]) -> Tuple[bytes, str]:
    """
    Normalize caller input into (bytes, mime_type).

    Raises:
        ValueError: empty input, bad base64, or bytes Pillow cannot identify
    """
    if isinstance(image, str):
        data = _decode_data_url(image)
    else:
        data = bytes(image or b"")

    if not data:
        raise ValueError("Image is empty.")

    try:
        with Image.open(BytesIO(data)) as img:
            image_format = img.format
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Unreadable image: {e}") from e

    mime_type = Image.MIME.get(image_format or "", DEFAULT_IMAGE_MIME)
    return data, mime_type


def _decode_data_url(value: str) -> bytes:
    value = value.strip()
    if value.startswith("data:"):
        _, _, value = value.partition(",")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e
