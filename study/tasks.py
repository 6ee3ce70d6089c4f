from __future__ import annotations

import logging
from typing import Optional

from celery import shared_task
from django.db import close_old_connections

from .ai import TransportError, get_default_gateway
from .models import VaultDocument

logger = logging.getLogger(__name__)


def notes_document_name(url: str, topic: Optional[str] = None) -> str:
    """
    Vault name for generated notes: "<topic> - Notes", or the URL when no topic.
    """
    label = (topic or "").strip() or url.strip()
    return f"{label} - Notes"[:255]


@shared_task
def generate_notes_task(url: str, topic: Optional[str] = None) -> Optional[str]:
    """
    Celery task: generate lecture notes and store them as a NOTES vault document.

    Returns the new document id, or None when generation failed.
    """
    try:
        close_old_connections()

        notes = get_default_gateway().generate_notes(url, topic)
    except (TransportError, ValueError) as e:
        logger.error("[AI] generate_notes_task failed url=%s: %s", url, e)
        return None

    doc = VaultDocument.objects.create(
        name=notes_document_name(url, topic),
        doc_type=VaultDocument.DocType.NOTES,
        content=notes,
        size_bytes=len(notes.encode("utf-8")),
    )
    logger.info("[AI] generate_notes_task saved document id=%s chars=%d", doc.id, len(notes))
    return str(doc.id)
