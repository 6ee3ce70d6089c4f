from unittest.mock import patch

import pytest

from study.ai.exceptions import TransportError
from study.models import VaultDocument
from study.tasks import generate_notes_task, notes_document_name

pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def _keep_test_connection():
    # closing the connection would break the test transaction
    with patch("study.tasks.close_old_connections"):
        yield


def test_notes_are_saved_to_vault(stub_gateway, stub_client):
    stub_client.response_text = "## Graphs\n- BFS"

    doc_id = generate_notes_task("https://youtu.be/abc", "Graphs")

    doc = VaultDocument.objects.get(id=doc_id)
    assert doc.doc_type == VaultDocument.DocType.NOTES
    assert doc.name == "Graphs - Notes"
    assert doc.content == "## Graphs\n- BFS"
    assert doc.size_bytes == len("## Graphs\n- BFS")


def test_failure_saves_nothing(stub_gateway, stub_client):
    stub_client.error = TransportError("boom")

    assert generate_notes_task("https://youtu.be/abc", None) is None
    assert VaultDocument.objects.count() == 0


def test_document_name_falls_back_to_url():
    assert notes_document_name("https://youtu.be/abc", None) == "https://youtu.be/abc - Notes"
    assert notes_document_name("https://youtu.be/abc", "  ") == "https://youtu.be/abc - Notes"
