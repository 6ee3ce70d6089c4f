"""
Shared fixtures. The transport is always stubbed; no test reaches Gemini.
"""

from io import BytesIO

import pytest
from PIL import Image
from rest_framework.test import APIClient

from study.ai.gateway import StudyGateway, set_default_gateway


class StubLLMClient:
    """Records every request; answers with a canned text or raises."""

    def __init__(self, response_text="", error=None):
        self.response_text = response_text
        self.error = error
        self.requests = []

    def send(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response_text

    @property
    def last_request(self):
        return self.requests[-1]


def make_image_bytes(image_format: str = "JPEG") -> bytes:
    buf = BytesIO()
    Image.new("RGB", (16, 16), color=(255, 255, 255)).save(buf, format=image_format)
    return buf.getvalue()


@pytest.fixture
def jpeg_bytes():
    return make_image_bytes("JPEG")


@pytest.fixture
def png_bytes():
    return make_image_bytes("PNG")


@pytest.fixture
def stub_client():
    return StubLLMClient()


@pytest.fixture
def stub_gateway(stub_client):
    gateway = StudyGateway(stub_client)
    set_default_gateway(gateway)
    yield gateway
    set_default_gateway(None)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture(autouse=True)
def _media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"
