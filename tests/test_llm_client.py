from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from google.genai import errors as genai_errors
from google.genai import types

from study.ai.exceptions import ConfigurationError, TransportError
from study.ai.llm_client import LLMClient
from study.ai.prompt_templates import (
    DEEP_THINKING_BUDGET,
    build_evaluation_request,
    build_notes_request,
    build_solution_request,
    build_tutor_request,
)
from study.ai.schemas import ModelProfile


def make_response(text="ok", finish_reason=types.FinishReason.STOP, parts=()):
    candidate = SimpleNamespace(
        finish_reason=finish_reason, content=SimpleNamespace(parts=list(parts))
    )
    return SimpleNamespace(text=text, candidates=[candidate], prompt_feedback=None)


@pytest.fixture
def genai_mock():
    with patch("study.ai.llm_client.genai") as genai:
        yield genai


@pytest.fixture
def models(genai_mock):
    models = MagicMock()
    genai_mock.Client.return_value.models = models
    models.generate_content.return_value = make_response()
    return models


@pytest.fixture
def client(genai_mock, models):
    return LLMClient(
        api_key="test-key",
        deep_model="models/gemini-deep",
        fast_model="gemini-fast",
        timeout=12.5,
    )


def sent_config(models):
    return models.generate_content.call_args.kwargs["config"]


class TestConstruction:
    def test_missing_key_is_configuration_error(self, genai_mock, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

        with pytest.raises(ConfigurationError):
            LLMClient()
        genai_mock.Client.assert_not_called()

    def test_key_from_environment(self, genai_mock, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("GOOGLE_API_KEY", "env-key")

        client = LLMClient()

        assert client.api_key == "env-key"
        assert genai_mock.Client.call_args.kwargs["api_key"] == "env-key"

    def test_each_client_keeps_its_own_credential(self, genai_mock):
        genai_mock.Client.side_effect = lambda **kwargs: MagicMock(api_key=kwargs["api_key"])

        first = LLMClient(api_key="key-one")
        second = LLMClient(api_key="key-two")

        assert first._client.api_key == "key-one"
        assert second._client.api_key == "key-two"

    def test_timeout_is_passed_in_milliseconds(self, genai_mock, client):
        http_options = genai_mock.Client.call_args.kwargs["http_options"]
        assert http_options.timeout == 12500

    def test_profiles_resolve_to_models(self, client):
        assert client.model_name_for(ModelProfile.DEEP) == "gemini-deep"
        assert client.model_name_for(ModelProfile.FAST) == "gemini-fast"


class TestSend:
    def test_free_text_request(self, client, models):
        models.generate_content.return_value = make_response("  An answer.  ")

        text = client.send(build_tutor_request("What is a heap?", "Nirma University"))

        assert text == "An answer."
        kwargs = models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-fast"
        assert kwargs["contents"][0].text.startswith("You are an AI Tutor")
        config = kwargs["config"]
        assert config.response_mime_type is None
        assert config.response_schema is None
        assert config.max_output_tokens == 2048

    def test_schema_request(self, client, models):
        request = build_solution_request("Explain paging.")

        client.send(request)

        assert models.generate_content.call_args.kwargs["model"] == "gemini-deep"
        config = sent_config(models)
        assert config.response_mime_type == "application/json"
        assert config.response_schema is not None
        assert config.max_output_tokens == request.max_output_tokens + request.thinking_budget

    @pytest.mark.parametrize(
        "build",
        [
            lambda: build_solution_request("Explain paging."),
            lambda: build_evaluation_request(b"\xff\xd8jpeg", "ctx"),
        ],
    )
    def test_deep_requests_carry_thinking_budget(self, client, models, build):
        client.send(build())

        thinking = sent_config(models).thinking_config
        assert thinking is not None
        assert thinking.thinking_budget == DEEP_THINKING_BUDGET

    @pytest.mark.parametrize(
        "build",
        [
            lambda: build_tutor_request("q", "u"),
            lambda: build_notes_request("https://youtu.be/abc"),
        ],
    )
    def test_fast_requests_have_no_thinking_config(self, client, models, build):
        client.send(build())
        assert sent_config(models).thinking_config is None

    def test_inline_parts_become_blobs(self, client, models, jpeg_bytes):
        client.send(build_evaluation_request(jpeg_bytes, "ctx"))

        contents = models.generate_content.call_args.kwargs["contents"]
        assert contents[0].inline_data.data == jpeg_bytes
        assert contents[0].inline_data.mime_type == "image/jpeg"
        assert "ctx" in contents[1].text

    @pytest.mark.parametrize(
        "error",
        [
            ConnectionError("network down"),
            TimeoutError("timed out"),
            genai_errors.ServerError(503, {"error": {"message": "unavailable", "status": "UNAVAILABLE"}}),
            genai_errors.ClientError(403, {"error": {"message": "bad key", "status": "PERMISSION_DENIED"}}),
        ],
    )
    def test_call_failures_are_transport_errors(self, client, models, error):
        models.generate_content.side_effect = error

        with pytest.raises(TransportError) as exc_info:
            client.send(build_tutor_request("q", "u"))
        assert exc_info.value.__cause__ is error

    @pytest.mark.parametrize(
        "finish_reason",
        [types.FinishReason.SAFETY, types.FinishReason.RECITATION, types.FinishReason.PROHIBITED_CONTENT],
    )
    def test_blocked_responses_are_transport_errors(self, client, models, finish_reason):
        models.generate_content.return_value = make_response(None, finish_reason=finish_reason)

        with pytest.raises(TransportError):
            client.send(build_tutor_request("q", "u"))

    def test_blocked_prompt_is_transport_error(self, client, models):
        models.generate_content.return_value = SimpleNamespace(
            text=None,
            candidates=None,
            prompt_feedback=SimpleNamespace(block_reason="SAFETY"),
        )

        with pytest.raises(TransportError):
            client.send(build_tutor_request("q", "u"))

    def test_empty_text_is_returned_as_empty_string(self, client, models):
        models.generate_content.return_value = make_response("   ")
        assert client.send(build_tutor_request("q", "u")) == ""

    def test_text_is_read_from_parts_when_accessor_is_empty(self, client, models):
        parts = [
            SimpleNamespace(text="thinking...", thought=True),
            SimpleNamespace(text="first ", thought=None),
            SimpleNamespace(text=None, thought=None),
            SimpleNamespace(text="second", thought=None),
        ]
        models.generate_content.return_value = make_response(None, parts=parts)

        assert client.send(build_tutor_request("q", "u")) == "first second"

    def test_no_text_anywhere_is_empty_string(self, client, models):
        models.generate_content.return_value = make_response(
            None, finish_reason=types.FinishReason.MAX_TOKENS
        )
        assert client.send(build_tutor_request("q", "u")) == ""
