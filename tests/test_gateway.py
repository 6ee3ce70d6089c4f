import base64
import json
import threading

import pytest

from study.ai.exceptions import DecodeError, TransportError
from study.ai.gateway import StudyGateway, get_default_gateway, set_default_gateway
from study.ai.schemas import EvaluationResult, ModelProfile, ModelSolution
from study.ai.tutor import TUTOR_FALLBACK_ANSWER

from .conftest import StubLLMClient


class OverlappingClient:
    """The first call stays in flight until release_first is set."""

    def __init__(self):
        self.first_started = threading.Event()
        self.release_first = threading.Event()
        self._lock = threading.Lock()
        self._calls = 0

    def send(self, request):
        with self._lock:
            self._calls += 1
            call = self._calls
        query = request.parts[0].text.split('"')[1]
        if call == 1:
            self.first_started.set()
            if not self.release_first.wait(timeout=5):
                return "timed out"
        return f"answer to {query}"


EVALUATION_JSON = json.dumps(
    {
        "score": 7,
        "transcription": "...",
        "gapAnalysis": "...",
        "keyPoints": ["A", "B"],
        "tips": "...",
    }
)

SOLUTION_JSON = json.dumps(
    {
        "intro": "ACID defines transaction guarantees.",
        "body": "Atomicity ... Durability.",
        "conclusion": "ACID keeps data correct.",
        "keywords": ["atomicity", "consistency", "isolation", "durability", "commit"],
    }
)


def gateway_with(response_text="", error=None):
    client = StubLLMClient(response_text=response_text, error=error)
    return StudyGateway(client), client


class TestEvaluateAnswer:
    def test_scenario_vault_context_and_schema_response(self, jpeg_bytes):
        gateway, client = gateway_with(EVALUATION_JSON)

        result = gateway.evaluate_answer(jpeg_bytes, "Exam_Maths_II_2023.pdf")

        assert isinstance(result, EvaluationResult)
        assert result.score == 7
        assert result.key_points == ["A", "B"]
        assert result.transcription == "..."
        request = client.last_request
        assert request.response_schema is not None
        assert "Exam_Maths_II_2023.pdf" in request.parts[1].text

    def test_data_url_image(self, jpeg_bytes):
        gateway, client = gateway_with(EVALUATION_JSON)
        data_url = "data:image/jpeg;base64," + base64.b64encode(jpeg_bytes).decode()

        gateway.evaluate_answer(data_url, "")

        assert client.last_request.parts[0].data == jpeg_bytes

    def test_png_mime_type_is_detected(self, png_bytes):
        gateway, client = gateway_with(EVALUATION_JSON)

        gateway.evaluate_answer(png_bytes, "")

        assert client.last_request.parts[0].mime_type == "image/png"

    def test_transport_failure(self, jpeg_bytes):
        gateway, _ = gateway_with(error=TransportError("network down"))

        with pytest.raises(TransportError):
            gateway.evaluate_answer(jpeg_bytes, "")

    def test_malformed_response(self, jpeg_bytes):
        gateway, _ = gateway_with('{"score": 7}')

        with pytest.raises(DecodeError):
            gateway.evaluate_answer(jpeg_bytes, "")

    @pytest.mark.parametrize("image", [b"", b"definitely not an image", "data:image/jpeg;base64,%%%"])
    def test_bad_image_is_rejected_before_sending(self, image):
        gateway, client = gateway_with(EVALUATION_JSON)

        with pytest.raises(ValueError):
            gateway.evaluate_answer(image, "")
        assert client.requests == []


class TestGenerateNotes:
    def test_returns_text_verbatim(self):
        gateway, client = gateway_with("## Notes\n- point")

        notes = gateway.generate_notes("https://youtu.be/abc", "Graphs")

        assert notes == "## Notes\n- point"
        assert client.last_request.profile is ModelProfile.FAST
        assert client.last_request.response_schema is None

    def test_empty_notes_are_a_transport_error(self):
        gateway, _ = gateway_with("")

        with pytest.raises(TransportError):
            gateway.generate_notes("https://youtu.be/abc")

    def test_blank_url(self):
        gateway, client = gateway_with("notes")

        with pytest.raises(ValueError):
            gateway.generate_notes("  ")
        assert client.requests == []


class TestAskTutor:
    def test_answer(self):
        gateway, client = gateway_with("A heap is a tree-based structure.")

        assert gateway.ask_tutor("What is a heap?", "Nirma University") == (
            "A heap is a tree-based structure."
        )
        assert client.last_request.response_schema is None

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_empty_answer_uses_fallback(self, raw):
        gateway, _ = gateway_with(raw)

        assert gateway.ask_tutor("What is a heap?", "Nirma University") == TUTOR_FALLBACK_ANSWER

    def test_non_json_answer_is_fine(self):
        gateway, _ = gateway_with("{not json")
        assert gateway.ask_tutor("q", "u") == "{not json"

    def test_transport_failure_propagates(self):
        gateway, _ = gateway_with(error=TransportError("boom"))

        with pytest.raises(TransportError):
            gateway.ask_tutor("q", "u")

    def test_overlapping_calls_each_get_their_answer(self):
        client = OverlappingClient()
        gateway = StudyGateway(client)
        finished = []

        def ask(query):
            finished.append(gateway.ask_tutor(query, "Nirma University"))

        first = threading.Thread(target=ask, args=("first?",))
        second = threading.Thread(target=ask, args=("second?",))
        first.start()
        assert client.first_started.wait(timeout=5)
        second.start()
        second.join(timeout=5)
        client.release_first.set()
        first.join(timeout=5)

        assert finished == ["answer to second?", "answer to first?"]
        # the call that finishes last wins
        assert finished[-1] == "answer to first?"


class TestGetModelSolution:
    def test_solution(self):
        gateway, client = gateway_with(SOLUTION_JSON)

        solution = gateway.get_model_solution("Explain the ACID properties.")

        assert isinstance(solution, ModelSolution)
        assert solution.keywords[0] == "atomicity"
        assert client.last_request.response_schema is not None

    def test_non_json_is_decode_error_not_transport_error(self):
        gateway, _ = gateway_with("Here is a perfect answer ...")

        with pytest.raises(DecodeError) as exc_info:
            gateway.get_model_solution("Explain paging.")
        assert not isinstance(exc_info.value, TransportError)

    def test_blank_question(self):
        gateway, _ = gateway_with(SOLUTION_JSON)

        with pytest.raises(ValueError):
            gateway.get_model_solution("")


class TestDefaultGateway:
    def test_built_from_settings(self, settings):
        from unittest.mock import patch

        settings.GEMINI_API_KEY = "settings-key"
        settings.GEMINI_DEEP_MODEL = "deep-x"
        settings.GEMINI_FAST_MODEL = "fast-y"
        settings.GEMINI_REQUEST_TIMEOUT = 30
        set_default_gateway(None)
        try:
            with patch("study.ai.llm_client.genai"):
                gateway = get_default_gateway()
                assert get_default_gateway() is gateway
            assert gateway.llm_client.api_key == "settings-key"
            assert gateway.llm_client.model_name_for(ModelProfile.DEEP) == "deep-x"
            assert gateway.llm_client.model_name_for(ModelProfile.FAST) == "fast-y"
            assert gateway.llm_client.timeout == 30
        finally:
            set_default_gateway(None)
