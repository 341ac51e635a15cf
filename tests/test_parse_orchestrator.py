"""Tests for the AI-first / heuristic-fallback parse graph."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from rxparse.agent.nodes import route_after_ai, route_start
from rxparse.services.parsing import parse_prescription

POST = "rxparse.services.groq_client.requests.post"
LINE = "Ars Alb 1M 1/2oz liquid 6-6-6 4 weeks"

AI_PAYLOAD = {
    "medicineName": "Arsenicum Album",
    "potency": "1M",
    "quantity": "1/2oz",
    "doseForm": "liquid",
    "dosePerIntake": "",
    "frequency": "TDS",
    "pattern": "6-6-6",
    "duration": "4 weeks",
    "confidence": 0.9,
}


@pytest.fixture(autouse=True)
def no_configured_key():
    with patch("rxparse.services.parsing.AI_API_KEY", ""):
        yield


class TestRouting:
    @pytest.mark.parametrize("state,expected", [
        ({"use_ai": True, "api_key": "k", "raw_text": "Arnica"}, "ai"),
        ({"use_ai": False, "api_key": "k", "raw_text": "Arnica"}, "heuristic"),
        ({"use_ai": True, "api_key": " ", "raw_text": "Arnica"}, "heuristic"),
        ({"use_ai": True, "api_key": "k", "raw_text": ""}, "heuristic"),
    ])
    def test_route_start(self, state, expected):
        assert route_start(state) == expected

    def test_route_after_ai(self):
        assert route_after_ai({"success": True}) == "done"
        assert route_after_ai({"success": False}) == "heuristic"


class TestParsePrescription:
    def test_heuristic_when_ai_disabled(self):
        with patch(POST) as post:
            res = parse_prescription(LINE, use_ai=False, api_key="sk-test")
        post.assert_not_called()
        assert res.success is True
        assert res.method == "regex"
        assert res.data.medicine_name == "Ars Alb"
        assert res.data.confidence == 0.5

    def test_heuristic_without_credential(self):
        with patch(POST) as post:
            res = parse_prescription(LINE, use_ai=True)
        post.assert_not_called()
        assert res.method == "regex"

    def test_configured_credential_is_used(self, completion):
        with patch("rxparse.services.parsing.AI_API_KEY", "sk-env"), \
                patch(POST, return_value=completion(AI_PAYLOAD)) as post:
            res = parse_prescription(LINE, use_ai=True)
        assert res.method == "ai"
        assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer sk-env"

    def test_use_ai_setting_is_the_default(self, completion):
        with patch("rxparse.services.parsing.USE_AI_PARSING", True), \
                patch(POST, return_value=completion(AI_PAYLOAD)):
            assert parse_prescription(LINE, api_key="sk-test").method == "ai"

    def test_ai_success(self, completion):
        with patch(POST, return_value=completion(AI_PAYLOAD)) as post:
            res = parse_prescription(LINE, use_ai=True, api_key="sk-test")
        post.assert_called_once()
        assert res.success is True
        assert res.method == "ai"
        assert res.data.medicine_name == "Arsenicum Album"
        assert res.data.confidence == 0.9

    def test_ai_http_error_falls_back(self, completion):
        with patch(POST, return_value=completion(status_code=500)):
            res = parse_prescription(LINE, use_ai=True, api_key="sk-test")
        assert res.success is True
        assert res.method == "regex"
        assert res.data is not None
        assert res.data.medicine_name == "Ars Alb"
        assert res.error is None

    def test_ai_timeout_falls_back(self):
        with patch(POST, side_effect=requests.Timeout("slow")):
            res = parse_prescription(LINE, use_ai=True, api_key="sk-test", timeout_s=0.5)
        assert res.method == "regex"

    def test_ai_without_name_falls_back(self, completion):
        with patch(POST, return_value=completion({**AI_PAYLOAD, "medicineName": ""})):
            res = parse_prescription(LINE, use_ai=True, api_key="sk-test")
        assert res.method == "regex"
        assert res.data.medicine_name == "Ars Alb"

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_input(self, text):
        with patch(POST) as post:
            res = parse_prescription(text, use_ai=True, api_key="sk-test")
        post.assert_not_called()
        assert res.success is False
        assert res.data is None
        assert res.error == "Input is empty"

    def test_no_medicine_name(self):
        res = parse_prescription("200C", use_ai=False)
        assert res.success is False
        assert res.error == "No medicine name found"

    def test_both_paths_fail(self, completion):
        with patch(POST, return_value=completion(status_code=503)):
            res = parse_prescription("200C 4 pills", use_ai=True, api_key="sk-test")
        assert res.success is False
        assert res.error == "No medicine name found"

    def test_malformed_completion_body_falls_back(self):
        resp = MagicMock(status_code=200, text="{}")
        resp.json.return_value = {"choices": ["oops"]}
        with patch(POST, return_value=resp):
            res = parse_prescription(LINE, use_ai=True, api_key="sk-test")
        assert res.success is True
        assert res.method == "regex"
        assert res.data.medicine_name == "Ars Alb"
