"""Tests for the generative API client (``giftfinder.llm``)."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
import requests

from giftfinder import config
from giftfinder.errors import GatewayError, MalformedResponseError
from giftfinder.llm import MIME_JSON, MIME_TEXT, build_payload, call_gemini, llm_json, llm_text
from giftfinder.prompts import GIFT_IDEAS_SCHEMA

from .conftest import gemini_body, make_response


class TestPayload:

    def test_text_payload_has_no_schema(self) -> None:
        payload = build_payload("hello")
        assert payload == {
            "contents": [{"role": "user", "parts": [{"text": "hello"}]}],
            "generationConfig": {"responseMimeType": "text/plain"},
        }

    def test_json_payload_carries_schema(self) -> None:
        payload = build_payload("hello", GIFT_IDEAS_SCHEMA, MIME_JSON)
        assert payload["generationConfig"]["responseMimeType"] == "application/json"
        assert payload["generationConfig"]["responseSchema"] is GIFT_IDEAS_SCHEMA


class TestSuccess:

    def test_text_returned_raw(self) -> None:
        with patch("giftfinder.llm.requests.post", return_value=make_response(body=gemini_body("Happy day!"))) as post:
            assert llm_text("write") == "Happy day!"
        post.assert_called_once()
        args, kwargs = post.call_args
        assert args[0] == "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
        assert kwargs["params"] == {"key": "test-key-not-real"}
        assert kwargs["json"]["generationConfig"]["responseMimeType"] == MIME_TEXT

    def test_json_parsed(self) -> None:
        data = [{"name": "Mug", "description": "d", "purchaseLink": "#"}]
        resp = make_response(body=gemini_body(json.dumps(data)))
        with patch("giftfinder.llm.requests.post", return_value=resp):
            assert llm_json("ideas", GIFT_IDEAS_SCHEMA) == data

    def test_json_object_is_returned_as_is(self) -> None:
        resp = make_response(body=gemini_body('{"ideas": []}'))
        with patch("giftfinder.llm.requests.post", return_value=resp):
            assert call_gemini("ideas", mime_type=MIME_JSON) == {"ideas": []}


class TestGatewayErrors:

    def test_non_2xx_carries_status_and_message(self) -> None:
        body = {"error": {"code": 500, "message": "Internal error encountered."}}
        resp = make_response(status=500, body=body, reason="Internal Server Error")
        with patch("giftfinder.llm.requests.post", return_value=resp):
            with pytest.raises(GatewayError) as info:
                llm_text("x")
        assert info.value.status == 500
        assert str(info.value) == "API error: 500 Internal Server Error - Internal error encountered."

    def test_non_json_error_body(self) -> None:
        resp = make_response(status=503, body=ValueError, reason="Service Unavailable")
        with patch("giftfinder.llm.requests.post", return_value=resp):
            with pytest.raises(GatewayError, match="503 Service Unavailable - Unknown error"):
                llm_text("x")

    def test_transport_failure(self) -> None:
        with patch("giftfinder.llm.requests.post", side_effect=requests.ConnectionError("connection refused")):
            with pytest.raises(GatewayError) as info:
                llm_text("x")
        assert info.value.status is None
        assert "connection refused" in str(info.value)

    def test_missing_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "GEMINI_API_KEY", "")
        with patch("giftfinder.llm._api_key", return_value=""):
            with patch("giftfinder.llm.requests.post") as post:
                with pytest.raises(GatewayError, match="GEMINI_API_KEY"):
                    llm_text("x")
        post.assert_not_called()


class TestMalformed:

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": None}]}}]},
            ["unexpected"],
        ],
    )
    def test_missing_content_path(self, body) -> None:
        with patch("giftfinder.llm.requests.post", return_value=make_response(body=body)):
            with pytest.raises(MalformedResponseError, match="No content received from API."):
                llm_text("x")

    def test_invalid_json_payload(self) -> None:
        resp = make_response(body=gemini_body("[{'name': oops"))
        with patch("giftfinder.llm.requests.post", return_value=resp):
            with pytest.raises(MalformedResponseError):
                llm_json("x")

    def test_body_not_json(self) -> None:
        with patch("giftfinder.llm.requests.post", return_value=make_response(body=ValueError)):
            with pytest.raises(MalformedResponseError):
                llm_text("x")
