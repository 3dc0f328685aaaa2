# giftfinder/llm.py

import json
from typing import Any, Dict, Optional

import requests

from . import config
from .errors import GatewayError, MalformedResponseError
from .logger import get_logger

log = get_logger(__name__, component="llm")

MIME_TEXT = "text/plain"
MIME_JSON = "application/json"


def _api_key() -> str:
    # Env first, then Streamlit secrets if running under Streamlit
    key = config.GEMINI_API_KEY
    if key:
        return key
    try:
        import streamlit as st
        key = str(st.secrets.get("GEMINI_API_KEY") or "").strip()
    except Exception:
        log.debug("streamlit_secrets_unavailable")
    return key


def _endpoint() -> str:
    return f"{config.GEMINI_API_BASE}/models/{config.GEMINI_MODEL}:generateContent"


def build_payload(prompt: str, schema: Optional[Dict[str, Any]] = None, mime_type: str = MIME_TEXT) -> Dict[str, Any]:
    generation_config: Dict[str, Any] = {"responseMimeType": mime_type}
    if schema:
        generation_config["responseSchema"] = schema
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }


def _upstream_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return "Unknown error"
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message") or "Unknown error"
    return "Unknown error"


def _payload_text(body: Any) -> str:
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponseError("No content received from API.")
    if not isinstance(text, str):
        raise MalformedResponseError("No content received from API.")
    return text


def call_gemini(prompt: str, schema: Optional[Dict[str, Any]] = None, mime_type: str = MIME_TEXT) -> Any:
    """
    Sends one generateContent request and waits for the reply.
    Returns the parsed JSON value when mime_type is application/json, else the raw text.
    """
    key = _api_key()
    if not key:
        raise GatewayError(
            "GEMINI_API_KEY not set. Add it to .streamlit/secrets.toml or set it as an environment variable."
        )

    log.info("gateway_request", model=config.GEMINI_MODEL, mime_type=mime_type, prompt_chars=len(prompt))
    try:
        resp = requests.post(
            _endpoint(),
            params={"key": key},
            headers={"Content-Type": "application/json"},
            json=build_payload(prompt, schema, mime_type),
        )
    except requests.RequestException as exc:
        log.error("gateway_transport_failed", error=str(exc))
        raise GatewayError(str(exc)) from exc

    if not resp.ok:
        message = _upstream_message(resp)
        log.error("gateway_status_failed", status=resp.status_code, message=message)
        raise GatewayError(message, status=resp.status_code, reason=resp.reason or "")

    try:
        body = resp.json()
    except ValueError as exc:
        raise MalformedResponseError("Response body is not valid JSON.") from exc

    text = _payload_text(body)
    if mime_type != MIME_JSON:
        return text

    try:
        return json.loads(text)
    except ValueError as exc:
        log.error("gateway_payload_not_json", payload_chars=len(text))
        raise MalformedResponseError(f"Could not parse JSON payload: {exc}") from exc


def llm_json(prompt: str, schema: Optional[Dict[str, Any]] = None) -> Any:
    """Gets a structured JSON response, already parsed."""
    return call_gemini(prompt, schema=schema, mime_type=MIME_JSON)


def llm_text(prompt: str) -> str:
    """Gets a normal text response as a string."""
    return call_gemini(prompt, mime_type=MIME_TEXT)
