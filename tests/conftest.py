"""Shared pytest fixtures for the gift finder test suite.

Nothing here touches the network: the generative API is replaced by a
``MagicMock`` standing in for ``requests.post``.
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from giftfinder import config
from giftfinder.models import AppState, Criteria


def make_response(status: int = 200, body: Any = None, reason: str = "OK") -> MagicMock:
    """Build a fake ``requests.Response``; a ``body`` of ``ValueError`` makes ``.json()`` fail."""
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = reason
    if body is ValueError:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = body
    return resp


def gemini_body(text: str) -> dict:
    """Wrap *text* the way generateContent returns it."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def gift_payload(n: int) -> str:
    stores = [
        "https://www.amazon.com/dp/B000000",
        "https://www.etsy.com/listing/123/mug",
        "https://www.target.com/p/thing/-/A-1",
        "https://www.bestbuy.com/site/item/999.p",
        "https://brandsite.example/product/123",
        "https://www.amazon.co.uk/dp/B111111",
    ]
    return json.dumps(
        [
            {"name": f"Gift {i}", "description": f"Description {i}", "purchaseLink": stores[i % len(stores)]}
            for i in range(n)
        ]
    )


@pytest.fixture(autouse=True)
def api_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the configuration the tests assert against."""
    monkeypatch.setattr(config, "GEMINI_API_KEY", "test-key-not-real")
    monkeypatch.setattr(config, "GEMINI_MODEL", "gemini-2.0-flash")
    monkeypatch.setattr(config, "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
    monkeypatch.setattr(config, "AMAZON_ASSOCIATE_TAG", "realstory-20")


@pytest.fixture
def state() -> AppState:
    return AppState(criteria=Criteria(occasion="Birthday", age="30"))
