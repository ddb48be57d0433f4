"""Tests for FastAPI web module."""

from __future__ import annotations

import asyncio
from typing import Iterator

import pytest

pytest.importorskip("fastapi.testclient")

from fastapi.testclient import TestClient  # type: ignore[import-not-found]

from wepar import parser
from wepar.parser import ArticleOutcome, OutcomeStats
from wepar.web import app
from wepar.web.utils import ClientRateLimiter, rate_limiter

URL = "https://mp.weixin.qq.com/s/abc123"


def _client() -> TestClient:
    """Return a test client for the web app."""

    # Create and return a test client for the FastAPI application.
    return TestClient(app)


def _outcome(url: str) -> ArticleOutcome:
    """Stub pipeline result."""

    return ArticleOutcome(
        title="标题",
        content="<p>正文</p>",
        stats=OutcomeStats(content_length=11),
    )


@pytest.fixture(autouse=True)
def _fresh_rate_limit() -> Iterator[None]:
    """Give every test a full request budget."""

    rate_limiter.reset()
    yield
    rate_limiter.reset()


def test_health() -> None:
    """Health endpoint reports success."""

    response = _client().get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "version" in body
    assert "timestamp" in body


def test_parse_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    """Valid links return the parsed title and content."""

    monkeypatch.setattr(parser, "parse_article", _outcome)

    response = _client().post("/api/wechat/parse", json={"url": URL})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["title"] == "标题"
    assert body["data"]["content"] == "<p>正文</p>"
    assert body["data"]["url"] == URL
    assert "parsedAt" in body["data"]


def test_parse_requires_url() -> None:
    """Missing links are rejected."""

    response = _client().post("/api/wechat/parse", json={})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "请提供微信公众号文章链接",
    }


def test_parse_rejects_foreign_url() -> None:
    """Links outside the publishing host are rejected."""

    response = _client().post(
        "/api/wechat/parse", json={"url": "https://example.com/s/x"}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_parse_internal_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Faults escaping the pipeline become a generic 500."""

    def broken(url: str) -> ArticleOutcome:
        raise RuntimeError("boom")

    monkeypatch.setattr(parser, "parse_article", broken)

    response = _client().post("/api/wechat/parse", json={"url": URL})

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert "boom" not in response.text


def test_parse_is_rate_limited(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clients exceeding their budget get 429 with a retry hint."""

    monkeypatch.setattr(parser, "parse_article", _outcome)
    monkeypatch.setattr(
        "wepar.web.routes.parse.rate_limiter",
        ClientRateLimiter(max_rate=1, time_period=60),
    )

    client = _client()
    first = client.post("/api/wechat/parse", json={"url": URL})
    second = client.post("/api/wechat/parse", json={"url": URL})

    assert first.status_code == 200
    assert second.status_code == 429
    assert second.json()["retryAfter"] == 60


def test_unknown_route() -> None:
    """Unknown paths use the error envelope."""

    response = _client().get("/nope")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "接口不存在"}


def test_root_page() -> None:
    """Root page serves the form with caching disabled."""

    response = _client().get("/")

    assert response.status_code == 200
    assert "/api/wechat/parse" in response.text
    assert response.headers["cache-control"].startswith("no-cache")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert "default-src 'self'" in response.headers["content-security-policy"]


def test_cors_preflight() -> None:
    """Any origin may call the API."""

    response = _client().options(
        "/api/wechat/parse",
        headers={
            "Origin": "https://editor.example",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_parse_without_body() -> None:
    """A request without a body is a missing link, not a schema error."""

    response = _client().post("/api/wechat/parse")

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "请提供微信公众号文章链接",
    }


def test_parse_rejects_non_string_url() -> None:
    """Non-string links are reported as invalid links."""

    response = _client().post("/api/wechat/parse", json={"url": 123})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "请提供有效的微信公众号文章链接",
    }


def test_parse_malformed_json() -> None:
    """Unreadable JSON bodies fall back to the missing link answer."""

    response = _client().post(
        "/api/wechat/parse",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "请提供微信公众号文章链接"


def test_parse_accepts_form_data(monkeypatch: pytest.MonkeyPatch) -> None:
    """Form encoded bodies are read like JSON ones."""

    monkeypatch.setattr(parser, "parse_article", _outcome)

    response = _client().post("/api/wechat/parse", data={"url": URL})

    assert response.status_code == 200
    assert response.json()["data"]["url"] == URL


def test_drained_clients_are_forgotten() -> None:
    """Clients whose budget has fully recovered are dropped."""

    limiter = ClientRateLimiter(max_rate=1, time_period=0.01)

    async def scenario() -> set[str]:
        await limiter.consume("10.0.0.1")
        await asyncio.sleep(0.05)
        await limiter.consume("10.0.0.2")
        return set(limiter._limiters)

    assert asyncio.run(scenario()) == {"10.0.0.2"}


def test_busy_clients_are_kept() -> None:
    """Clients still holding part of their budget are remembered."""

    limiter = ClientRateLimiter(max_rate=1, time_period=60)
    limiter._last_sweep -= 120

    async def scenario() -> set[str]:
        await limiter.consume("10.0.0.1")
        limiter._last_sweep -= 120
        await limiter.consume("10.0.0.2")
        return set(limiter._limiters)

    assert asyncio.run(scenario()) == {"10.0.0.1", "10.0.0.2"}
