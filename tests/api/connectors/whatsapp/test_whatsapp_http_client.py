"""Testes do cliente HTTP da Graph API (retry e erros da Meta)."""

from __future__ import annotations

import httpx
import pytest

from api.connectors.whatsapp import (
    HttpClient,
    HttpClientConfig,
    HttpError,
    WhatsAppHttpClient,
    is_permanent_error,
    parse_meta_error,
)

ENDPOINT = "https://graph.facebook.com/v22.0/123/messages"
FAST = HttpClientConfig(max_retries=2, backoff_base_seconds=0, backoff_max_seconds=0)


def _async_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHttpClientRetry:
    @pytest.mark.asyncio
    async def test_retries_on_503_then_succeeds(self) -> None:
        statuses = iter([503, 200])
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            status = next(statuses)
            calls.append(status)
            return httpx.Response(status, json={})

        client = HttpClient(FAST, _async_client(handler))

        response = await client.post(ENDPOINT, json={})

        assert response.status_code == 200
        assert calls == [503, 200]

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(429)
            return httpx.Response(429, json={})

        client = HttpClient(FAST, _async_client(handler))

        with pytest.raises(HttpError) as exc_info:
            await client.post(ENDPOINT, json={})

        assert exc_info.value.status_code == 429
        assert exc_info.value.is_retryable
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_does_not_retry_client_errors(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(400)
            return httpx.Response(400, json={})

        response = await HttpClient(FAST, _async_client(handler)).post(ENDPOINT, json={})

        assert response.status_code == 400
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_connection_errors_raise_after_retries(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("sem rede", request=request)

        with pytest.raises(HttpError, match="http_connection_error"):
            await HttpClient(FAST, _async_client(handler)).post(ENDPOINT, json={})


class TestWhatsAppHttpClient:
    @pytest.mark.asyncio
    async def test_sends_bearer_token(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["authorization"]
            return httpx.Response(200, json={"messages": [{"id": "wamid.X"}]})

        client = WhatsAppHttpClient(FAST, _async_client(handler))

        data = await client.send_message(ENDPOINT, "token-1", {"type": "text"})

        assert data["messages"][0]["id"] == "wamid.X"
        assert seen["auth"] == "Bearer token-1"

    @pytest.mark.asyncio
    async def test_empty_token(self) -> None:
        client = WhatsAppHttpClient(FAST, _async_client(lambda r: httpx.Response(200)))

        with pytest.raises(ValueError):
            await client.send_message(ENDPOINT, " ", {})

    @pytest.mark.asyncio
    async def test_meta_error_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": {"type": "OAuthException", "code": 190, "message": "expired"}},
            )

        client = WhatsAppHttpClient(FAST, _async_client(handler))

        with pytest.raises(HttpError) as exc_info:
            await client.send_message(ENDPOINT, "t", {})

        assert exc_info.value.status_code == 190
        assert exc_info.value.is_retryable is False

    @pytest.mark.asyncio
    async def test_invalid_json_response(self) -> None:
        client = WhatsAppHttpClient(
            FAST, _async_client(lambda r: httpx.Response(200, content=b"oops"))
        )

        with pytest.raises(HttpError, match="invalid_response_json"):
            await client.send_message(ENDPOINT, "t", {})


class TestMetaErrors:
    def test_no_error(self) -> None:
        assert parse_meta_error({"messages": []}) is None
        assert parse_meta_error("texto") is None

    def test_throttling_is_not_permanent(self) -> None:
        assert not is_permanent_error(130429, "OAuthException")

    def test_parse(self) -> None:
        error = parse_meta_error({"error": {"type": "InvalidRequest", "code": "x"}})

        assert error is not None
        assert error.error_code == 0
        assert error.is_permanent
