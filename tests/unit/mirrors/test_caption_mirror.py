from __future__ import annotations

import httpx
import pytest

from src.verse_images.errors import AdapterFailure, AdapterNetworkError, ResponseParseFailedError
from src.verse_images.mirrors.mirrors_caption import CaptionMirror
from tests.mocks.http import DummyHTTPResponse, configure_httpx


@pytest.mark.asyncio
async def test_caption_returns_images_in_response_order(monkeypatch):
    recorder = configure_httpx(monkeypatch, [DummyHTTPResponse(200, {"imgs": ["u1", "u2"]})])

    images = await CaptionMirror().generate("a red apple")

    assert images == ["u1", "u2"]
    assert recorder.posts[0]["url"] == "https://chat-gpt.pictures/api/generateImage"
    assert recorder.posts[0]["json"] == {"captionInput": "a red apple", "captionModel": "default"}
    assert recorder.posts[0]["headers"]["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_caption_missing_field_fails_closed(monkeypatch):
    configure_httpx(monkeypatch, [DummyHTTPResponse(200, {"images": ["u1"]})])

    with pytest.raises(ResponseParseFailedError) as excinfo:
        await CaptionMirror().generate("prompt")

    assert excinfo.value.reason is AdapterFailure.RESPONSE_PARSE_FAILED
    assert excinfo.value.mirror == "caption"


@pytest.mark.asyncio
async def test_caption_non_2xx_is_network_failure(monkeypatch):
    configure_httpx(monkeypatch, [DummyHTTPResponse(503, text="unavailable")])

    with pytest.raises(AdapterNetworkError) as excinfo:
        await CaptionMirror().generate("prompt")

    assert excinfo.value.reason is AdapterFailure.NETWORK_FAILURE


@pytest.mark.asyncio
async def test_caption_transport_error_is_network_failure(monkeypatch):
    configure_httpx(monkeypatch, [httpx.ConnectError("boom")])

    with pytest.raises(AdapterNetworkError) as excinfo:
        await CaptionMirror().generate("prompt")

    assert isinstance(excinfo.value.cause, httpx.ConnectError)


@pytest.mark.asyncio
async def test_caption_passes_timeout_to_client(monkeypatch):
    recorder = configure_httpx(monkeypatch, [DummyHTTPResponse(200, {"imgs": []})])

    assert await CaptionMirror(timeout_seconds=12.5).generate("prompt") == []
    assert recorder.client_kwargs[0]["timeout"] == 12.5


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [UnicodeEncodeError("utf-8", "\ud800", 0, 1, "surrogates not allowed"), httpx.InvalidURL("bad")])
async def test_caption_request_build_errors_are_network_failures(monkeypatch, error):
    configure_httpx(monkeypatch, [error])

    with pytest.raises(AdapterNetworkError) as excinfo:
        await CaptionMirror().generate("prompt")

    assert excinfo.value.cause is error
