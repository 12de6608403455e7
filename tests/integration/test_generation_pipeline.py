"""End-to-end generation through the command bus with mocked mirrors."""

from __future__ import annotations

import json

import httpx

import pytest

from src.verse_images.config import GeneratorConfig
from src.verse_images.extension import GENERATE_IMAGES_COMMAND, activate, deactivate
from src.verse_images.host import CommandBus, ExecutionContext
from src.verse_images.storage import InMemoryUserDataStore
from tests.mocks.http import DummyHTTPResponse, configure_httpx, configure_mock_transport

TOKEN = "pipeline-token"


async def start(store: InMemoryUserDataStore):
    bus = CommandBus()
    context = ExecutionContext(execution_token=TOKEN)
    service = await activate(context, bus, store, GeneratorConfig())
    return bus, context, service


@pytest.mark.asyncio
async def test_red_apple_is_generated_cached_and_persisted(monkeypatch):
    recorder = configure_httpx(monkeypatch, [DummyHTTPResponse(200, {"imgs": ["u1", "u2"]})])
    store = InMemoryUserDataStore()
    bus, context, service = await start(store)

    assert await bus.invoke(GENERATE_IMAGES_COMMAND, "a red apple", 0) == ["u1", "u2"]
    assert await bus.invoke(GENERATE_IMAGES_COMMAND, "a red apple", 0) == ["u1", "u2"]
    await deactivate(context, service)

    assert len(recorder.posts) == 1
    assert service.cache.get("a red apple") == ["u1", "u2"]
    assert json.loads(store.data[(TOKEN, "imageUrls")]) == {"a red apple": ["u1", "u2"]}


@pytest.mark.asyncio
@pytest.mark.parametrize("mirror", [0, 1, 2])
async def test_non_json_bodies_resolve_to_empty_list(monkeypatch, mirror):
    configure_httpx(monkeypatch, [DummyHTTPResponse(200, text="<html>502</html>")] * 3)
    bus, context, service = await start(InMemoryUserDataStore())

    assert await bus.invoke(GENERATE_IMAGES_COMMAND, "p", mirror) == []
    await deactivate(context, service)


@pytest.mark.asyncio
async def test_unknown_mirror_behaves_like_default(monkeypatch):
    recorder = configure_httpx(monkeypatch, [DummyHTTPResponse(200, {"imgs": ["u1"]})])
    bus, context, service = await start(InMemoryUserDataStore())

    assert await bus.invoke(GENERATE_IMAGES_COMMAND, "p", 17) == ["u1"]
    assert recorder.posts[0]["url"] == "https://chat-gpt.pictures/api/generateImage"
    await deactivate(context, service)


@pytest.mark.asyncio
async def test_restart_serves_persisted_result_without_network(monkeypatch):
    recorder = configure_httpx(monkeypatch, [DummyHTTPResponse(200, {"images": ["QUJD"]})] * 3)
    store = InMemoryUserDataStore()
    bus, context, service = await start(store)
    first = await bus.invoke(GENERATE_IMAGES_COMMAND, "In the beginning", 2)
    await deactivate(context, service)

    bus, context, service = await start(store)
    second = await bus.invoke(GENERATE_IMAGES_COMMAND, "In the beginning", 2)
    await deactivate(context, service)

    assert first == second == ["data:image/png;base64,QUJD"] * 3
    assert len(recorder.posts) == 3


def answer_by_host(request: httpx.Request) -> httpx.Response:
    if request.url.host == "chat-gpt.pictures":
        return httpx.Response(200, json={"imgs": ["caption-url"]})
    if "craiyon" in request.url.host:
        return httpx.Response(200, json={"images": ["a.webp"]})
    return httpx.Response(200, json={"images": ["aGk="]})


@pytest.mark.asyncio
@pytest.mark.parametrize("mirror", [0, 1])
async def test_unencodable_prompt_resolves_to_empty_list(monkeypatch, mirror):
    requests = configure_mock_transport(monkeypatch, answer_by_host)
    store = InMemoryUserDataStore()
    bus, context, service = await start(store)

    assert await bus.invoke(GENERATE_IMAGES_COMMAND, "apple \ud800", mirror) == []
    await deactivate(context, service)

    assert requests == []
    assert len(service.cache) == 0


@pytest.mark.asyncio
async def test_unencodable_prompt_is_sanitized_for_svgio(monkeypatch):
    requests = configure_mock_transport(monkeypatch, answer_by_host)
    bus, context, service = await start(InMemoryUserDataStore())

    result = await bus.invoke(GENERATE_IMAGES_COMMAND, "apple \ud800", 2)
    await deactivate(context, service)

    assert result == ["data:image/png;base64,aGk="] * 3
    assert [json.loads(request.content)["prompt"] for request in requests] == ["apple "] * 3


@pytest.mark.asyncio
async def test_integral_float_mirror_id_selects_craiyon(monkeypatch):
    requests = configure_mock_transport(monkeypatch, answer_by_host)
    bus, context, service = await start(InMemoryUserDataStore())

    result = await bus.invoke(GENERATE_IMAGES_COMMAND, "apple", 1.0)
    await deactivate(context, service)

    assert result == ["https://img.craiyon.com/a.webp"]
    assert [request.url.host for request in requests] == ["api.craiyon.com"]
