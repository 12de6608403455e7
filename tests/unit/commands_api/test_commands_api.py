from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from src.verse_images.api.main import create_app
from src.verse_images.config import GeneratorConfig
from src.verse_images.extension import GENERATE_IMAGES_COMMAND
from src.verse_images.mirrors import MirrorId
from src.verse_images.mirrors.mirrors_router import MirrorRouter
from src.verse_images.storage import InMemoryUserDataStore
from tests.mocks.mirrors import RecordingMirror


@pytest.fixture
def store() -> InMemoryUserDataStore:
    return InMemoryUserDataStore()


@pytest.fixture
def client(store):
    router = MirrorRouter(
        {
            MirrorId.CAPTION: RecordingMirror(label="zero"),
            MirrorId.CRAIYON: RecordingMirror(label="one"),
        }
    )
    app = create_app(GeneratorConfig(execution_token="api-token"), store=store, mirror_router=router)
    with TestClient(app) as test_client:
        yield test_client


def test_generate_images_over_http(client, store):
    response = client.post(f"/api/commands/{GENERATE_IMAGES_COMMAND}", json={"args": ["a lamb", 1]})

    assert response.status_code == 200
    assert response.json() == {"result": ["one:a lamb"]}


def test_generate_images_defaults_mirror(client):
    response = client.post(f"/api/commands/{GENERATE_IMAGES_COMMAND}", json={"args": ["a lamb"]})

    assert response.json() == {"result": ["zero:a lamb"]}


def test_empty_prompt_is_bad_request(client):
    response = client.post(f"/api/commands/{GENERATE_IMAGES_COMMAND}", json={"args": [""]})

    assert response.status_code == 400
    assert response.json()["detail"] == "prompt required"


def test_unknown_command_is_not_found(client):
    response = client.post("/api/commands/verseImageGenerator.nope", json={"args": []})

    assert response.status_code == 404


def test_shutdown_flushes_cache(store):
    router = MirrorRouter({MirrorId.CAPTION: RecordingMirror(label="zero")})
    app = create_app(GeneratorConfig(execution_token="api-token"), store=store, mirror_router=router)
    with TestClient(app) as test_client:
        test_client.post(f"/api/commands/{GENERATE_IMAGES_COMMAND}", json={"args": ["p"]})

    assert store.data[("api-token", "imageUrls")] == '{"p": ["zero:p"]}'
