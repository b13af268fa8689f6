from __future__ import annotations

import base64
import logging

import pytest
from fastapi.testclient import TestClient

from placement_studio.entities.errors import NoImageProducedError
from placement_studio.entities.image import EncodedImagePart
from placement_studio.services.EncoderService.encoder_service import EncoderService
from placement_studio.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)
from placement_studio.services.PreviewService.preview_service import PreviewService
from placement_studio.services.StudioService.studio_service import StudioService
from placement_studio.web.routes import create_app

GENERATED_BYTES = b"generated-image"


class StubGeneration(GenerationServiceInterface):
    def __init__(self) -> None:
        self.error: Exception | None = None
        self.calls = 0

    async def generate(
        self, character: EncodedImagePart, product: EncodedImagePart
    ) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return "data:image/png;base64," + base64.b64encode(GENERATED_BYTES).decode()


@pytest.fixture
def generation() -> StubGeneration:
    return StubGeneration()


@pytest.fixture
def previews() -> PreviewService:
    return PreviewService(logger=logging.getLogger("RoutesTest"))


@pytest.fixture
def client(generation: StubGeneration, previews: PreviewService):
    logger = logging.getLogger("RoutesTest")
    studio = StudioService(
        encoder=EncoderService(logger=logger),
        generation_service=generation,
        preview_service=previews,
        logger=logger,
    )
    with TestClient(create_app(studio, previews, logger)) as test_client:
        yield test_client


def upload(client: TestClient, slot: str, data: bytes, name: str = "image.png"):
    return client.post(
        f"/api/images/{slot}", files={"file": (name, data, "image/png")}
    )


def test_index_serves_page(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert 'accept="image/*"' in resp.text


def test_initial_state(client: TestClient) -> None:
    resp = client.get("/api/state")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "idle"
    assert data["can_generate"] is False
    assert data["character_preview_url"] is None


def test_upload_exposes_preview(client: TestClient) -> None:
    resp = upload(client, "character", b"character-bytes")
    assert resp.status_code == 200
    preview_url = resp.json()["character_preview_url"]
    assert preview_url.startswith("/previews/")

    preview = client.get(preview_url)
    assert preview.status_code == 200
    assert preview.content == b"character-bytes"
    assert preview.headers["content-type"] == "image/png"


def test_upload_unknown_slot_returns_404(client: TestClient) -> None:
    resp = upload(client, "background", b"bytes")
    assert resp.status_code == 404


def test_replaced_preview_is_no_longer_served(client: TestClient) -> None:
    old_url = upload(client, "product", b"old").json()["product_preview_url"]
    new_url = upload(client, "product", b"new").json()["product_preview_url"]

    assert client.get(old_url).status_code == 404
    assert client.get(new_url).content == b"new"


def test_generate_and_download(client: TestClient, generation: StubGeneration) -> None:
    upload(client, "character", b"character-bytes")
    ready = upload(client, "product", b"product-bytes").json()
    assert ready["status"] == "ready"
    assert ready["can_generate"] is True

    resp = client.post("/api/generate")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "succeeded"
    assert data["result"].startswith("data:image/png;base64,")
    assert data["is_loading"] is False
    assert generation.calls == 1

    download = client.get("/api/download")
    assert download.status_code == 200
    assert download.content == GENERATED_BYTES
    assert (
        download.headers["content-disposition"]
        == 'attachment; filename="generated-product-placement.png"'
    )


def test_generate_without_images_reports_validation_message(
    client: TestClient, generation: StubGeneration
) -> None:
    data = client.post("/api/generate").json()

    assert data["error_message"] == "Please upload both a character and a product image."
    assert generation.calls == 0


def test_generate_failure_is_reported(
    client: TestClient, generation: StubGeneration
) -> None:
    generation.error = NoImageProducedError(
        "No image was generated. The model may have refused the prompt."
    )
    upload(client, "character", b"c")
    upload(client, "product", b"p")

    data = client.post("/api/generate").json()

    assert data["status"] == "failed"
    assert data["error_message"].startswith("No image was generated.")
    assert data["result"] is None


def test_download_without_result_returns_404(client: TestClient) -> None:
    assert client.get("/api/download").status_code == 404


def test_reset_releases_previews(client: TestClient, previews: PreviewService) -> None:
    url = upload(client, "character", b"c").json()["character_preview_url"]

    data = client.post("/api/reset").json()

    assert data["status"] == "idle"
    assert len(previews) == 0
    assert client.get(url).status_code == 404


def test_shutdown_releases_previews(
    generation: StubGeneration, previews: PreviewService
) -> None:
    logger = logging.getLogger("RoutesTest")
    studio = StudioService(
        encoder=EncoderService(logger=logger),
        generation_service=generation,
        preview_service=previews,
        logger=logger,
    )
    with TestClient(create_app(studio, previews, logger)) as test_client:
        upload(test_client, "character", b"c")
        assert len(previews) == 1

    assert len(previews) == 0


def test_reset_while_generating_returns_409(
    generation: StubGeneration, previews: PreviewService
) -> None:
    logger = logging.getLogger("RoutesTest")
    studio = StudioService(
        encoder=EncoderService(logger=logger),
        generation_service=generation,
        preview_service=previews,
        logger=logger,
    )
    with TestClient(create_app(studio, previews, logger)) as test_client:
        upload(test_client, "character", b"c")
        studio.state.is_loading = True

        resp = test_client.post("/api/reset")

        assert resp.status_code == 409
        assert studio.state.character_image is not None
        studio.state.is_loading = False
