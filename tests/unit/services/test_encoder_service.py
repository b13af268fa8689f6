import base64
import logging

import pytest

from placement_studio.entities.errors import EncodingError
from placement_studio.entities.image import UploadedImage
from placement_studio.services.EncoderService.encoder_service import (
    EncoderService,
    FileImageSource,
    build_data_uri,
    guess_mime_type,
)


class FailingSource:
    mime_type = "image/png"

    async def read(self) -> bytes:
        raise OSError("device not ready")


@pytest.fixture
def encoder() -> EncoderService:
    return EncoderService(logger=logging.getLogger("EncoderServiceTest"))


@pytest.mark.asyncio
async def test_encode_uploaded_image(encoder: EncoderService) -> None:
    image = UploadedImage(raw_bytes=b"\x00\x01binary\xff", mime_type="image/gif", preview_handle="h")

    part = await encoder.encode(image)

    assert part["mime_type"] == "image/gif"
    assert part["data"] == base64.b64encode(b"\x00\x01binary\xff").decode("ascii")


@pytest.mark.asyncio
async def test_encode_keeps_padding_and_has_no_line_breaks(
    encoder: EncoderService,
) -> None:
    raw = bytes(range(256)) * 4
    image = UploadedImage(raw_bytes=raw, mime_type="image/png", preview_handle="h")

    part = await encoder.encode(image)

    assert "\n" not in part["data"]
    assert part["data"].endswith("=")


@pytest.mark.asyncio
async def test_encode_read_failure_raises_encoding_error(
    encoder: EncoderService,
) -> None:
    with pytest.raises(EncodingError) as exc_info:
        await encoder.encode(FailingSource())

    assert "device not ready" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, OSError)


@pytest.mark.asyncio
async def test_encode_empty_source_raises_encoding_error(
    encoder: EncoderService,
) -> None:
    image = UploadedImage(raw_bytes=b"", mime_type="image/png", preview_handle="h")

    with pytest.raises(EncodingError):
        await encoder.encode(image)


@pytest.mark.asyncio
async def test_encode_file_source(encoder: EncoderService, tmp_path) -> None:
    path = tmp_path / "character.png"
    path.write_bytes(b"png-bytes")

    part = await encoder.encode(FileImageSource(path))

    assert part["mime_type"] == "image/png"
    assert base64.b64decode(part["data"]) == b"png-bytes"


@pytest.mark.asyncio
async def test_encode_missing_file_raises_encoding_error(
    encoder: EncoderService, tmp_path
) -> None:
    with pytest.raises(EncodingError):
        await encoder.encode(FileImageSource(tmp_path / "missing.png"))


@pytest.mark.asyncio
async def test_encoded_bytes_round_trip_through_data_uri(
    encoder: EncoderService,
) -> None:
    raw = b"\x89PNG\r\n\x1a\n" + bytes(range(200))
    image = UploadedImage(raw_bytes=raw, mime_type="image/png", preview_handle="h")

    part = await encoder.encode(image)
    mime_type, decoded = encoder.decode_data_uri(
        build_data_uri(part["mime_type"], part["data"])
    )

    assert mime_type == "image/png"
    assert decoded == raw


def test_decode_rejects_non_data_uri(encoder: EncoderService) -> None:
    with pytest.raises(EncodingError):
        encoder.decode_data_uri("https://example.com/image.png")


def test_decode_rejects_invalid_base64(encoder: EncoderService) -> None:
    with pytest.raises(EncodingError):
        encoder.decode_data_uri("data:image/png;base64,not*base64!")


def test_guess_mime_type() -> None:
    assert guess_mime_type("photo.jpg") == "image/jpeg"
    assert guess_mime_type(None) == "application/octet-stream"
    assert guess_mime_type("no-extension") == "application/octet-stream"
