"""
Base64 encoding of image payloads.

Images travel to the generation service as base64 text paired with their MIME
type, and come back as self-contained `data:` URIs.
"""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
from pathlib import Path

import aiofiles

from placement_studio.entities.errors import EncodingError
from placement_studio.entities.image import EncodedImagePart, ImageSource
from placement_studio.services.EncoderService.encoder_service_interface import (
    EncoderServiceInterface,
)

DATA_URI_PREFIX = "data:"
BASE64_MARKER = ";base64,"


def build_data_uri(mime_type: str, data: str) -> str:
    return f"{DATA_URI_PREFIX}{mime_type}{BASE64_MARKER}{data}"


def guess_mime_type(file_name: str | None) -> str:
    if file_name:
        guessed, _ = mimetypes.guess_type(file_name)
        if guessed:
            return guessed
    return "application/octet-stream"


class FileImageSource:
    """Image stored on disk, read without blocking the event loop."""

    def __init__(self, path: str | Path, mime_type: str | None = None) -> None:
        self.path = Path(path)
        self.mime_type = mime_type or guess_mime_type(self.path.name)

    async def read(self) -> bytes:
        async with aiofiles.open(self.path, "rb") as handle:
            return await handle.read()


class EncoderService(EncoderServiceInterface):
    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    async def encode(self, source: ImageSource) -> EncodedImagePart:
        try:
            raw = await source.read()
        except Exception as error:
            self.logger.error("Failed to read image source: %s", error)
            raise EncodingError(f"Failed to read image: {error}") from error

        if not raw:
            raise EncodingError("Failed to read image: the file is empty.")

        return {
            "mime_type": source.mime_type,
            "data": base64.b64encode(raw).decode("ascii"),
        }

    def decode_data_uri(self, uri: str) -> tuple[str, bytes]:
        if not uri.startswith(DATA_URI_PREFIX) or BASE64_MARKER not in uri:
            raise EncodingError("Not a base64 data URI.")

        header, _, payload = uri.partition(BASE64_MARKER)
        mime_type = header[len(DATA_URI_PREFIX) :] or "application/octet-stream"

        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as error:
            raise EncodingError(f"Invalid base64 payload: {error}") from error

        return mime_type, data
