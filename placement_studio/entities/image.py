from dataclasses import dataclass
from typing import Literal, Protocol, TypedDict

ImageSlot = Literal["character", "product"]

IMAGE_SLOTS: tuple[ImageSlot, ...] = ("character", "product")


class ImageSource(Protocol):
    """Anything the encoder can read asynchronously."""

    mime_type: str

    async def read(self) -> bytes: ...


class EncodedImagePart(TypedDict):
    """Image payload encoded as base64 for transfer."""

    mime_type: str
    data: str


@dataclass(frozen=True)
class UploadedImage:
    """Image selected by the user, held by the studio until replaced or reset."""

    raw_bytes: bytes
    mime_type: str
    preview_handle: str
    file_name: str | None = None

    async def read(self) -> bytes:
        return self.raw_bytes
