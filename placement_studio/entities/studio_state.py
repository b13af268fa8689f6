from dataclasses import dataclass
from enum import Enum
from typing_extensions import TypedDict

from placement_studio.entities.image import UploadedImage


class StudioStatus(str, Enum):
    IDLE = "idle"
    READY = "ready"
    GENERATING = "generating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class StudioState:
    """
    Mutable view state owned by the studio service.

    `is_loading` and `result` are never both set; selecting an image clears
    both `result` and `error_message`.
    """

    character_image: UploadedImage | None = None
    product_image: UploadedImage | None = None
    result: str | None = None
    is_loading: bool = False
    error_message: str | None = None

    @property
    def has_both_images(self) -> bool:
        return self.character_image is not None and self.product_image is not None

    @property
    def can_generate(self) -> bool:
        return self.has_both_images and not self.is_loading

    @property
    def status(self) -> StudioStatus:
        if self.is_loading:
            return StudioStatus.GENERATING
        if self.result is not None:
            return StudioStatus.SUCCEEDED
        if self.error_message is not None:
            return StudioStatus.FAILED
        if self.has_both_images:
            return StudioStatus.READY
        return StudioStatus.IDLE


class StudioSnapshot(TypedDict):
    """Serializable state returned to the browser."""

    status: str
    is_loading: bool
    can_generate: bool
    error_message: str | None
    result: str | None
    character_preview_url: str | None
    product_preview_url: str | None
