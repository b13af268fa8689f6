from abc import ABC, abstractmethod

from placement_studio.entities.image import ImageSlot
from placement_studio.entities.studio_state import StudioState


class StudioServiceInterface(ABC):
    @property
    @abstractmethod
    def state(self) -> StudioState:
        """Current view state. Callers must treat it as read-only."""

    @abstractmethod
    async def select_image(
        self,
        slot: ImageSlot,
        raw_bytes: bytes,
        mime_type: str | None,
        file_name: str | None = None,
    ) -> StudioState:
        """Store a newly selected image and clear any previous result or error."""

    @abstractmethod
    async def generate(self) -> StudioState:
        """Run one generation attempt; a no-op while another one is pending."""

    @abstractmethod
    def reset(self) -> StudioState:
        """Discard images, result and error. Rejected while a generation is pending."""

    @abstractmethod
    def download(self) -> tuple[bytes, str, str]:
        """Return the generated image bytes, its MIME type and a file name."""

    @abstractmethod
    def close(self) -> None:
        """Release every resource held for the current view."""
