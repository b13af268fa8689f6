from abc import ABC, abstractmethod


class PreviewServiceInterface(ABC):
    """Issues scoped handles that let the browser display uploaded images."""

    @abstractmethod
    def acquire(self, data: bytes, mime_type: str) -> str:
        """
        Register image bytes and return a new handle for them.

        Args:
            data: Raw image bytes
            mime_type: MIME type served alongside the bytes

        Returns:
            Opaque handle, valid until released
        """

    @abstractmethod
    def get(self, handle: str) -> tuple[bytes, str]:
        """Return the bytes and MIME type behind a live handle."""

    @abstractmethod
    def release(self, handle: str) -> None:
        """Free a handle. Releasing an unknown handle does nothing."""

    @abstractmethod
    def release_all(self) -> int:
        """Free every live handle and return how many were released."""

    @abstractmethod
    def __len__(self) -> int:
        pass
