import logging
import uuid

from placement_studio.entities.errors import PreviewNotFoundError
from placement_studio.services.PreviewService.preview_service_interface import (
    PreviewServiceInterface,
)


class PreviewService(PreviewServiceInterface):
    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger
        self._previews: dict[str, tuple[bytes, str]] = {}

    def acquire(self, data: bytes, mime_type: str) -> str:
        handle = uuid.uuid4().hex
        self._previews[handle] = (data, mime_type)
        self.logger.debug(
            "Acquired preview %s (%d bytes, %s)", handle, len(data), mime_type
        )
        return handle

    def get(self, handle: str) -> tuple[bytes, str]:
        try:
            return self._previews[handle]
        except KeyError:
            raise PreviewNotFoundError(handle) from None

    def release(self, handle: str) -> None:
        if self._previews.pop(handle, None) is not None:
            self.logger.debug("Released preview %s", handle)

    def release_all(self) -> int:
        released = len(self._previews)
        self._previews.clear()
        if released:
            self.logger.info("Released %d preview(s)", released)
        return released

    def __len__(self) -> int:
        return len(self._previews)
