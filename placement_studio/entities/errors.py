class StudioError(Exception):
    """Base error for every failure surfaced to the user."""


class ValidationError(StudioError):
    """Raised when a required image is missing."""


class ConfigurationError(StudioError):
    """Raised when the service credential is not available."""


class EncodingError(StudioError):
    """Raised when an image source cannot be read or decoded."""


class NetworkError(StudioError):
    """Raised when the call to the generation service fails in transport."""


class NoImageProducedError(StudioError):
    def __init__(self, message: str, model_text: str | None = None) -> None:
        self.model_text = model_text
        super().__init__(message)


class StudioBusyError(StudioError):
    """Raised when the studio is asked to change images mid-generation."""


class NoResultError(StudioError):
    """Raised when a download is requested before anything was generated."""


class PreviewNotFoundError(StudioError):
    def __init__(self, handle: str) -> None:
        self.handle = handle
        super().__init__(f"Preview not found: {handle}")
