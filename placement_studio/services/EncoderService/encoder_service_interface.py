from abc import ABC, abstractmethod

from placement_studio.entities.image import EncodedImagePart, ImageSource


class EncoderServiceInterface(ABC):
    @abstractmethod
    async def encode(self, source: ImageSource) -> EncodedImagePart:
        """
        Read an image source and encode its bytes as base64.

        Raises:
            EncodingError: If the source cannot be read or is empty
        """

    @abstractmethod
    def decode_data_uri(self, uri: str) -> tuple[str, bytes]:
        """
        Split a `data:<mime>;base64,<data>` URI into its MIME type and bytes.

        Raises:
            EncodingError: If the URI is not a base64 data URI
        """
