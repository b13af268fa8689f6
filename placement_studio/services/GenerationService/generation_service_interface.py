from abc import ABC, abstractmethod

from placement_studio.entities.image import EncodedImagePart


class GenerationServiceInterface(ABC):
    @abstractmethod
    async def generate(
        self,
        character: EncodedImagePart,
        product: EncodedImagePart,
    ) -> str:
        """
        Place the character from the first image together with the product.

        Args:
            character: Encoded character image; its style and size are kept
            product: Encoded product image

        Returns:
            The generated image as a `data:<mime>;base64,<data>` URI

        Raises:
            ConfigurationError: If no credential was configured
            NetworkError: If the service call fails in transport
            NoImageProducedError: If the response carries no image part
        """
