"""
Studio orchestrator.

Holds the single view state and moves it through
idle -> ready -> generating -> succeeded | failed. The loading flag is the
only lock: it is checked and set with no await in between, so at most one
generation call is in flight on the event loop.
"""

from __future__ import annotations

import logging

from placement_studio.entities.errors import (
    NoResultError,
    StudioBusyError,
    StudioError,
    ValidationError,
)
from placement_studio.entities.image import IMAGE_SLOTS, ImageSlot, UploadedImage
from placement_studio.entities.studio_state import StudioState
from placement_studio.services.EncoderService.encoder_service import guess_mime_type
from placement_studio.services.EncoderService.encoder_service_interface import (
    EncoderServiceInterface,
)
from placement_studio.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)
from placement_studio.services.PreviewService.preview_service_interface import (
    PreviewServiceInterface,
)
from placement_studio.services.StudioService.studio_service_interface import (
    StudioServiceInterface,
)

DOWNLOAD_FILE_NAME = "generated-product-placement.png"

MISSING_IMAGES_MESSAGE = "Please upload both a character and a product image."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
BUSY_MESSAGE = "An image is being generated. Wait for it to finish."


class StudioService(StudioServiceInterface):
    def __init__(
        self,
        encoder: EncoderServiceInterface,
        generation_service: GenerationServiceInterface,
        preview_service: PreviewServiceInterface,
        logger: logging.Logger,
    ) -> None:
        self.encoder = encoder
        self.generation_service = generation_service
        self.preview_service = preview_service
        self.logger = logger
        self._state = StudioState()

    @property
    def state(self) -> StudioState:
        return self._state

    async def select_image(
        self,
        slot: ImageSlot,
        raw_bytes: bytes,
        mime_type: str | None,
        file_name: str | None = None,
    ) -> StudioState:
        if slot not in IMAGE_SLOTS:
            raise ValueError(f"Unknown image slot: {slot}")

        if self._state.is_loading:
            raise StudioBusyError(BUSY_MESSAGE)

        resolved_mime = mime_type or guess_mime_type(file_name)
        image = UploadedImage(
            raw_bytes=raw_bytes,
            mime_type=resolved_mime,
            preview_handle=self.preview_service.acquire(raw_bytes, resolved_mime),
            file_name=file_name,
        )

        previous = self._get_image(slot)
        if previous is not None:
            self.preview_service.release(previous.preview_handle)

        self._set_image(slot, image)
        self._state.result = None
        self._state.error_message = None

        self.logger.info(
            "Selected %s image %s (%s, %d bytes)",
            slot,
            file_name or "<unnamed>",
            resolved_mime,
            len(raw_bytes),
        )
        return self._state

    async def generate(self) -> StudioState:
        state = self._state
        if state.is_loading:
            self.logger.debug("Generation already in progress; ignoring request")
            return state

        try:
            character, product = self._require_images()
        except ValidationError as error:
            state.error_message = str(error)
            return state

        state.is_loading = True
        state.error_message = None
        state.result = None

        try:
            encoded_character = await self.encoder.encode(character)
            encoded_product = await self.encoder.encode(product)
            result = await self.generation_service.generate(
                encoded_character, encoded_product
            )
        except StudioError as error:
            self.logger.warning("Generation failed: %s", error)
            state.error_message = str(error)
        except Exception as error:
            self.logger.error(
                "Unexpected error during generation: %s", error, exc_info=True
            )
            state.error_message = str(error) or UNKNOWN_ERROR_MESSAGE
        else:
            state.result = result
            self.logger.info("Generation succeeded")
        finally:
            state.is_loading = False

        return state

    def reset(self) -> StudioState:
        if self._state.is_loading:
            raise StudioBusyError(BUSY_MESSAGE)

        self.close()
        self._state.character_image = None
        self._state.product_image = None
        self._state.result = None
        self._state.error_message = None
        self.logger.info("Studio reset")
        return self._state

    def download(self) -> tuple[bytes, str, str]:
        if self._state.result is None:
            raise NoResultError("No generated image to download.")

        mime_type, data = self.encoder.decode_data_uri(self._state.result)
        return data, mime_type, DOWNLOAD_FILE_NAME

    def close(self) -> None:
        for image in (self._state.character_image, self._state.product_image):
            if image is not None:
                self.preview_service.release(image.preview_handle)

    def _require_images(self) -> tuple[UploadedImage, UploadedImage]:
        character = self._state.character_image
        product = self._state.product_image
        if character is None or product is None:
            raise ValidationError(MISSING_IMAGES_MESSAGE)
        return character, product

    def _get_image(self, slot: ImageSlot) -> UploadedImage | None:
        if slot == "character":
            return self._state.character_image
        return self._state.product_image

    def _set_image(self, slot: ImageSlot, image: UploadedImage) -> None:
        if slot == "character":
            self._state.character_image = image
        else:
            self._state.product_image = image
