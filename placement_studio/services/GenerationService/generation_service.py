"""
GenerationService backed by the Google Gen AI SDK.

Performs exactly one generate_content call per request: two inline images
(character first, product second) followed by a fixed instruction, with both
image and text declared as response modalities. No retries happen here.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from langfuse import observe

from placement_studio.entities.errors import (
    ConfigurationError,
    NetworkError,
    NoImageProducedError,
)
from placement_studio.entities.image import EncodedImagePart
from placement_studio.services.EncoderService.encoder_service import build_data_uri
from placement_studio.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)

DEFAULT_MODEL_NAME = "gemini-2.5-flash-image-preview"

PLACEMENT_INSTRUCTION = (
    "Take the character from the first image and have them use or interact "
    "with the product from the second image. "
    "It is crucial that you maintain the exact art style, proportions, and size "
    "of the original character image. "
    "The final output image must have the same dimensions and aspect ratio as "
    "the first input image."
)

MISSING_CREDENTIAL_MESSAGE = "API_KEY environment variable not set."
NO_IMAGE_MESSAGE = "No image was generated. The model may have refused the prompt."


class GenerationService(GenerationServiceInterface):
    def __init__(
        self,
        api_key: str | None,
        logger: logging.Logger,
        model_name: str = DEFAULT_MODEL_NAME,
    ) -> None:
        self.api_key = (api_key or "").strip() or None
        self.model_name = model_name
        self.logger = logger
        self._client: genai.Client | None = None

        if self.api_key is None:
            self.logger.warning(
                "GenerationService created without a credential; "
                "generation requests will fail"
            )

    def _get_client(self) -> genai.Client:
        if self.api_key is None:
            raise ConfigurationError(MISSING_CREDENTIAL_MESSAGE)

        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
            self.logger.info(
                "Initialized GenAI client for image generation (model=%s)",
                self.model_name,
            )
        return self._client

    @staticmethod
    def _inline_part(image: EncodedImagePart) -> types.Part:
        return types.Part.from_bytes(
            data=base64.b64decode(image["data"]),
            mime_type=image["mime_type"],
        )

    def build_contents(
        self,
        character: EncodedImagePart,
        product: EncodedImagePart,
    ) -> list[types.Content]:
        return [
            types.Content(
                role="user",
                parts=[
                    self._inline_part(character),
                    self._inline_part(product),
                    types.Part.from_text(text=PLACEMENT_INSTRUCTION),
                ],
            )
        ]

    def build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_modalities=[types.Modality.IMAGE, types.Modality.TEXT],
        )

    # Inputs and outputs are base64 images; keep them out of traces.
    @observe(name="product_placement", capture_input=False, capture_output=False)
    async def generate(
        self,
        character: EncodedImagePart,
        product: EncodedImagePart,
    ) -> str:
        client = self._get_client()

        self.logger.info(
            "Requesting product placement (character=%s, product=%s, model=%s)",
            character["mime_type"],
            product["mime_type"],
            self.model_name,
        )

        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=self.build_contents(character, product),
                config=self.build_config(),
            )
        except (genai_errors.APIError, httpx.HTTPError) as error:
            self.logger.error("Generation request failed: %s", error)
            raise NetworkError(str(error) or type(error).__name__) from error

        return self.extract_image(response)

    def extract_image(self, response: Any) -> str:
        """
        Return the first inline image of the first candidate as a data URI.

        Text parts are collected for logging; when the response has no image
        they usually carry the refusal reason.
        """
        texts: list[str] = []

        for part in _first_candidate_parts(response):
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None:
                data = inline_data.data or b""
                mime_type = inline_data.mime_type or "image/png"
                encoded = base64.b64encode(data).decode("ascii")
                self.logger.info(
                    "Received generated image (%s, %d bytes)", mime_type, len(data)
                )
                return build_data_uri(mime_type, encoded)

            text = getattr(part, "text", None)
            if text:
                texts.append(text)

        model_text = "\n".join(texts) or None
        self.logger.warning("Response contained no image. Model text: %s", model_text)
        raise NoImageProducedError(NO_IMAGE_MESSAGE, model_text=model_text)


def _first_candidate_parts(response: Any) -> list[Any]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    content = getattr(candidates[0], "content", None)
    if content is None:
        return []
    return list(content.parts or [])
