import os

from placement_studio.bootstrap.components import Components
from placement_studio.components.configuration.configuration_interface import (
    ConfigurationInterface,
)
from placement_studio.components.logger.logger_interface import LoggerInterface
from placement_studio.services.EncoderService.encoder_service import EncoderService
from placement_studio.services.EncoderService.encoder_service_interface import (
    EncoderServiceInterface,
)
from placement_studio.services.GenerationService.generation_service import (
    DEFAULT_MODEL_NAME,
    GenerationService,
)
from placement_studio.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)
from placement_studio.services.PreviewService.preview_service_interface import (
    PreviewServiceInterface,
)
from placement_studio.services.StudioService.studio_service import StudioService
from placement_studio.services.StudioService.studio_service_interface import (
    StudioServiceInterface,
)


def get_api_key() -> str | None:
    """
    Read the generation credential from the process environment.

    `API_KEY` wins; `GEMINI_API_KEY` is accepted as a fallback.
    """
    api_key = os.getenv("API_KEY", "").strip() or os.getenv("GEMINI_API_KEY", "").strip()
    return api_key or None


def get_encoder_service(components: Components) -> EncoderServiceInterface:
    logger = components.get_component(LoggerInterface)
    return EncoderService(logger=logger.get_logger("EncoderService"))


def get_generation_service(components: Components) -> GenerationServiceInterface:
    configuration = components.get_component(ConfigurationInterface)
    model_name = configuration.get_configuration(
        "MODEL_NAME", str, default=DEFAULT_MODEL_NAME
    )

    return GenerationService(
        api_key=get_api_key(),
        model_name=model_name,
        logger=components.get_component(LoggerInterface).get_logger(
            "GenerationService"
        ),
    )


def get_studio_service(components: Components) -> StudioServiceInterface:
    return StudioService(
        encoder=get_encoder_service(components),
        generation_service=get_generation_service(components),
        preview_service=components.get_component(PreviewServiceInterface),
        logger=components.get_component(LoggerInterface).get_logger("StudioService"),
    )
