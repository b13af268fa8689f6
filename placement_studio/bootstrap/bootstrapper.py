from fastapi import FastAPI

from placement_studio.components.logger.logger_interface import LoggerInterface
from placement_studio.dependencies.components import get_components
from placement_studio.dependencies.services import get_studio_service
from placement_studio.services.PreviewService.preview_service_interface import (
    PreviewServiceInterface,
)
from placement_studio.services.StudioService.studio_service_interface import (
    StudioServiceInterface,
)
from placement_studio.web.routes import create_app


def bootstrap_app(
    env: str = "development",
    config_path: str = "configuration",
) -> FastAPI:
    components = get_components(env=env, config_path=config_path)
    studio: StudioServiceInterface = get_studio_service(components)

    return create_app(
        studio=studio,
        preview_service=components.get_component(PreviewServiceInterface),
        logger=components.get_component(LoggerInterface).get_logger("WebApp"),
    )
