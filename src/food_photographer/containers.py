"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_photographer.adapters.gemini_image_client import GeminiImageClient
from food_photographer.adapters.gemini_menu_client import GeminiMenuClient
from food_photographer.adapters.openai_image_client import OpenAIImageClient
from food_photographer.adapters.openai_menu_client import OpenAIMenuClient
from food_photographer.adapters.unconfigured_client import UnconfiguredClient
from food_photographer.config import Settings
from food_photographer.services.generation import GenerationOrchestrator
from food_photographer.services.images import ImageClient, ImageEditor, ImageGenerator
from food_photographer.services.menu import MenuClient, MenuParser
from food_photographer.services.studio import StudioService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    menu_parser: MenuParser
    image_generator: ImageGenerator
    image_editor: ImageEditor
    orchestrator: GenerationOrchestrator
    studio_service: StudioService
    close_resources: Callable[[], Awaitable[None]]


@dataclass(frozen=True)
class _BackendModels:
    text: str
    image: str
    edit: str


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    menu_client, image_client = _build_clients(resolved_settings)
    models = _backend_models(resolved_settings)

    menu_parser = MenuParser(
        client=menu_client,
        model=models.text,
        timeout_seconds=resolved_settings.parse_timeout_seconds,
    )
    image_generator = ImageGenerator(
        client=image_client,
        model=models.image,
        timeout_seconds=resolved_settings.generation_timeout_seconds,
    )
    image_editor = ImageEditor(
        client=image_client,
        model=models.edit,
        timeout_seconds=resolved_settings.edit_timeout_seconds,
    )
    orchestrator = GenerationOrchestrator(
        menu_parser=menu_parser, image_generator=image_generator
    )
    studio_service = StudioService(
        orchestrator=orchestrator,
        image_editor=image_editor,
        debug_errors=resolved_settings.environment == "local",
    )

    async def close_resources() -> None:
        await menu_client.close()
        if image_client is not menu_client:
            await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        menu_parser=menu_parser,
        image_generator=image_generator,
        image_editor=image_editor,
        orchestrator=orchestrator,
        studio_service=studio_service,
        close_resources=close_resources,
    )


def _build_clients(settings: Settings) -> tuple[MenuClient, ImageClient]:
    """Create backend clients, or stand-ins that fail when the key is missing."""
    api_key = settings.api_key_for_backend()
    if api_key is None:
        env_var = settings.api_key_env_var()
        logger.warning(
            "AI backend API key is not set; every request will fail until it is",
            extra={"backend": settings.ai_backend, "env_var": env_var},
        )
        unconfigured = UnconfiguredClient(env_var=env_var)
        return unconfigured, unconfigured
    if settings.ai_backend == "openai":
        return (
            OpenAIMenuClient.create(
                api_key,
                reasoning_effort=settings.openai_reasoning_effort,
                store=settings.openai_store,
            ),
            OpenAIImageClient.create(api_key),
        )
    return GeminiMenuClient.create(api_key), GeminiImageClient.create(api_key)


def _backend_models(settings: Settings) -> _BackendModels:
    if settings.ai_backend == "openai":
        return _BackendModels(
            text=settings.openai_text_model,
            image=settings.openai_image_model,
            edit=settings.openai_image_model,
        )
    return _BackendModels(
        text=settings.gemini_text_model,
        image=settings.gemini_image_model,
        edit=settings.gemini_edit_model,
    )
