"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from food_photographer.config import Settings
from food_photographer.containers import AppContainer
from food_photographer.domain.images import EncodedImage
from food_photographer.services.generation import GenerationOrchestrator
from food_photographer.services.images import ImageClient, ImageEditor, ImageGenerator
from food_photographer.services.menu import MenuClient, MenuParser
from food_photographer.services.studio import StudioService

EXAMPLE_MENU = """APPETIZERS
Classic Bruschetta - $9
Toasted baguette topped with fresh tomatoes, garlic, basil, and balsamic glaze.

MAINS
Spaghetti Carbonara - $18
Creamy egg-based sauce with pancetta and Pecorino Romano cheese.
"""

EXAMPLE_DISHES: list[dict[str, object]] = [
    {
        "name": "Classic Bruschetta",
        "description": (
            "Toasted baguette topped with fresh tomatoes, garlic, basil, "
            "and balsamic glaze."
        ),
    },
    {
        "name": "Spaghetti Carbonara",
        "description": "Creamy egg-based sauce with pancetta and Pecorino Romano.",
    },
]


@dataclass
class FakeMenuClient(MenuClient):
    """Fake menu client returning a fixed payload."""

    payload: object = field(default_factory=lambda: list(EXAMPLE_DISHES))
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)
    closed: bool = False

    async def extract_dishes(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> object:
        self.calls.append({"model": model, "prompt": prompt, "schema": schema})
        if self.error is not None:
            raise self.error
        return self.payload

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeImageClient(ImageClient):
    """Fake image client that records prompts and fabricates image bytes."""

    failing_dishes: set[str] = field(default_factory=set)
    empty_dishes: set[str] = field(default_factory=set)
    delays: dict[str, float] = field(default_factory=dict)
    edit_result: EncodedImage | None = field(
        default_factory=lambda: EncodedImage("image/png", b"edited-bytes")
    )
    edit_error: Exception | None = None
    edit_delay: float = 0
    generate_calls: list[dict[str, object]] = field(default_factory=list)
    edit_calls: list[dict[str, object]] = field(default_factory=list)
    closed: bool = False

    async def generate_images(
        self,
        *,
        model: str,
        prompt: str,
        count: int,
        mime_type: str,
        aspect_ratio: str,
    ) -> list[bytes]:
        self.generate_calls.append(
            {
                "model": model,
                "prompt": prompt,
                "count": count,
                "mime_type": mime_type,
                "aspect_ratio": aspect_ratio,
            }
        )
        dish = _dish_in_prompt(prompt)
        await asyncio.sleep(self.delays.get(dish, 0))
        if dish in self.failing_dishes:
            raise RuntimeError(f"backend exploded for {dish}")
        if dish in self.empty_dishes:
            return []
        return [f"jpeg:{dish}".encode()]

    async def edit_image(
        self, *, model: str, image: EncodedImage, instruction: str
    ) -> EncodedImage | None:
        self.edit_calls.append(
            {"model": model, "image": image, "instruction": instruction}
        )
        await asyncio.sleep(self.edit_delay)
        if self.edit_error is not None:
            raise self.edit_error
        return self.edit_result

    async def close(self) -> None:
        self.closed = True


def _dish_in_prompt(prompt: str) -> str:
    """Recover the dish name from 'photography of <name>: <description>'."""
    return prompt.split(" of ", maxsplit=1)[1].split(":", maxsplit=1)[0]


def build_studio(
    menu_client: MenuClient, image_client: ImageClient, debug_errors: bool = False
) -> StudioService:
    orchestrator = GenerationOrchestrator(
        menu_parser=MenuParser(client=menu_client, model="text-model"),
        image_generator=ImageGenerator(client=image_client, model="image-model"),
    )
    return StudioService(
        orchestrator=orchestrator,
        image_editor=ImageEditor(client=image_client, model="edit-model"),
        debug_errors=debug_errors,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ai_backend="gemini",
        gemini_api_key="gemini-key",
        openai_api_key="openai-key",
        environment="test",
    )


@pytest.fixture
def menu_client() -> FakeMenuClient:
    return FakeMenuClient()


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest.fixture
def container(
    settings: Settings,
    menu_client: FakeMenuClient,
    image_client: FakeImageClient,
) -> AppContainer:
    studio_service = build_studio(menu_client, image_client)
    orchestrator = studio_service.orchestrator

    async def close_resources() -> None:
        await menu_client.close()
        await image_client.close()

    return AppContainer(
        settings=settings,
        menu_parser=orchestrator.menu_parser,
        image_generator=orchestrator.image_generator,
        image_editor=studio_service.image_editor,
        orchestrator=orchestrator,
        studio_service=studio_service,
        close_resources=close_resources,
    )
