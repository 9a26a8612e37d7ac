"""Batch orchestration: parse a menu, then photograph every dish."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from food_photographer.domain.images import (
    EncodedImage,
    GeneratedImage,
    new_image_id,
)
from food_photographer.domain.menu import Dish, PhotoStyle
from food_photographer.domain.session import GenerationProgress, SessionPhase
from food_photographer.errors import NoDishesError, ValidationError
from food_photographer.services.images import ImageGenerator
from food_photographer.services.menu import MenuParser

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[GenerationProgress], None]


@dataclass
class GenerationOrchestrator:
    """Runs one all-or-nothing generation batch."""

    menu_parser: MenuParser
    image_generator: ImageGenerator

    async def run(
        self,
        menu_text: str,
        style: PhotoStyle,
        on_progress: ProgressCallback | None = None,
    ) -> list[GeneratedImage]:
        """Return one image per parsed dish, in menu order.

        Any failed dish fails the whole batch; sibling calls are cancelled
        and nothing from the batch is returned.
        """
        validate_menu_text(menu_text)

        _notify(on_progress, parsing_progress())
        dishes = await self.menu_parser.parse_menu(menu_text)
        if not dishes:
            raise NoDishesError("No dishes could be identified from your menu.")

        logger.info("Generating images", extra={"dish_count": len(dishes)})
        _notify(on_progress, generating_progress(len(dishes)))
        encoded = await self._generate_all(dishes, style)
        return [
            GeneratedImage(
                id=new_image_id(dish.name), dish_name=dish.name, image=image
            )
            for dish, image in zip(dishes, encoded, strict=True)
        ]

    async def _generate_all(
        self, dishes: list[Dish], style: PhotoStyle
    ) -> list[EncodedImage]:
        generate = self.image_generator.generate_image
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(generate(dish, style)) for dish in dishes]
        except ExceptionGroup as group_error:
            raise _first_error(group_error)  # noqa: B904
        return [task.result() for task in tasks]


def validate_menu_text(menu_text: str) -> None:
    if not menu_text.strip():
        raise ValidationError("Please enter your menu text.")


def parsing_progress() -> GenerationProgress:
    return GenerationProgress(
        phase=SessionPhase.PARSING, message="Parsing your menu..."
    )


def generating_progress(dish_count: int) -> GenerationProgress:
    noun = "dish" if dish_count == 1 else "dishes"
    return GenerationProgress(
        phase=SessionPhase.GENERATING,
        message=f"Generating photos for {dish_count} {noun}...",
        dish_count=dish_count,
    )


def _notify(callback: ProgressCallback | None, progress: GenerationProgress) -> None:
    if callback is not None:
        callback(progress)


def _first_error(group_error: BaseExceptionGroup) -> BaseException:
    """Unwrap the first leaf exception raised inside a task group."""
    error: BaseException = group_error
    while isinstance(error, BaseExceptionGroup):
        error = error.exceptions[0]
    return error
