"""Menu parsing service using structured LLM output."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from food_photographer.domain.menu import Dish
from food_photographer.errors import ConfigurationError, ParseError

logger = logging.getLogger(__name__)

DISH_LIST_SCHEMA: dict[str, object] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "The name of the dish."},
            "description": {
                "type": "string",
                "description": "A brief description of the dish.",
            },
        },
        "required": ["name", "description"],
        "additionalProperties": False,
    },
}

PARSE_FAILED_MESSAGE = (
    "Failed to parse the menu. Please check the format and try again."
)

_DISH_LIST = TypeAdapter(list[Dish])


class MenuClient(Protocol):
    """Interface for structured dish extraction."""

    async def extract_dishes(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> object:
        """Return decoded JSON constrained by ``schema``."""

    async def close(self) -> None:
        """Release network resources."""


@dataclass
class MenuParser:
    """Service that prompts for dishes and validates the result."""

    client: MenuClient
    model: str
    timeout_seconds: float = 60.0

    async def parse_menu(self, menu_text: str) -> list[Dish]:
        """Extract dishes from free-form menu text.

        An empty list means the backend found no dishes; the caller decides
        whether that is an error.
        """
        try:
            async with asyncio.timeout(self.timeout_seconds):
                raw = await self.client.extract_dishes(
                    model=self.model,
                    prompt=build_menu_prompt(menu_text),
                    schema=DISH_LIST_SCHEMA,
                )
        except ConfigurationError:
            raise
        except TimeoutError as exc:
            logger.warning(
                "Menu parsing timed out", extra={"timeout": self.timeout_seconds}
            )
            raise ParseError(PARSE_FAILED_MESSAGE, hint="timed out") from exc
        except Exception as exc:
            logger.exception("Menu parsing request failed")
            raise ParseError(PARSE_FAILED_MESSAGE) from exc

        try:
            return _DISH_LIST.validate_python(raw)
        except SchemaValidationError as exc:
            logger.exception("Menu parsing returned malformed dishes")
            raise ParseError(PARSE_FAILED_MESSAGE) from exc


def build_menu_prompt(menu_text: str) -> str:
    return (
        "Parse the following restaurant menu text into a JSON array of objects. "
        'Each object should have a "name" and a "description" for a dish. '
        "Ignore categories, prices, and other non-dish information. "
        f"Menu: \n\n{menu_text}"
    )
