"""Image generation and editing services."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from food_photographer.domain.images import EncodedImage
from food_photographer.domain.menu import Dish, PhotoStyle
from food_photographer.errors import (
    ConfigurationError,
    EditError,
    GenerationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

OUTPUT_MIME_TYPE = "image/jpeg"
ASPECT_RATIO = "4:3"

PROMPT_PREFIX = "Professional, ultra-realistic, high-end food photography of"

STYLE_PROMPT_SUFFIXES: dict[PhotoStyle, str] = {
    PhotoStyle.RUSTIC_DARK: (
        "Dark, rustic, moody lighting, shot on a dark wood or slate surface "
        "with vintage elements. Focus on texture and shadows. Chiaroscuro effect."
    ),
    PhotoStyle.BRIGHT_MODERN: (
        "Bright, modern, clean aesthetic, minimalist plating on a white or "
        "light-colored plate. Soft, natural window light. High-key, airy, and crisp."
    ),
    PhotoStyle.SOCIAL_MEDIA: (
        "Vibrant top-down flat lay shot, perfect for social media. Colorful, "
        "well-composed on a stylish surface like marble with complementary props."
    ),
}

EDIT_NO_IMAGE_MESSAGE = "Image editing did not return a valid image."
EDIT_FAILED_MESSAGE = "Failed to edit the image."


class ImageClient(Protocol):
    """Interface for text-to-image and image-to-image calls."""

    async def generate_images(
        self,
        *,
        model: str,
        prompt: str,
        count: int,
        mime_type: str,
        aspect_ratio: str,
    ) -> list[bytes]:
        """Return raw bytes for each generated image."""

    async def edit_image(
        self, *, model: str, image: EncodedImage, instruction: str
    ) -> EncodedImage | None:
        """Return the first image in the response, or None if it had none."""

    async def close(self) -> None:
        """Release network resources."""


def style_prompt_suffix(style: PhotoStyle | str) -> str:
    """Return the prompt fragment for a style; unknown styles get none."""
    return STYLE_PROMPT_SUFFIXES.get(style, "")


def build_image_prompt(dish: Dish, style: PhotoStyle | str) -> str:
    prompt = f"{PROMPT_PREFIX} {dish.name}: {dish.description}. "
    return (prompt + style_prompt_suffix(style)).strip()


@dataclass
class ImageGenerator:
    """Generates one photograph per dish."""

    client: ImageClient
    model: str
    timeout_seconds: float = 120.0

    async def generate_image(self, dish: Dish, style: PhotoStyle) -> EncodedImage:
        """Generate a single JPEG photograph of ``dish`` in ``style``."""
        failure = f"Failed to generate an image for {dish.name}."
        try:
            async with asyncio.timeout(self.timeout_seconds):
                images = await self.client.generate_images(
                    model=self.model,
                    prompt=build_image_prompt(dish, style),
                    count=1,
                    mime_type=OUTPUT_MIME_TYPE,
                    aspect_ratio=ASPECT_RATIO,
                )
        except ConfigurationError:
            raise
        except TimeoutError as exc:
            logger.warning("Image generation timed out", extra={"dish": dish.name})
            raise GenerationError(failure, dish_name=dish.name) from exc
        except Exception as exc:
            logger.exception("Image generation failed", extra={"dish": dish.name})
            raise GenerationError(failure, dish_name=dish.name) from exc

        if not images:
            logger.error("No images returned", extra={"dish": dish.name})
            raise GenerationError(failure, dish_name=dish.name)
        return EncodedImage(mime_type=OUTPUT_MIME_TYPE, data=images[0])


@dataclass
class ImageEditor:
    """Applies natural-language edits to an existing photograph."""

    client: ImageClient
    model: str
    timeout_seconds: float = 120.0

    async def edit_image(self, image: EncodedImage, instruction: str) -> EncodedImage:
        if not instruction.strip():
            raise ValidationError("Please describe the edit you want to make.")
        try:
            async with asyncio.timeout(self.timeout_seconds):
                edited = await self.client.edit_image(
                    model=self.model, image=image, instruction=instruction.strip()
                )
        except ConfigurationError:
            raise
        except TimeoutError as exc:
            logger.warning("Image edit timed out")
            raise EditError(EDIT_FAILED_MESSAGE, hint="timed out") from exc
        except Exception as exc:
            logger.exception("Image edit request failed")
            raise EditError(EDIT_FAILED_MESSAGE) from exc

        if edited is None:
            logger.error("Image edit response contained no image part")
            raise EditError(EDIT_NO_IMAGE_MESSAGE)
        return edited
