"""Gemini/Imagen client for image generation and editing."""

from dataclasses import dataclass

from google import genai
from google.genai import types

from food_photographer.domain.images import EncodedImage
from food_photographer.services.images import ImageClient


@dataclass
class GeminiImageClient(ImageClient):
    """Image client backed by Imagen generation and Gemini image editing."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiImageClient":
        """Create a Gemini image client."""
        return cls(client=genai.Client(api_key=api_key))

    async def generate_images(
        self,
        *,
        model: str,
        prompt: str,
        count: int,
        mime_type: str,
        aspect_ratio: str,
    ) -> list[bytes]:
        """Call Imagen and return the raw bytes of every generated image."""
        response = await self.client.aio.models.generate_images(
            model=model,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=count,
                output_mime_type=mime_type,
                aspect_ratio=aspect_ratio,
            ),
        )
        return [
            generated.image.image_bytes
            for generated in response.generated_images or []
            if generated.image is not None and generated.image.image_bytes
        ]

    async def edit_image(
        self, *, model: str, image: EncodedImage, instruction: str
    ) -> EncodedImage | None:
        """Send the image and instruction, keeping only image output."""
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                instruction,
            ],
            config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
        )
        return _first_inline_image(response)

    async def close(self) -> None:
        """Close the underlying async HTTP session."""
        await self.client.aio.aclose()


def _first_inline_image(
    response: types.GenerateContentResponse,
) -> EncodedImage | None:
    """Return the first inline image part of the first candidate."""
    if not response.candidates:
        return None
    content = response.candidates[0].content
    for part in (content.parts if content else None) or []:
        inline = part.inline_data
        if inline is not None and inline.data:
            return EncodedImage(
                mime_type=inline.mime_type or "image/png", data=inline.data
            )
    return None
