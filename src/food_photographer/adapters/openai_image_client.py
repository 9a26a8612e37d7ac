"""OpenAI Images API client for generation and editing."""

import base64
from dataclasses import dataclass

from openai import AsyncOpenAI

from food_photographer.domain.images import EncodedImage, file_extension
from food_photographer.services.images import ImageClient

# Closest sizes the Images API supports for each requested aspect ratio.
_SIZES_BY_ASPECT_RATIO = {
    "1:1": "1024x1024",
    "4:3": "1536x1024",
    "3:2": "1536x1024",
    "3:4": "1024x1536",
    "2:3": "1024x1536",
}
_OUTPUT_FORMATS = {"image/jpeg": "jpeg", "image/png": "png", "image/webp": "webp"}


@dataclass
class OpenAIImageClient(ImageClient):
    """Image client backed by the OpenAI Images API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIImageClient":
        """Create an OpenAI image client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate_images(
        self,
        *,
        model: str,
        prompt: str,
        count: int,
        mime_type: str,
        aspect_ratio: str,
    ) -> list[bytes]:
        """Generate images and decode their base64 payloads."""
        response = await self.client.images.generate(
            model=model,
            prompt=prompt,
            n=count,
            size=_SIZES_BY_ASPECT_RATIO.get(aspect_ratio, "auto"),
            output_format=_OUTPUT_FORMATS.get(mime_type, "jpeg"),
        )
        return [
            base64.b64decode(item.b64_json)
            for item in response.data or []
            if item.b64_json
        ]

    async def edit_image(
        self, *, model: str, image: EncodedImage, instruction: str
    ) -> EncodedImage | None:
        """Edit an image; the API answers with PNG unless told otherwise."""
        upload = (
            f"image.{file_extension(image.mime_type)}",
            image.data,
            image.mime_type,
        )
        response = await self.client.images.edit(
            model=model, image=upload, prompt=instruction
        )
        for item in response.data or []:
            if item.b64_json:
                return EncodedImage.from_base64("image/png", item.b64_json)
        return None

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
