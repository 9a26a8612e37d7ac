"""Gemini client for structured menu extraction."""

import json
from dataclasses import dataclass

from google import genai
from google.genai import types

from food_photographer.services.menu import MenuClient


@dataclass
class GeminiMenuClient(MenuClient):
    """Menu client backed by Gemini JSON-mode generation."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiMenuClient":
        """Create a Gemini menu client."""
        return cls(client=genai.Client(api_key=api_key))

    async def extract_dishes(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> object:
        """Call Gemini with a response schema and decode the JSON text."""
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_json_schema=schema,
            ),
        )
        output_text = (response.text or "").strip()
        if not output_text:
            raise RuntimeError("Gemini returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying async HTTP session."""
        await self.client.aio.aclose()
