"""OpenAI Responses API client for menu extraction."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from food_photographer.services.menu import MenuClient

_ROOT_KEY = "dishes"


@dataclass
class OpenAIMenuClient(MenuClient):
    """Menu client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, reasoning_effort: str | None, store: bool
    ) -> "OpenAIMenuClient":
        """Create an OpenAI menu client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def extract_dishes(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> object:
        """Call OpenAI Responses API with structured outputs.

        Strict schemas need an object root, so the requested schema is nested
        under a single key and unwrapped from the reply.
        """
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "menu_dishes",
                    "strict": True,
                    "schema": {
                        "type": "object",
                        "properties": {_ROOT_KEY: schema},
                        "required": [_ROOT_KEY],
                        "additionalProperties": False,
                    },
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        payload = json.loads(output_text)
        if not isinstance(payload, dict) or _ROOT_KEY not in payload:
            raise RuntimeError("OpenAI response is missing the dish list")
        return payload[_ROOT_KEY]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
