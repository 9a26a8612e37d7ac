"""Backend stand-in used when no API key is configured."""

from dataclasses import dataclass

from food_photographer.domain.images import EncodedImage
from food_photographer.errors import ConfigurationError


@dataclass
class UnconfiguredClient:
    """Fails every backend call with a clear configuration error."""

    env_var: str

    def _error(self) -> ConfigurationError:
        return ConfigurationError(
            f"{self.env_var} is not configured. "
            "Set it in the environment or .env file and restart the app.",
            hint=self.env_var,
        )

    async def extract_dishes(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> object:
        raise self._error()

    async def generate_images(
        self,
        *,
        model: str,
        prompt: str,
        count: int,
        mime_type: str,
        aspect_ratio: str,
    ) -> list[bytes]:
        raise self._error()

    async def edit_image(
        self, *, model: str, image: EncodedImage, instruction: str
    ) -> EncodedImage | None:
        raise self._error()

    async def close(self) -> None:
        return None
