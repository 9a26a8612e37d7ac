"""Encoded image values and gallery entries."""

import base64
import re
from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class EncodedImage:
    """Self-describing image: MIME type plus raw bytes."""

    mime_type: str
    data: bytes

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    def to_data_url(self) -> str:
        """Encode as a base64 data URL."""
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    @classmethod
    def from_base64(cls, mime_type: str, payload: str) -> "EncodedImage":
        return cls(mime_type=mime_type, data=base64.b64decode(payload))


@dataclass(frozen=True)
class GeneratedImage:
    """Gallery entry produced for one dish."""

    id: str
    dish_name: str
    image: EncodedImage

    def with_image(self, image: EncodedImage) -> "GeneratedImage":
        """Return the same gallery entry carrying new image data."""
        return GeneratedImage(id=self.id, dish_name=self.dish_name, image=image)


def new_image_id(dish_name: str) -> str:
    """Build a unique image id from the dish name and a random suffix."""
    slug = re.sub(r"[^a-z0-9]+", "-", dish_name.lower()).strip("-") or "dish"
    return f"{slug}-{uuid4().hex}"


def file_extension(mime_type: str) -> str:
    """Return a file extension for an image MIME type."""
    subtype = mime_type.partition("/")[2].split("+")[0]
    if subtype == "jpeg":
        return "jpg"
    return subtype or "bin"
