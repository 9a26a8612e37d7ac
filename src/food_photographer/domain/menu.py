"""Models for parsed menus and photo styles."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Dish(BaseModel):
    """Single dish identified in menu text."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str


class PhotoStyle(StrEnum):
    """Photographic style presets for a generation batch."""

    RUSTIC_DARK = "Rustic/Dark"
    BRIGHT_MODERN = "Bright/Modern"
    SOCIAL_MEDIA = "Social Media"


DEFAULT_STYLE = PhotoStyle.BRIGHT_MODERN
