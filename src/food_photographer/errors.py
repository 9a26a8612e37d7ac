"""Exception hierarchy for the food photographer."""


class PhotographerError(Exception):
    """Base exception for all user-facing failures."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ValidationError(PhotographerError):
    """User input was rejected before any backend call."""


class ImageNotFoundError(ValidationError):
    """An image id does not exist in the current gallery."""

    def __init__(self, image_id: str) -> None:
        super().__init__(f"No image with id {image_id!r} in the current gallery.")
        self.image_id = image_id


class ConfigurationError(PhotographerError):
    """The AI backend credential is missing."""


class ParseError(PhotographerError):
    """Menu text yielded unusable structured output."""


class NoDishesError(ParseError):
    """Menu parsing succeeded but found no dishes."""


class GenerationError(PhotographerError):
    """Image synthesis for a single dish failed."""

    def __init__(self, message: str, *, dish_name: str) -> None:
        super().__init__(message)
        self.dish_name = dish_name


class EditError(PhotographerError):
    """Image editing failed or returned no image."""


class GenerationInProgressError(PhotographerError):
    """A generation run was requested while another one is in flight."""


class EditInProgressError(PhotographerError):
    """An edit was requested while another one is in flight."""
