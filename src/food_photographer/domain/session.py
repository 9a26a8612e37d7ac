"""In-memory session state and its transition rules.

Every transition is a pure function that takes the current state and returns
a new one, so the rules can be exercised without a UI or an event loop.
"""

from dataclasses import dataclass, replace
from enum import StrEnum

from food_photographer.domain.images import GeneratedImage
from food_photographer.domain.menu import DEFAULT_STYLE, PhotoStyle
from food_photographer.errors import ImageNotFoundError


class SessionPhase(StrEnum):
    """Lifecycle of a generation batch."""

    IDLE = "idle"
    PARSING = "parsing"
    GENERATING = "generating"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class GenerationProgress:
    """Phase notification emitted while a batch runs."""

    phase: SessionPhase
    message: str
    dish_count: int | None = None


@dataclass(frozen=True)
class SessionState:
    """Snapshot of everything the presentation layer renders."""

    menu_text: str = ""
    style: PhotoStyle = DEFAULT_STYLE
    images: tuple[GeneratedImage, ...] = ()
    phase: SessionPhase = SessionPhase.IDLE
    loading_message: str = ""
    error: str | None = None
    editing_image_id: str | None = None
    is_edit_loading: bool = False

    @property
    def is_loading(self) -> bool:
        return self.phase in {SessionPhase.PARSING, SessionPhase.GENERATING}

    @property
    def editing_image(self) -> GeneratedImage | None:
        """Return the image open in the edit view, if any."""
        if self.editing_image_id is None:
            return None
        return self.find_image(self.editing_image_id)

    def find_image(self, image_id: str) -> GeneratedImage | None:
        for image in self.images:
            if image.id == image_id:
                return image
        return None

    def require_image(self, image_id: str) -> GeneratedImage:
        image = self.find_image(image_id)
        if image is None:
            raise ImageNotFoundError(image_id)
        return image


def begin_generation(
    state: SessionState, menu_text: str, style: PhotoStyle
) -> SessionState:
    """Start a batch: drop the old gallery, error and edit view immediately."""
    return replace(
        state,
        menu_text=menu_text,
        style=style,
        images=(),
        phase=SessionPhase.PARSING,
        loading_message="",
        error=None,
        editing_image_id=None,
        is_edit_loading=False,
    )


def report_progress(state: SessionState, progress: GenerationProgress) -> SessionState:
    return replace(state, phase=progress.phase, loading_message=progress.message)


def complete_generation(
    state: SessionState, images: list[GeneratedImage]
) -> SessionState:
    return replace(
        state,
        images=tuple(images),
        phase=SessionPhase.READY,
        loading_message="",
        error=None,
    )


def fail_generation(state: SessionState, message: str) -> SessionState:
    """Record a failed batch; no partial gallery survives."""
    return replace(
        state,
        images=(),
        phase=SessionPhase.ERROR,
        loading_message="",
        error=message,
        editing_image_id=None,
    )


def reject_input(state: SessionState, message: str) -> SessionState:
    """Surface an input error without touching the gallery."""
    return replace(state, error=message)


def open_editor(state: SessionState, image_id: str) -> SessionState:
    state.require_image(image_id)
    return replace(state, editing_image_id=image_id)


def close_editor(state: SessionState) -> SessionState:
    return replace(state, editing_image_id=None, is_edit_loading=False)


def begin_edit(state: SessionState) -> SessionState:
    return replace(state, is_edit_loading=True, error=None)


def complete_edit(state: SessionState, edited: GeneratedImage) -> SessionState:
    """Swap the entry with the same id in place, keeping gallery order.

    The edit view looks images up by id, so it shows the new data as well.
    """
    state.require_image(edited.id)
    images = tuple(
        edited if image.id == edited.id else image for image in state.images
    )
    return replace(state, images=images, is_edit_loading=False)


def fail_edit(state: SessionState, message: str) -> SessionState:
    """Record a failed edit; the image and the edit view stay as they were."""
    return replace(state, is_edit_loading=False, error=message)
