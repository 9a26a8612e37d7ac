"""Application service holding the session and handling user intents."""

import asyncio
import logging
from dataclasses import dataclass, field

from food_photographer.domain.menu import PhotoStyle
from food_photographer.domain.session import (
    GenerationProgress,
    SessionState,
    begin_edit,
    begin_generation,
    close_editor,
    complete_edit,
    complete_generation,
    fail_edit,
    fail_generation,
    open_editor,
    reject_input,
    report_progress,
)
from food_photographer.errors import (
    EditInProgressError,
    GenerationInProgressError,
    PhotographerError,
    ValidationError,
)
from food_photographer.services.generation import (
    GenerationOrchestrator,
    validate_menu_text,
)
from food_photographer.services.images import ImageEditor

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
CANCELLED_MESSAGE = "Generation was cancelled."


@dataclass
class StudioService:
    """Owns the current session and applies its transition rules."""

    orchestrator: GenerationOrchestrator
    image_editor: ImageEditor
    debug_errors: bool = False
    state: SessionState = field(default_factory=SessionState)
    _generation_in_flight: bool = field(default=False, init=False)
    _edit_in_flight: bool = field(default=False, init=False)
    _gallery_version: int = field(default=0, init=False)

    async def request_generation(
        self, menu_text: str, style: PhotoStyle
    ) -> SessionState:
        """Run a generation batch and replace the gallery with its result."""
        if self._generation_in_flight:
            raise GenerationInProgressError("A generation run is already in progress.")
        try:
            validate_menu_text(menu_text)
        except ValidationError as exc:
            self.state = reject_input(self.state, exc.message)
            return self.state

        self._generation_in_flight = True
        self._gallery_version += 1
        self.state = begin_generation(self.state, menu_text, style)
        try:
            images = await self.orchestrator.run(
                menu_text, style, on_progress=self._on_progress
            )
        except asyncio.CancelledError:
            logger.warning("Generation cancelled")
            self.state = fail_generation(self.state, CANCELLED_MESSAGE)
            raise
        except PhotographerError as exc:
            logger.warning("Generation failed", extra={"reason": exc.message})
            self.state = fail_generation(self.state, self._describe(exc))
        except Exception as exc:
            logger.exception("Generation failed unexpectedly")
            self.state = fail_generation(
                self.state, self._describe(exc, UNKNOWN_ERROR_MESSAGE)
            )
        else:
            logger.info("Generation finished", extra={"image_count": len(images)})
            self.state = complete_generation(self.state, images)
        finally:
            self._generation_in_flight = False
        return self.state

    def open_editor(self, image_id: str) -> SessionState:
        self.state = open_editor(self.state, image_id)
        return self.state

    def close_editor(self) -> SessionState:
        self.state = close_editor(self.state)
        return self.state

    async def request_edit(self, image_id: str, instruction: str) -> SessionState:
        """Edit one gallery image in place.

        Only one edit runs at a time. Results that arrive after a new batch
        replaced the gallery are dropped.
        """
        if self._edit_in_flight:
            raise EditInProgressError("An image edit is already in progress.")
        target = self.state.require_image(image_id)
        version = self._gallery_version
        self._edit_in_flight = True
        self.state = begin_edit(self.state)
        try:
            edited = await self.image_editor.edit_image(target.image, instruction)
        except asyncio.CancelledError:
            if version == self._gallery_version:
                self.state = fail_edit(self.state, "Image edit was cancelled.")
            raise
        except PhotographerError as exc:
            if version == self._gallery_version:
                self.state = fail_edit(self.state, self._describe(exc))
            return self.state
        finally:
            self._edit_in_flight = False

        if version != self._gallery_version:
            logger.info("Dropping edit for a replaced gallery", extra={"id": image_id})
            return self.state
        self.state = complete_edit(self.state, target.with_image(edited))
        return self.state

    def _on_progress(self, progress: GenerationProgress) -> None:
        logger.info(progress.message)
        self.state = report_progress(self.state, progress)

    def _describe(self, exc: Exception, fallback: str | None = None) -> str:
        """Return the user-facing message, with debug detail when enabled."""
        message = fallback or str(exc)
        cause = exc if fallback else exc.__cause__
        if self.debug_errors and cause is not None:
            detail = f"{type(cause).__name__}: {cause}".strip()
            return f"{message} (debug: {detail})"
        return message
