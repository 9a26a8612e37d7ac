"""Session endpoints: the four user intents plus read access."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status

from food_photographer.api.models import EditRequest, GenerateRequest, SessionView
from food_photographer.domain.images import file_extension
from food_photographer.errors import (
    EditInProgressError,
    GenerationInProgressError,
    ImageNotFoundError,
)

if TYPE_CHECKING:
    from food_photographer.containers import AppContainer
    from food_photographer.services.studio import StudioService

router = APIRouter(prefix="/session", tags=["session"])


def _studio(request: Request) -> StudioService:
    container: AppContainer = request.app.state.container
    return container.studio_service


def _not_found(exc: ImageNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)


def _conflict(exc: GenerationInProgressError | EditInProgressError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)


@router.get("")
async def get_session(request: Request) -> SessionView:
    """Return the current session snapshot."""
    return SessionView.from_state(_studio(request).state)


@router.post("/generate")
async def request_generation(body: GenerateRequest, request: Request) -> SessionView:
    """Parse the menu and photograph every dish."""
    try:
        state = await _studio(request).request_generation(body.menu_text, body.style)
    except GenerationInProgressError as exc:
        raise _conflict(exc) from exc
    return SessionView.from_state(state)


@router.post("/editor/{image_id}")
async def open_editor(image_id: str, request: Request) -> SessionView:
    """Open the edit view for one image."""
    try:
        state = _studio(request).open_editor(image_id)
    except ImageNotFoundError as exc:
        raise _not_found(exc) from exc
    return SessionView.from_state(state)


@router.delete("/editor")
async def close_editor(request: Request) -> SessionView:
    """Close the edit view."""
    return SessionView.from_state(_studio(request).close_editor())


@router.post("/images/{image_id}/edit")
async def request_edit(
    image_id: str, body: EditRequest, request: Request
) -> SessionView:
    """Apply a natural-language edit to one image."""
    try:
        state = await _studio(request).request_edit(image_id, body.instruction)
    except ImageNotFoundError as exc:
        raise _not_found(exc) from exc
    except EditInProgressError as exc:
        raise _conflict(exc) from exc
    return SessionView.from_state(state)


@router.get("/images/{image_id}")
async def download_image(image_id: str, request: Request) -> Response:
    """Return raw image bytes so the client can save them locally."""
    try:
        image = _studio(request).state.require_image(image_id)
    except ImageNotFoundError as exc:
        raise _not_found(exc) from exc
    extension = file_extension(image.image.mime_type)
    filename = f"{image.id}.{extension}"
    return Response(
        content=image.image.data,
        media_type=image.image.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
