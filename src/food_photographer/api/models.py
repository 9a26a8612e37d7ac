"""Request and response models for the HTTP API."""

from pydantic import BaseModel, Field

from food_photographer.domain.images import GeneratedImage
from food_photographer.domain.menu import DEFAULT_STYLE, PhotoStyle
from food_photographer.domain.session import SessionPhase, SessionState


class GenerateRequest(BaseModel):
    """Body for starting a generation batch."""

    menu_text: str
    style: PhotoStyle = DEFAULT_STYLE


class EditRequest(BaseModel):
    """Body for editing a single image."""

    instruction: str


class StyleView(BaseModel):
    name: str
    label: str


class ImageView(BaseModel):
    """Gallery entry rendered as a data URL."""

    id: str
    dish_name: str
    mime_type: str
    data_url: str

    @classmethod
    def from_image(cls, image: GeneratedImage) -> "ImageView":
        return cls(
            id=image.id,
            dish_name=image.dish_name,
            mime_type=image.image.mime_type,
            data_url=image.image.to_data_url(),
        )


class SessionView(BaseModel):
    """Read model of the current session."""

    menu_text: str
    style: PhotoStyle
    phase: SessionPhase
    is_loading: bool
    loading_message: str
    error: str | None
    images: list[ImageView] = Field(default_factory=list)
    editing_image: ImageView | None = None
    is_edit_loading: bool = False

    @classmethod
    def from_state(cls, state: SessionState) -> "SessionView":
        editing = state.editing_image
        return cls(
            menu_text=state.menu_text,
            style=state.style,
            phase=state.phase,
            is_loading=state.is_loading,
            loading_message=state.loading_message,
            error=state.error,
            images=[ImageView.from_image(image) for image in state.images],
            editing_image=ImageView.from_image(editing) if editing else None,
            is_edit_loading=state.is_edit_loading,
        )
