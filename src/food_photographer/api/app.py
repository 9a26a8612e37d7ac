"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from food_photographer.api.models import StyleView
from food_photographer.api.session import router as session_router
from food_photographer.app_logging import configure_logging
from food_photographer.containers import AppContainer
from food_photographer.domain.menu import PhotoStyle

EXAMPLE_MENU = """APPETIZERS
Classic Bruschetta - $9
Toasted baguette topped with fresh tomatoes, garlic, basil, and balsamic glaze.

MAINS
Spaghetti Carbonara - $18
Creamy egg-based sauce with pancetta and Pecorino Romano cheese.

Margherita Pizza - $15
Classic pizza with San Marzano tomatoes, fresh mozzarella, basil, and a drizzle \
of olive oil."""


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting food photographer",
            extra={"backend": app.state.container.settings.ai_backend},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Virtual Food Photographer", lifespan=lifespan)
    app.state.container = container

    app.include_router(session_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/styles")
    async def styles() -> list[StyleView]:
        """List the available photo styles."""
        return [StyleView(name=style.name, label=style.value) for style in PhotoStyle]

    @app.get("/example-menu")
    async def example_menu() -> dict[str, str]:
        """Return a sample menu for trying the app."""
        return {"menu_text": EXAMPLE_MENU}

    return app
