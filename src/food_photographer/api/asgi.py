"""ASGI entrypoint for the food photographer API."""

from food_photographer.api.app import create_app
from food_photographer.containers import build_container

app = create_app(build_container())
