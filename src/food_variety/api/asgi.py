"""ASGI entrypoint for the food variety tracker API."""

from food_variety.api.app import create_app
from food_variety.containers import build_container

app = create_app(build_container())
