"""ASGI entrypoint for the canteen feedback API."""

from canteen_feedback.api.app import create_app
from canteen_feedback.containers import build_container

app = create_app(build_container())
