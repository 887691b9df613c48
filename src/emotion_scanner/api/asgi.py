"""ASGI entrypoint for the emotion scanner API."""

from emotion_scanner.api.app import create_app
from emotion_scanner.containers import build_container

app = create_app(build_container())
