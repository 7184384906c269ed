"""Developer CLI for inspecting deck layouts."""

from .main import app, main

__all__ = ["app", "main"]
