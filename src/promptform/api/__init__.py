"""HTTP API for promptform."""

from promptform.api.app import create_app

__all__ = ["create_app"]
