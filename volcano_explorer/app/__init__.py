"""Dash web app for the volcano explorer."""

from .app import create_app

__all__ = ["create_app"]
