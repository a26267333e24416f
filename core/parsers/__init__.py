"""Intent-specific command parsers."""

from . import create, delete, emoji, listing, status, update

__all__ = ["create", "status", "emoji", "update", "delete", "listing"]
