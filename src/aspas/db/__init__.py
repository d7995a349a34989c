"""Aspas - Local profile storage."""

from .adapter import ProfileStore, StoreError

__all__ = [
    "ProfileStore",
    "StoreError",
]
