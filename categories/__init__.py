"""Ordered, user-defined groupings of skill names."""

from .models import CategoryConfig, CategoryFormatError
from .store import CategoryStore

__all__ = ["CategoryConfig", "CategoryFormatError", "CategoryStore"]
