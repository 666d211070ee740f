"""Repository protocol definitions for domain layer."""

from .options import OptionsRepository

__all__ = ["OptionsRepository"]
