"""Concrete repository implementations using SQLModel."""

from .options import SQLModelOptionsRepository

__all__ = ["SQLModelOptionsRepository"]
