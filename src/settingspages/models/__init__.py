"""SQLModel table exports."""

from .option import OptionRecord

__all__ = ["OptionRecord"]
