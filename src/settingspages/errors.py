"""Exception types and the developer-facing misconfiguration channel."""

from __future__ import annotations

import warnings

from .config import BaseConfig
from .logging_config import get_logger

logger = get_logger("errors")


class SettingsPagesError(Exception):
    """Base class for errors raised inside the package."""


class FieldSpecError(SettingsPagesError):
    """A field spec is missing required attributes or carries the wrong types."""


class OptionsStorageError(SettingsPagesError):
    """The options backend could not be read."""


class MisconfigurationWarning(UserWarning):
    """Emitted when a page, module or store is set up incorrectly."""


def doing_it_wrong(function: str, message: str) -> None:
    """Report a developer misconfiguration without interrupting the request.

    The message goes to the package logger and is re-emitted as a
    ``MisconfigurationWarning`` so test-suites and dev servers surface it.
    """

    logger.warning(
        "%s was called incorrectly: %s",
        function,
        message,
        extra={"caller": function, "version": BaseConfig.VERSION},
    )
    warnings.warn(f"{function}: {message}", MisconfigurationWarning, stacklevel=3)


__all__ = [
    "FieldSpecError",
    "MisconfigurationWarning",
    "OptionsStorageError",
    "SettingsPagesError",
    "doing_it_wrong",
]
