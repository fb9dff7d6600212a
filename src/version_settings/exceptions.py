"""Exceptions raised by version_settings."""

import os


class SettingsError(Exception):
    """Base class for all errors raised by this package."""


class JavaNotFound(SettingsError):
    """Raised when no usable Java executable exists at the given path."""

    def __init__(self, path: str | os.PathLike, reason: str = "") -> None:
        self.path = str(path)
        self.reason = reason
        message = f"No Java installation found at {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnknownSetting(SettingsError):
    """Raised when a setting name does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown setting: {name}")
