from __future__ import annotations

from typing import Any


class NumorderError(Exception):
    """Base class for errors raised by numorder."""


class InvalidElementError(NumorderError, TypeError):
    """An element is not a comparable real number."""

    def __init__(self, index: int, value: Any):
        self.index = index
        self.value = value
        super().__init__(f"element {index} is not a real number: {value!r} ({type(value).__name__})")


class HttpError(NumorderError):
    """The request could not be completed after all retries."""


class ConfigError(NumorderError):
    pass
