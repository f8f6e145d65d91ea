"""numorder: in-place numeric ordering plus a small demo toolkit."""
from __future__ import annotations

__version__ = "0.1.0"

from .errors import ConfigError, HttpError, InvalidElementError, NumorderError
from .ordering import (
    NumberSequence,
    ascending_sort,
    is_ascending,
    is_descending,
    reverse_in_place,
    sort_descending,
)

__all__ = [
    "ConfigError",
    "HttpError",
    "InvalidElementError",
    "NumberSequence",
    "NumorderError",
    "ascending_sort",
    "is_ascending",
    "is_descending",
    "reverse_in_place",
    "sort_descending",
]
