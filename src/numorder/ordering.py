"""In-place ascending sort and reversal of float sequences.

NaN policy: NaN values sort to the end of the ascending order, so after
``reverse_in_place`` they sit at the front of the descending order. Sorting a
sequence that contains NaNs never raises.
"""
from __future__ import annotations

from numbers import Real
from typing import Any, Iterable, Iterator, List, Sequence, Union

import numpy as np

from .errors import InvalidElementError

# Scratch buffer length for the blockwise swap in reverse_in_place.
_SWAP_BLOCK = 4096


def _check_element(index: int, value: Any) -> float:
    # bool is an int subclass but not a number for our purposes
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (Real, np.integer, np.floating)):
        raise InvalidElementError(index, value)
    try:
        return float(value)
    except OverflowError:
        raise InvalidElementError(index, value) from None


def _ingest(values: Iterable[Any]) -> np.ndarray:
    if isinstance(values, NumberSequence):
        return values.values.copy()
    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise ValueError(f"expected a one-dimensional array, got shape {values.shape}")
        if values.dtype.kind in "iuf":
            return values.astype(np.float64, copy=True)
    floats = [_check_element(i, v) for i, v in enumerate(values)]
    return np.array(floats, dtype=np.float64)


class NumberSequence:
    """Ordered, mutable container of float64 values.

    Elements are validated once, when the sequence is built or an item is
    assigned; the ordering operations then work on the backing array directly.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[Any] = ()):
        self._values = _ingest(values)

    @classmethod
    def random(cls, n: int, rng: np.random.Generator) -> "NumberSequence":
        """``n`` independent draws from ``[0, 1)`` using the given generator."""
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        seq = cls.__new__(cls)
        seq._values = rng.random(n)
        return seq

    @property
    def values(self) -> np.ndarray:
        return self._values

    def tolist(self) -> List[float]:
        return self._values.tolist()

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return NumberSequence(self._values[index])
        return float(self._values[index])

    def __setitem__(self, index: int, value: Any) -> None:
        self._values[index] = _check_element(index, value)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values.tolist())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NumberSequence):
            return bool(np.array_equal(self._values, other._values))
        if isinstance(other, (list, tuple)):
            return len(other) == len(self) and all(a == b for a, b in zip(self, other))
        return NotImplemented

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        if len(self) > 6:
            head = ", ".join(repr(v) for v in self._values[:3].tolist())
            tail = ", ".join(repr(v) for v in self._values[-3:].tolist())
            return f"NumberSequence([{head}, ..., {tail}], n={len(self)})"
        return f"NumberSequence({self.tolist()!r})"


SequenceLike = Union[NumberSequence, List[float]]


def _validate_list(sequence: Any) -> None:
    if not isinstance(sequence, list):
        raise TypeError(f"expected NumberSequence or list, got {type(sequence).__name__}")
    for i, v in enumerate(sequence):
        _check_element(i, v)


def _nan_last(value: float):
    return (value != value, value)


def ascending_sort(sequence: SequenceLike) -> SequenceLike:
    """Sort ``sequence`` in place into non-decreasing order and return it.

    A plain list is validated before it is touched; on InvalidElementError it
    is left exactly as it was.
    """
    if isinstance(sequence, NumberSequence):
        # introsort: O(n log n) worst case, O(log n) stack
        sequence.values.sort(kind="quicksort")
        return sequence
    _validate_list(sequence)
    sequence.sort(key=_nan_last)
    return sequence


def _reverse_array(values: np.ndarray) -> None:
    n = len(values)
    half = n // 2
    if half == 0:
        return
    scratch = np.empty(min(_SWAP_BLOCK, half), dtype=values.dtype)
    lo = 0
    while lo < half:
        width = min(_SWAP_BLOCK, half - lo)
        hi = n - lo
        left = values[lo:lo + width]
        right = values[hi - width:hi]
        tmp = scratch[:width]
        tmp[:] = left
        left[:] = right[::-1]
        right[:] = tmp[::-1]
        lo += width


def reverse_in_place(sequence: SequenceLike) -> SequenceLike:
    """Move the element at ``i`` to ``n - 1 - i`` and return the sequence.

    Symmetric positions are swapped up to the midpoint; with an odd length the
    middle element is never touched.
    """
    if isinstance(sequence, NumberSequence):
        _reverse_array(sequence.values)
        return sequence
    _validate_list(sequence)
    n = len(sequence)
    for i in range(n // 2):
        j = n - 1 - i
        sequence[i], sequence[j] = sequence[j], sequence[i]
    return sequence


def sort_descending(sequence: SequenceLike) -> SequenceLike:
    return reverse_in_place(ascending_sort(sequence))


def _as_array(values: Union[NumberSequence, Sequence[float], np.ndarray]) -> np.ndarray:
    if isinstance(values, NumberSequence):
        return values.values
    return np.asarray(values, dtype=np.float64)


def is_ascending(values) -> bool:
    """True if non-decreasing, with any NaNs grouped at the end."""
    arr = _as_array(values)
    nan = np.isnan(arr)
    k = len(arr) - int(np.count_nonzero(nan))
    if nan[:k].any():
        return False
    body = arr[:k]
    return bool(np.all(body[:-1] <= body[1:]))


def is_descending(values) -> bool:
    """True if non-increasing, with any NaNs grouped at the front."""
    arr = _as_array(values)
    nan = np.isnan(arr)
    k = int(np.count_nonzero(nan))
    if nan[k:].any():
        return False
    body = arr[k:]
    return bool(np.all(body[:-1] >= body[1:]))
