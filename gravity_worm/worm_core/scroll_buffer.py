"""
Scroll Buffer
=============

Fixed-capacity ring buffer for the scrolling cave walls and worm trail.

Scrolling drops the oldest entry and appends a newest one in O(1) by moving
a head offset over a preallocated numpy array. Callers only ever see the
logical order, oldest (index 0, leftmost column) to newest (index -1,
rightmost column).
"""

from __future__ import annotations

from typing import Iterator, Tuple, Union
import numpy as np


class ScrollBuffer:
    """
    Fixed-length sequence with O(1) drop-oldest/append-newest.

    Items may be scalars (``item_shape=()``) or small fixed-shape vectors,
    e.g. ``item_shape=(3,)`` for RGB colours.
    """

    def __init__(
        self,
        length: int,
        fill: Union[float, int, Tuple, np.ndarray],
        dtype=np.float64,
        item_shape: Tuple[int, ...] = ()
    ):
        """
        Initialize buffer.

        Args:
            length: Fixed number of entries. Never changes.
            fill: Initial value for every entry.
            dtype: numpy dtype of the storage.
            item_shape: Shape of a single entry.
        """
        if length <= 0:
            raise ValueError(f"ScrollBuffer length must be positive, got {length}")

        self._data = np.empty((length,) + tuple(item_shape), dtype=dtype)
        self._data[:] = fill
        self._head = 0  # physical index of the oldest entry

    def __len__(self) -> int:
        return self._data.shape[0]

    def _physical(self, index: int) -> int:
        length = len(self)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError(f"ScrollBuffer index {index} out of range for length {length}")
        return (self._head + index) % length

    def __getitem__(self, index: int):
        value = self._data[self._physical(index)]
        if value.ndim == 0:
            return value.item()
        return value.copy()

    def __iter__(self) -> Iterator:
        for i in range(len(self)):
            yield self[i]

    @property
    def first(self):
        """Oldest (leftmost) entry."""
        return self[0]

    @property
    def last(self):
        """Newest (rightmost) entry."""
        return self[-1]

    def push(self, value) -> None:
        """Drop the oldest entry and append *value* as the newest."""
        # The oldest slot becomes the newest one.
        self._data[self._head] = value
        self._head = (self._head + 1) % len(self)

    def to_array(self) -> np.ndarray:
        """Return a copy of the contents in logical order."""
        if self._head == 0:
            return self._data.copy()
        return np.concatenate((self._data[self._head:], self._data[:self._head]))

    def tolist(self) -> list:
        return self.to_array().tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScrollBuffer):
            return NotImplemented
        return np.array_equal(self.to_array(), other.to_array())

    def __repr__(self) -> str:
        return f"ScrollBuffer(len={len(self)}, last={self.last!r})"
