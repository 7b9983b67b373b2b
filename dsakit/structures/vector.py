"""Dynamic array that doubles its storage when full."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class Vector(Generic[T]):
    """A growable array with explicit capacity management.

    Storage is a fixed-size slot list; when it fills up the capacity doubles
    (starting from 1) and the elements are copied over. Indexing is
    bounds-checked and negative indices are rejected.

    Example:
        >>> fruits = Vector()
        >>> fruits.push_back("apple")
        >>> fruits.push_back("banana")
        >>> fruits.find("banana")
        1
    """

    def __init__(self):
        self._data: list = []
        self._length = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[T]:
        for index in range(self._length):
            yield self._data[index]

    def __repr__(self) -> str:
        return f"Vector([{', '.join(repr(x) for x in self)}])"

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._length:
            msg = f"Index out of bounds: {index}"
            raise IndexError(msg)

    def __getitem__(self, index: int) -> T:
        self._check_index(index)
        return self._data[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._check_index(index)
        self._data[index] = value

    def _grow(self) -> None:
        new_capacity = 1 if not self._data else self.capacity * 2
        self._data = self._data[: self._length] + [None] * (new_capacity - self._length)

    def push_back(self, value: T) -> None:
        if self._length == self.capacity:
            self._grow()
        self._data[self._length] = value
        self._length += 1

    def pop_back(self) -> T:
        if self._length == 0:
            msg = "Vector is empty"
            raise IndexError(msg)
        self._length -= 1
        value = self._data[self._length]
        self._data[self._length] = None
        return value

    def insert(self, index: int, value: T) -> None:
        """Insert value at index, shifting later elements right (0 <= index <= len)."""
        if not 0 <= index <= self._length:
            msg = f"Index out of bounds: {index}"
            raise IndexError(msg)
        if self._length == self.capacity:
            self._grow()
        for i in range(self._length, index, -1):
            self._data[i] = self._data[i - 1]
        self._data[index] = value
        self._length += 1

    def remove(self, index: int) -> T:
        """Remove and return the element at index, shifting later elements left."""
        self._check_index(index)
        value = self._data[index]
        for i in range(index, self._length - 1):
            self._data[i] = self._data[i + 1]
        self._length -= 1
        self._data[self._length] = None
        return value

    def reverse(self) -> None:
        for i in range(self._length // 2):
            j = self._length - 1 - i
            self._data[i], self._data[j] = self._data[j], self._data[i]

    def clear(self) -> None:
        """Drop all elements. Capacity is kept."""
        for i in range(self._length):
            self._data[i] = None
        self._length = 0

    def find(self, value: T) -> int:
        """Return the index of the first occurrence of value, or -1."""
        for index, item in enumerate(self):
            if item == value:
                return index
        return -1

    def freq_map(self) -> Counter:
        """Count occurrences of each element."""
        return Counter(self)
