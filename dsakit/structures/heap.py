"""Binary heap ordered by a comparison callable.

``Heap`` keeps the element for which ``compare`` wins against every other
element at the top: with ``operator.lt`` that is the minimum, with
``operator.gt`` the maximum. :class:`MinHeap` and :class:`MaxHeap` fix the
comparator.
"""

import operator
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Heap(Generic[T]):
    """Array-backed binary heap.

    Args:
        compare: ``compare(a, b)`` is True when ``a`` belongs above ``b``
    """

    def __init__(self, compare: Callable[[T, T], bool] = operator.lt):
        self._data: list[T] = []
        self._compare = compare

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def empty(self) -> bool:
        return not self._data

    def clear(self) -> None:
        self._data.clear()

    def push(self, value: T) -> None:
        self._data.append(value)
        self._sift_up(len(self._data) - 1)

    def top(self) -> T:
        if not self._data:
            msg = "Heap is empty"
            raise IndexError(msg)
        return self._data[0]

    def pop(self) -> T:
        """Remove and return the top element."""
        if not self._data:
            msg = "Heap is empty"
            raise IndexError(msg)
        data = self._data
        data[0], data[-1] = data[-1], data[0]
        value = data.pop()
        if data:
            self._sift_down(0)
        return value

    def _sift_up(self, idx: int) -> None:
        data = self._data
        while idx > 0:
            parent = (idx - 1) // 2
            if not self._compare(data[idx], data[parent]):
                break
            data[idx], data[parent] = data[parent], data[idx]
            idx = parent

    def _sift_down(self, idx: int) -> None:
        data = self._data
        size = len(data)
        while True:
            left, right = 2 * idx + 1, 2 * idx + 2
            best = idx
            if left < size and self._compare(data[left], data[best]):
                best = left
            if right < size and self._compare(data[right], data[best]):
                best = right
            if best == idx:
                return
            data[idx], data[best] = data[best], data[idx]
            idx = best


class MinHeap(Heap[T]):
    def __init__(self):
        super().__init__(operator.lt)


class MaxHeap(Heap[T]):
    def __init__(self):
        super().__init__(operator.gt)
