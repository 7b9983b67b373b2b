"""Singly linked list with positional insert and remove."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class Node(Generic[T]):
    """A list cell holding one value and a link to the next cell."""

    __slots__ = ("data", "next")

    def __init__(self, data: T):
        self.data = data
        self.next: Node[T] | None = None

    def __repr__(self) -> str:
        return f"Node({self.data!r})"


class LinkedList(Generic[T]):
    """A singly linked list keeping head and tail references.

    Positions are zero-based. Out-of-range positions and pops from an empty
    list raise ``IndexError`` and leave the list unchanged.

    Example:
        >>> items = LinkedList()
        >>> items.push_back(10)
        >>> items.push_back(20)
        >>> items.push_front(5)
        >>> items.insert(1, 15)
        >>> list(items)
        [5, 15, 10, 20]
    """

    def __init__(self):
        self._head: Node[T] | None = None
        self._tail: Node[T] | None = None
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[T]:
        node = self._head
        while node is not None:
            yield node.data
            node = node.next

    def __repr__(self) -> str:
        return f"LinkedList([{', '.join(repr(x) for x in self)}])"

    @property
    def head(self) -> Node[T] | None:
        """First node of the list, or None when empty."""
        return self._head

    def push_front(self, value: T) -> None:
        node = Node(value)
        node.next = self._head
        self._head = node
        if self._tail is None:
            self._tail = node
        self._length += 1

    def push_back(self, value: T) -> None:
        node = Node(value)
        if self._tail is None:
            self._head = self._tail = node
        else:
            self._tail.next = node
            self._tail = node
        self._length += 1

    def pop_front(self) -> T:
        if self._head is None:
            msg = "List is empty"
            raise IndexError(msg)
        node = self._head
        self._head = node.next
        if self._head is None:
            self._tail = None
        self._length -= 1
        return node.data

    def pop_back(self) -> T:
        """Remove and return the last value. O(n): the list is singly linked."""
        if self._head is None:
            msg = "List is empty"
            raise IndexError(msg)
        if self._head is self._tail:
            return self.pop_front()

        node = self._head
        while node.next is not self._tail:
            node = node.next
        value = self._tail.data
        node.next = None
        self._tail = node
        self._length -= 1
        return value

    def insert(self, pos: int, value: T) -> None:
        """Insert value so that it ends up at position pos (0 <= pos <= len)."""
        if not 0 <= pos <= self._length:
            msg = f"Index out of range: {pos}"
            raise IndexError(msg)
        if pos == 0:
            self.push_front(value)
            return
        if pos == self._length:
            self.push_back(value)
            return

        prev = self._node_at(pos - 1)
        node = Node(value)
        node.next = prev.next
        prev.next = node
        self._length += 1

    def remove(self, pos: int) -> T:
        """Remove and return the value at position pos."""
        if not 0 <= pos < self._length:
            msg = f"Index out of range: {pos}"
            raise IndexError(msg)
        if pos == 0:
            return self.pop_front()

        prev = self._node_at(pos - 1)
        node = prev.next
        prev.next = node.next
        if node is self._tail:
            self._tail = prev
        self._length -= 1
        return node.data

    def _node_at(self, pos: int) -> Node[T]:
        node = self._head
        for _ in range(pos):
            node = node.next
        return node

    def reverse(self) -> None:
        prev = None
        node = self._head
        self._tail = self._head
        while node is not None:
            nxt = node.next
            node.next = prev
            prev = node
            node = nxt
        self._head = prev

    def find(self, value: T) -> int:
        """Return the position of the first occurrence of value, or -1."""
        for index, item in enumerate(self):
            if item == value:
                return index
        return -1

    def has_cycle(self) -> bool:
        """Detect a cycle in the node chain with Floyd's tortoise and hare.

        A list built through this class's methods never has one; the check
        guards against nodes relinked by hand through :attr:`head`.
        """
        slow = fast = self._head
        while fast is not None and fast.next is not None:
            slow = slow.next
            fast = fast.next.next
            if slow is fast:
                return True
        return False
