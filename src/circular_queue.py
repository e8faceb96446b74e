"""Growable ring-buffer FIFO.

Used by level-order traversal. Named ``circular_queue`` so it does not shadow
the stdlib ``queue`` module.
"""

from typing import TypeVar, Generic, List, Optional

T = TypeVar('T')


class CircularQueue(Generic[T]):
    def __init__(self, capacity: int = 4) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity: int = capacity
        self._data: List[Optional[T]] = [None] * capacity
        self._head: int = 0
        self._tail: int = 0
        self._size: int = 0

    def enqueue(self, item: T) -> None:
        if self._size == self._capacity:
            self._grow()
        self._data[self._tail] = item
        self._tail = (self._tail + 1) % self._capacity
        self._size += 1

    def dequeue(self) -> T:
        if self._size == 0:
            raise IndexError("dequeue from empty queue")
        item = self._data[self._head]
        # release the slot so dequeued nodes are not kept alive
        self._data[self._head] = None
        self._head = (self._head + 1) % self._capacity
        self._size -= 1
        return item  # type: ignore[return-value]

    def front(self) -> T:
        if self._size == 0:
            raise IndexError("front from empty queue")
        return self._data[self._head]  # type: ignore[return-value]

    def size(self) -> int:
        return self._size

    def capacity(self) -> int:
        return self._capacity

    def is_empty(self) -> bool:
        return self._size == 0

    def _grow(self) -> None:
        new_capacity = self._capacity * 2
        new_data: List[Optional[T]] = [None] * new_capacity
        for i in range(self._size):
            new_data[i] = self._data[(self._head + i) % self._capacity]
        self._data = new_data
        self._head = 0
        self._tail = self._size
        self._capacity = new_capacity

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0
