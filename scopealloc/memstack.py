"""Last-in, first-out tracking of allocations."""

from __future__ import annotations

from typing import Any, Iterator, List

from .codes import Result, SmallocError
from .pointer import Allocation

INITIAL_STACK_CAPACITY = 8


class MemStack:
    """Holds allocations in the order they were made, newest on top."""

    def __init__(self, init_cap: int = INITIAL_STACK_CAPACITY) -> None:
        self._capacity = max(init_cap, INITIAL_STACK_CAPACITY)
        self._items: List[Allocation] = []
        self._destroyed = False

    @property
    def capacity(self) -> int:
        """Number of slots reserved before the stack grows again."""
        return self._capacity

    def _check_alive(self) -> None:
        if self._destroyed:
            raise SmallocError(Result.INVALID_PARAM, "stack has been destroyed")

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Allocation]:
        return iter(self._items)

    def push(self, allocation: Allocation) -> None:
        """Put an allocation on top of the stack."""
        self._check_alive()
        if allocation is None:
            raise SmallocError(Result.INVALID_PARAM, "allocation is required")
        if len(self._items) >= self._capacity:
            self._capacity *= 2
        self._items.append(allocation)

    def pop(self) -> Allocation:
        """Remove and return the allocation on top of the stack."""
        self._check_alive()
        if not self._items:
            raise SmallocError(Result.STACK_EMPTY)
        return self._items.pop()

    def peek(self) -> Allocation:
        """Return the allocation on top of the stack without removing it."""
        self._check_alive()
        if not self._items:
            raise SmallocError(Result.STACK_EMPTY)
        return self._items[-1]

    def find(self, memory: Any) -> int:
        """Return the position of the allocation that owns ``memory``."""
        self._check_alive()
        if memory is None:
            raise SmallocError(Result.INVALID_PARAM, "memory is required")
        if not self._items:
            raise SmallocError(Result.STACK_EMPTY)
        for index, allocation in enumerate(self._items):
            if allocation.memory is memory:
                return index
        raise SmallocError(Result.PTR_NOT_FOUND)

    def retrieve_index(self, index: int) -> Allocation:
        """Return the allocation at ``index`` without removing it."""
        self._check_alive()
        if not self._items:
            raise SmallocError(Result.STACK_EMPTY)
        if not 0 <= index < len(self._items):
            raise SmallocError(Result.INVALID_PARAM, "index out of range")
        return self._items[index]

    def is_empty(self) -> bool:
        """True when the stack holds nothing or has been destroyed."""
        return self._destroyed or not self._items

    def destroy(self) -> None:
        """Tear down an empty stack; the tracked memory is not touched."""
        self._check_alive()
        if self._items:
            raise SmallocError(Result.STACK_NOT_EMPTY)
        self._capacity = 0
        self._destroyed = True