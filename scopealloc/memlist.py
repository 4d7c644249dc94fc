"""Ordered tracking of allocations that may be released individually."""

from __future__ import annotations

from contextlib import suppress
from typing import Any, Iterator, List

from .codes import Result, SmallocError
from .pointer import Allocation

INITIAL_LIST_CAPACITY = 8


class MemList:
    """Holds allocations that can be looked up and removed by their memory."""

    def __init__(self, init_cap: int = INITIAL_LIST_CAPACITY) -> None:
        self._capacity = max(init_cap, INITIAL_LIST_CAPACITY)
        self._items: List[Allocation] = []
        self._destroyed = False

    @property
    def capacity(self) -> int:
        """Number of slots reserved before the list grows again."""
        return self._capacity

    def _check_alive(self) -> None:
        if self._destroyed:
            raise SmallocError(Result.INVALID_PARAM, "list has been destroyed")

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Allocation]:
        return iter(self._items)

    def add(self, allocation: Allocation) -> None:
        """Append an allocation to the list."""
        self._check_alive()
        if allocation is None:
            raise SmallocError(Result.INVALID_PARAM, "allocation is required")
        if len(self._items) >= self._capacity:
            self._capacity *= 2
        self._items.append(allocation)

    def _index_of(self, memory: Any) -> int:
        for index, allocation in enumerate(self._items):
            if allocation.memory is memory:
                return index
        raise SmallocError(Result.PTR_NOT_FOUND)

    def find(self, memory: Any) -> int:
        """Return the position of the allocation that owns ``memory``."""
        self._check_alive()
        if memory is None:
            raise SmallocError(Result.INVALID_PARAM, "memory is required")
        if not self._items:
            raise SmallocError(Result.LIST_EMPTY)
        return self._index_of(memory)

    def retrieve_index(self, index: int) -> Allocation:
        """Return the allocation at ``index`` without removing it."""
        self._check_alive()
        if not 0 <= index < len(self._items):
            raise SmallocError(Result.INVALID_PARAM, "index out of range")
        return self._items[index]

    def remove(self, memory: Any) -> None:
        """Release the allocation that owns ``memory`` and drop it from the list."""
        self._check_alive()
        if memory is None:
            raise SmallocError(Result.INVALID_PARAM, "memory is required")
        if not self._items:
            raise SmallocError(Result.LIST_EMPTY)
        index = self._index_of(memory)
        allocation = self._items.pop(index)
        with suppress(SmallocError):
            allocation.free()

    def free(self) -> None:
        """Forget every tracked allocation without releasing its memory."""
        self._check_alive()
        if not self._items:
            raise SmallocError(Result.LIST_EMPTY)
        self._items.clear()

    def is_empty(self) -> bool:
        """True when the list holds nothing or has been destroyed."""
        return self._destroyed or not self._items

    def destroy(self) -> None:
        """Tear down an empty list; the tracked memory is not touched."""
        self._check_alive()
        if self._items:
            raise SmallocError(Result.LIST_NOT_EMPTY)
        self._capacity = 0
        self._destroyed = True