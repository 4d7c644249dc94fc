"""An allocation context that tracks memory and releases it in one place."""

from __future__ import annotations

from contextlib import contextmanager, suppress
from dataclasses import dataclass
from typing import Any, Iterator, NoReturn, Optional, Union

from .codes import Flag, Result, SmallocError
from .memlist import INITIAL_LIST_CAPACITY, MemList
from .memstack import INITIAL_STACK_CAPACITY, MemStack
from .pointer import Allocation, create_from_memory, create_ptr_array, create_single


def _lookup(container: Union[MemStack, MemList], memory: Any) -> Allocation:
    return container.retrieve_index(container.find(memory))


@dataclass
class Stats:
    """Counters describing what a context currently tracks."""

    current_allocations_stack: int = 0
    current_allocations_list: int = 0
    total_allocations_freed: int = 0
    total_allocations: int = 0


class Context:
    """Tracks allocations and releases them together.

    Allocations made without ``Flag.DYNAMIC`` live on a stack and are only
    released in bulk; dynamic allocations live in a list and can also be
    resized or released one at a time.
    """

    def __init__(self) -> None:
        self._stack: Optional[MemStack] = MemStack(INITIAL_STACK_CAPACITY)
        self._list: Optional[MemList] = MemList(INITIAL_LIST_CAPACITY)
        self.stats = Stats()
        self.last_result = Result.OK

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.free_destroy()

    @property
    def closed(self) -> bool:
        """True once the context has been destroyed."""
        return self._stack is None

    @property
    def last_op_failed(self) -> bool:
        """True when the most recent operation did not succeed."""
        return self.last_result is not Result.OK

    def _fail(self, result: Result, detail: Optional[str] = None) -> NoReturn:
        self.last_result = Result(result)
        raise SmallocError(result, detail)

    @contextmanager
    def _recording(self) -> Iterator[None]:
        """Record the result of a failing inner operation before it propagates."""
        try:
            yield
        except SmallocError as error:
            self._fail(error.result, error.detail)

    def _parts(self) -> tuple[MemStack, MemList]:
        if self._stack is None or self._list is None:
            raise SmallocError(Result.INVALID_PARAM, "context has been destroyed")
        return self._stack, self._list

    def _track(self, allocation: Allocation) -> Any:
        stack, tracked = self._parts()
        self.stats.total_allocations += 1
        if Flag.DYNAMIC in allocation.flags:
            tracked.add(allocation)
            self.stats.current_allocations_list += 1
        else:
            stack.push(allocation)
            self.stats.current_allocations_stack += 1
        self.last_result = Result.OK
        return allocation.memory

    def _find_dynamic(self, memory: Any) -> Allocation:
        _, tracked = self._parts()
        with self._recording():
            return _lookup(tracked, memory)

    def _count_freed(self, from_stack: bool) -> None:
        if from_stack:
            self.stats.current_allocations_stack -= 1
        else:
            self.stats.current_allocations_list -= 1
        self.stats.total_allocations -= 1
        self.stats.total_allocations_freed += 1

    def _create(self, valid: bool, factory, *args) -> Any:
        self._parts()
        if not valid:
            self._fail(Result.INVALID_PARAM, "sizes must be positive")
        with self._recording():
            allocation = factory(*args)
        return self._track(allocation)

    def _resize(self, memory: Any, new_size: int, array: bool) -> Any:
        self._parts()
        if memory is None or new_size <= 0:
            self._fail(Result.INVALID_PARAM)
        allocation = self._find_dynamic(memory)
        if (Flag.PTR_ARRAY in allocation.flags) != array:
            self._fail(Result.INVALID_PTR_TYPE)
        resize = allocation.realloc_array if array else allocation.realloc_single
        with self._recording():
            resized = resize(new_size)
        self.last_result = Result.OK
        return resized

    def alloc(self, size: int, flags=Flag.AUTO) -> Any:
        """Allocate a zeroed buffer of ``size`` bytes and track it."""
        return self._create(size > 0, create_single, size, Flag(flags) & ~Flag.PTR_ARRAY)

    def alloc_arr(self, size: int, elem_size: int, flags=Flag.AUTO) -> Any:
        """Allocate a list of ``size`` buffers of ``elem_size`` bytes each."""
        return self._create(
            size > 0 and elem_size > 0,
            create_ptr_array,
            size,
            elem_size,
            Flag(flags) | Flag.PTR_ARRAY,
        )

    def realloc(self, memory: Any, new_size: int) -> Any:
        """Resize a dynamic single buffer and return it."""
        return self._resize(memory, new_size, array=False)

    def realloc_arr(self, memory: Any, new_size: int) -> Any:
        """Resize a dynamic array to ``new_size`` elements and return it."""
        return self._resize(memory, new_size, array=True)

    def add_ptr(self, memory: Any, size: int, flags=Flag.AUTO) -> None:
        """Start tracking memory that was allocated elsewhere."""
        self._create(memory is not None and size > 0, create_from_memory, memory, size, flags)

    def get_ptr_size(self, memory: Any) -> int:
        """Return the recorded size of tracked memory, or 0 if it is unknown."""
        if memory is None or self.closed:
            return 0
        stack, tracked = self._parts()
        for container in (tracked, stack):
            with suppress(SmallocError):
                return _lookup(container, memory).size
        return 0

    def set_flags(self, memory: Any, flags) -> None:
        """Replace the flags of tracked memory.

        The dynamic flag cannot be added to stack memory nor removed from
        dynamic memory.
        """
        stack, tracked = self._parts()
        flags = Flag(flags)
        try:
            allocation = _lookup(stack, memory)
        except SmallocError:
            allocation = None
        if allocation is not None:
            if Flag.DYNAMIC in flags:
                self._fail(Result.INVALID_PTR_TYPE, "stack memory cannot become dynamic")
        else:
            with self._recording():
                allocation = _lookup(tracked, memory)
            if Flag.DYNAMIC not in flags:
                self._fail(Result.INVALID_PTR_TYPE, "dynamic memory must stay dynamic")
        allocation.flags = flags
        self.last_result = Result.OK

    def free_stack(self) -> None:
        """Release every allocation on the stack, newest first."""
        if self.closed:
            return
        stack, _ = self._parts()
        while not stack.is_empty():
            allocation = stack.pop()
            with suppress(SmallocError):
                allocation.free()
            self._count_freed(from_stack=True)

    def free_list(self) -> None:
        """Release every dynamic allocation."""
        if self.closed:
            return
        _, tracked = self._parts()
        while not tracked.is_empty():
            tracked.remove(tracked.retrieve_index(0).memory)
            self._count_freed(from_stack=False)

    def free_all(self) -> None:
        """Release every tracked allocation except persistent memory."""
        self.free_stack()
        self.free_list()

    def free(self, memory: Any) -> None:
        """Release one dynamic allocation."""
        _, tracked = self._parts()
        if memory is None:
            self._fail(Result.INVALID_PARAM)
        allocation = self._find_dynamic(memory)
        with self._recording():
            tracked.remove(allocation.memory)
        self._count_freed(from_stack=False)
        self.last_result = Result.OK

    def destroy(self) -> None:
        """Close the context without releasing any tracked memory."""
        if self.closed:
            return
        self._stack = None
        self._list = None
        self.stats = Stats()
        self.last_result = Result.OK

    def free_destroy(self) -> None:
        """Release all tracked memory, then close the context."""
        if self.closed:
            return
        self.free_all()
        for container in self._parts():
            with suppress(SmallocError):
                container.destroy()
        self.destroy()