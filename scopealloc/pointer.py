"""Tracked allocations: single buffers and arrays of element buffers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Optional

from .codes import Flag, Result, SmallocError


class AllocType(enum.IntEnum):
    """Shape of a tracked allocation."""

    SINGLE = 1
    PTR_ARRAY = 2


def _release(memory: Any) -> None:
    clear = getattr(memory, "clear", None)
    if callable(clear):
        clear()


def _new_buffer(size: int) -> bytearray:
    try:
        return bytearray(size)
    except MemoryError:
        raise SmallocError(Result.OUT_OF_MEMORY) from None


@dataclass(eq=False)
class Allocation:
    """A block of memory together with the bookkeeping that describes it."""

    memory: Any
    kind: Optional[AllocType]
    size: int
    elem_size: int = 0
    flags: Flag = field(default=Flag(0))

    def _reset(self) -> None:
        self.memory = None
        self.kind = None
        self.size = 0
        self.elem_size = 0
        self.flags = Flag(0)

    def realloc_single(self, size: int) -> Any:
        """Resize a single buffer to ``size`` bytes and return it."""
        if size <= 0 or self.memory is None:
            raise SmallocError(Result.INVALID_PARAM, "size must be positive")
        if self.kind is not AllocType.SINGLE:
            raise SmallocError(Result.INVALID_PTR_TYPE)
        if size == self.size:
            return self.memory

        buffer = self.memory
        if not isinstance(buffer, bytearray):
            try:
                buffer = bytearray(buffer)
            except TypeError:
                raise SmallocError(
                    Result.INVALID_PTR_TYPE, "memory cannot be resized"
                ) from None
        try:
            if size < len(buffer):
                del buffer[size:]
            else:
                buffer.extend(bytes(size - len(buffer)))
        except MemoryError:
            raise SmallocError(Result.OUT_OF_MEMORY) from None

        self.memory = buffer
        self.size = size
        return buffer

    def realloc_array(self, new_arr_size: int) -> Any:
        """Resize an array to ``new_arr_size`` elements and return it."""
        if new_arr_size <= 0 or self.memory is None:
            raise SmallocError(Result.INVALID_PARAM, "size must be positive")
        if self.kind is not AllocType.PTR_ARRAY:
            raise SmallocError(Result.INVALID_PTR_TYPE)
        if new_arr_size == self.size:
            return self.memory

        elements = self.memory
        if not isinstance(elements, list):
            try:
                elements = list(elements)
            except TypeError:
                raise SmallocError(
                    Result.INVALID_PTR_TYPE, "memory cannot be resized"
                ) from None

        if new_arr_size < len(elements):
            for element in elements[new_arr_size:]:
                _release(element)
            del elements[new_arr_size:]
        else:
            added = [
                _new_buffer(self.elem_size)
                for _ in range(new_arr_size - len(elements))
            ]
            elements.extend(added)

        self.memory = elements
        self.size = new_arr_size
        return elements

    def free(self) -> None:
        """Release the memory unless it is persistent, then clear the record."""
        if self.kind not in (AllocType.SINGLE, AllocType.PTR_ARRAY):
            raise SmallocError(Result.INVALID_PTR_TYPE)
        if self.size == 0:
            raise SmallocError(Result.NO_PTR_FOUND)

        memory, kind, size = self.memory, self.kind, self.size
        persistent = Flag.PERSISTENT in self.flags
        self._reset()
        if persistent:
            return
        if memory is None:
            raise SmallocError(Result.NO_PTR_FOUND)
        if kind is AllocType.PTR_ARRAY:
            for element in islice(memory, size):
                _release(element)
        _release(memory)


def create_single(size: int, flags) -> Allocation:
    """Allocate a zeroed buffer of ``size`` bytes."""
    flags = Flag(flags)
    if size <= 0:
        raise SmallocError(Result.INVALID_PARAM, "size must be positive")
    if Flag.PTR_ARRAY in flags:
        raise SmallocError(Result.WRONG_PTR_CREATE_CALL)
    return Allocation(_new_buffer(size), AllocType.SINGLE, size, 0, flags)


def create_ptr_array(arr_size: int, elem_size: int, flags) -> Allocation:
    """Allocate a list of ``arr_size`` buffers of ``elem_size`` bytes each."""
    flags = Flag(flags)
    if arr_size <= 0:
        raise SmallocError(Result.INVALID_PARAM, "array size must be positive")
    if Flag.PTR_ARRAY not in flags:
        raise SmallocError(Result.WRONG_PTR_CREATE_CALL)
    if elem_size < 0:
        raise SmallocError(Result.INVALID_PARAM, "element size must not be negative")
    elements = [_new_buffer(elem_size) for _ in range(arr_size)]
    return Allocation(elements, AllocType.PTR_ARRAY, arr_size, elem_size, flags)


def create_from_memory(memory: Any, size: int, flags) -> Allocation:
    """Wrap memory allocated elsewhere so that it can be tracked."""
    flags = Flag(flags)
    if size <= 0 or memory is None:
        raise SmallocError(Result.INVALID_PARAM)
    kind = AllocType.PTR_ARRAY if Flag.PTR_ARRAY in flags else AllocType.SINGLE
    return Allocation(memory, kind, size, 0, flags)