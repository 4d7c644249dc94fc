"""Allocation flags, result codes and the error raised on failure."""

from __future__ import annotations

import enum


class Flag(enum.IntFlag):
    """Flags that control how an allocation is tracked and released."""

    AUTO = 1 << 0
    DYNAMIC = 1 << 1
    PERSISTENT = 1 << 2
    PTR_ARRAY = 1 << 3


class Result(enum.IntEnum):
    """Outcome of an allocator operation."""

    OK = 0
    GENERIC = enum.auto()
    INVALID_PARAM = enum.auto()
    STACK_NOT_EMPTY = enum.auto()
    LIST_NOT_EMPTY = enum.auto()
    OUT_OF_MEMORY = enum.auto()
    STACK_EMPTY = enum.auto()
    LIST_EMPTY = enum.auto()
    PTR_NOT_FOUND = enum.auto()
    WRONG_PTR_CREATE_CALL = enum.auto()
    NO_PTR_FOUND = enum.auto()
    INVALID_PTR_TYPE = enum.auto()
    SHRINK_FAILED = enum.auto()


def result_to_str(result) -> str:
    """Return the symbolic name of a result code."""
    try:
        code = Result(result)
    except (ValueError, TypeError):
        return "UNKNOWN_ERROR_CODE"
    if code is Result.OK:
        return "SMALLOC_OK"
    return f"SMALLOC_ERR_{code.name}"


class SmallocError(Exception):
    """Raised when an allocator operation fails; carries the result code."""

    def __init__(self, result, detail: str | None = None) -> None:
        self.result = Result(result)
        self.detail = detail
        message = result_to_str(self.result)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)