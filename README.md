# scopealloc

`scopealloc` keeps track of allocations for you. You create a `Context`,
allocate buffers through it, and release them later, either all together
or one at a time.

Buffers are plain Python objects. A single allocation is a zeroed
`bytearray`. An array allocation is a `list` of zeroed `bytearray`
elements. The context finds tracked memory by identity, so always pass
back the exact object it gave you. Releasing a buffer empties it in place
(it is cleared), and the context stops tracking it.

Each allocation lands in one of two places inside the context:

- **automatic** allocations (`Flag.AUTO`, the default) go on a stack.
  They are released newest first when the stack is cleared.
- **dynamic** allocations (`Flag.DYNAMIC`) go on a list. These can also
  be resized or released on their own.

Two more flags change how an allocation behaves:

- `Flag.PTR_ARRAY` marks an array of equally sized element buffers.
  `Context.alloc_arr` always sets it, and `Context.alloc` always removes it.
- `Flag.PERSISTENT` tells the context to forget the allocation when it is
  released, without clearing the memory itself.

## Usage

```python
from scopealloc.codes import Flag
from scopealloc.context import Context

with Context() as ctx:
    one = ctx.alloc(1, Flag.AUTO)
    two = ctx.alloc(1, Flag.AUTO)
    three = ctx.alloc(1, Flag.DYNAMIC)
    array = ctx.alloc_arr(10, 1, Flag.DYNAMIC)

    # Only dynamic allocations can be resized or released one by one.
    array = ctx.realloc_arr(array, 20)
    print(ctx.get_ptr_size(array))   # 20

    ctx.free(three)

    # Keep `two` intact when the context is cleared.
    ctx.set_flags(two, Flag.AUTO | Flag.PERSISTENT)

    print(ctx.stats)
# Leaving the block calls free_destroy(): everything still tracked is
# released and the context is closed.
```

`Context.realloc` resizes a dynamic single buffer. `Context.realloc_arr`
changes how many elements a dynamic array has. Elements that are dropped
get cleared, and elements that are added are new zeroed buffers of the
array's element size. Both methods return the resized object. Use that
return value from then on.

Memory you already hold can be handed over with
`Context.add_ptr(memory, size, flags)`. If `flags` includes
`Flag.PTR_ARRAY`, the memory is treated as an array of `size` elements.
Otherwise it is treated as a single buffer of `size` bytes.

`Context.set_flags(memory, flags)` replaces an allocation's flags. Stack
memory cannot be given `Flag.DYNAMIC`, and dynamic memory must keep it.

`Context.get_ptr_size(memory)` returns the recorded size, or `0` if the
memory is not tracked. The size is in bytes for a single buffer and in
elements for an array.

### Releasing memory

| Method                   | What it does                                                  |
|--------------------------|---------------------------------------------------------------|
| `Context.free(memory)`   | releases one dynamic allocation                               |
| `Context.free_stack()`   | releases all automatic allocations, newest first              |
| `Context.free_list()`    | releases all dynamic allocations                              |
| `Context.free_all()`     | `free_stack()` followed by `free_list()`                      |
| `Context.destroy()`      | closes the context without releasing anything                 |
| `Context.free_destroy()` | releases everything, then closes the context                  |

Allocations flagged `Flag.PERSISTENT` are still removed from the context,
but their memory is left untouched.

After the context is closed (`Context.closed` is true), the three bulk
release methods do nothing and `get_ptr_size` returns `0`. Every other
operation raises `SmallocError`.

### Statistics

`Context.stats` is a `Stats` record with four counters:

- `current_allocations_stack`: allocations currently on the stack
- `current_allocations_list`: allocations currently on the list
- `total_allocations`: allocations currently tracked
- `total_allocations_freed`: allocations released so far

`Context.last_result` holds the `Result` of the most recent operation.
`Context.last_op_failed` is true when that result is not `Result.OK`.

### Errors

A failed operation raises `SmallocError`, and its `result` attribute holds
a `Result` code. Operations that can fail this way include:

- resizing or individually freeing an automatic allocation;
- using the array resize on a single buffer, or the single resize on an
  array;
- passing memory the context does not know;
- passing a size that is not positive.

`result_to_str` turns a `Result` into its symbolic name.

```python
from scopealloc.codes import Flag, Result, SmallocError, result_to_str
from scopealloc.context import Context

ctx = Context()
buffer = ctx.alloc(8, Flag.AUTO)
try:
    ctx.realloc(buffer, 16)
except SmallocError as err:
    print(err.result, err)
ctx.free_destroy()

print(result_to_str(Result.OK))   # SMALLOC_OK
```

## Modules

- `scopealloc.codes`: `Flag`, `Result`, `SmallocError`, `result_to_str`
- `scopealloc.pointer`: `Allocation`, `AllocType`, and the constructors
  `create_single`, `create_ptr_array` and `create_from_memory`
- `scopealloc.memstack`: `MemStack`, the last-in-first-out store for
  automatic allocations
- `scopealloc.memlist`: `MemList`, the store for dynamic allocations
- `scopealloc.context`: `Context` and `Stats`

## What it does not do

This package does not hand out raw memory addresses, and it does not call
into the system allocator. It only tracks Python buffer objects, and
"releasing" one means clearing it and no longer tracking it. The package
is a library only and has no command-line program.