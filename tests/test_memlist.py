import pytest

from scopealloc.codes import Flag, Result, SmallocError
from scopealloc.memlist import MemList
from scopealloc.pointer import create_ptr_array, create_single


def _alloc(size=4, flags=Flag.DYNAMIC):
    return create_single(size, flags)


def _expect(result, func, *args):
    with pytest.raises(SmallocError) as info:
        func(*args)
    assert info.value.result is result


def _filled(count):
    memlist = MemList(8)
    allocations = [_alloc() for _ in range(count)]
    for allocation in allocations:
        memlist.add(allocation)
    return memlist, allocations


def test_new_list_is_empty():
    memlist = MemList(8)
    assert len(memlist) == 0
    assert memlist.is_empty() is True


@pytest.mark.parametrize("requested, expected", [(1, 8), (32, 32)])
def test_capacity_has_minimum_of_eight(requested, expected):
    assert MemList(requested).capacity == expected


def test_add_keeps_insertion_order():
    memlist, allocations = _filled(3)
    assert list(memlist) == allocations
    assert memlist.is_empty() is False


def test_add_none_is_invalid():
    _expect(Result.INVALID_PARAM, MemList(8).add, None)


def test_find_matches_by_identity():
    memlist, (first, second) = _filled(2)
    assert memlist.find(second.memory) == 1
    assert memlist.retrieve_index(memlist.find(first.memory)) is first


@pytest.mark.parametrize(
    "method, args",
    [("find", (bytearray(1),)), ("remove", (bytearray(1),)), ("free", ())],
)
def test_empty_list_raises_list_empty(method, args):
    _expect(Result.LIST_EMPTY, getattr(MemList(8), method), *args)


@pytest.mark.parametrize("method", ["find", "remove"])
def test_unknown_memory_raises_not_found(method):
    memlist, allocations = _filled(1)
    _expect(Result.PTR_NOT_FOUND, getattr(memlist, method), bytearray(4))
    assert list(memlist) == allocations


@pytest.mark.parametrize("count, index", [(0, 0), (1, 1), (1, -1)])
def test_retrieve_index_out_of_range_is_invalid(count, index):
    memlist, _ = _filled(count)
    _expect(Result.INVALID_PARAM, memlist.retrieve_index, index)


def test_remove_releases_memory_and_shifts_items():
    memlist, (first, middle, last) = _filled(3)
    memory = middle.memory
    memlist.remove(memory)
    assert list(memlist) == [first, last]
    assert len(memory) == 0
    assert middle.size == 0
    assert middle.memory is None


def test_remove_persistent_keeps_memory_intact():
    memlist = MemList(8)
    allocation = _alloc(5, Flag.DYNAMIC | Flag.PERSISTENT)
    memory = allocation.memory
    memlist.add(allocation)
    memlist.remove(memory)
    assert memlist.is_empty()
    assert len(memory) == 5


def test_remove_array_releases_elements():
    memlist = MemList(8)
    allocation = create_ptr_array(3, 2, Flag.DYNAMIC | Flag.PTR_ARRAY)
    elements = list(allocation.memory)
    memlist.add(allocation)
    memlist.remove(allocation.memory)
    assert memlist.is_empty()
    assert all(len(element) == 0 for element in elements)


def test_free_drops_records_without_releasing_memory():
    memlist = MemList(8)
    allocation = _alloc(3)
    memory = allocation.memory
    memlist.add(allocation)
    memlist.free()
    assert memlist.is_empty()
    assert len(memory) == 3


def test_capacity_doubles_when_full():
    memlist = MemList(8)
    initial = memlist.capacity
    for _ in range(initial + 1):
        memlist.add(_alloc())
    assert memlist.capacity == 2 * initial
    assert len(memlist) == initial + 1


def test_destroy_non_empty_list_raises():
    memlist, _ = _filled(1)
    _expect(Result.LIST_NOT_EMPTY, memlist.destroy)


def test_destroyed_list_rejects_further_use():
    memlist = MemList(8)
    memlist.destroy()
    assert memlist.is_empty() is True
    assert memlist.capacity == 0
    _expect(Result.INVALID_PARAM, memlist.add, _alloc())