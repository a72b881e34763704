from __future__ import annotations

from lzl.pool import is_coro_func
from lzl.load import lazy_import
from typing import Any, Iterable, List


def flatten_keys(keys: tuple) -> List[Any]:
    """
    Accepts either varargs keys or a single iterable of keys

    >>> flatten_keys(('a', 'b'))
    ['a', 'b']
    >>> flatten_keys((['a', 'b'],))
    ['a', 'b']
    """
    if len(keys) == 1 and is_key_iterable(keys[0]):
        return list(keys[0])
    return list(keys)


def is_key_iterable(obj: Any) -> bool:
    """
    Returns whether the object is a collection of keys rather than a single key
    """
    if isinstance(obj, (str, bytes, bytearray, memoryview)): return False
    return isinstance(obj, Iterable)
