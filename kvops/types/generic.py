from __future__ import annotations

"""
Generic types for the Value Operations
"""
from datetime import timedelta
from typing import Any, Awaitable, List, Mapping, Optional, TypeVar, Union
from typing_extensions import Protocol, runtime_checkable


EncodedT = Union[bytes, memoryview]
_StringLikeT = Union[bytes, str, memoryview]
KeyT = _StringLikeT
ExpiryT = Union[int, timedelta]
TimeoutT = Union[int, float, timedelta]

K = TypeVar('K')
V = TypeVar('V')


@runtime_checkable
class KeyValueStore(Protocol):
    """
    The store commands the Value Operations rely on

    Each command is a single indivisible operation on the store side.
    `redis.Redis` satisfies this protocol.
    """

    def set(
        self,
        name: KeyT,
        value: EncodedT,
        ex: Optional[ExpiryT] = None,
        px: Optional[ExpiryT] = None,
        nx: bool = False,
        xx: bool = False,
        **kwargs: Any,
    ) -> Optional[bool]: ...

    def get(self, name: KeyT) -> Optional[bytes]: ...

    def getset(self, name: KeyT, value: EncodedT) -> Optional[bytes]: ...

    def getdel(self, name: KeyT) -> Optional[bytes]: ...

    def getex(
        self,
        name: KeyT,
        ex: Optional[ExpiryT] = None,
        px: Optional[ExpiryT] = None,
        persist: bool = False,
        **kwargs: Any,
    ) -> Optional[bytes]: ...

    def incrby(self, name: KeyT, amount: int = 1) -> int: ...

    def decrby(self, name: KeyT, amount: int = 1) -> int: ...

    def incrbyfloat(self, name: KeyT, amount: float = 1.0) -> float: ...

    def append(self, key: KeyT, value: EncodedT) -> int: ...

    def strlen(self, name: KeyT) -> int: ...

    def setrange(self, name: KeyT, offset: int, value: EncodedT) -> int: ...

    def getrange(self, key: KeyT, start: int, end: int) -> bytes: ...

    def mset(self, mapping: Mapping[KeyT, EncodedT]) -> bool: ...

    def msetnx(self, mapping: Mapping[KeyT, EncodedT]) -> bool: ...

    def mget(self, keys: List[KeyT], *args: KeyT) -> List[Optional[bytes]]: ...

    def exists(self, *names: KeyT) -> int: ...

    def delete(self, *names: KeyT) -> int: ...

    def pexpire(self, name: KeyT, time: ExpiryT, **kwargs: Any) -> bool: ...

    def pttl(self, name: KeyT) -> int: ...

    def flushdb(self, asynchronous: bool = False, **kwargs: Any) -> bool: ...


@runtime_checkable
class AsyncKeyValueStore(Protocol):
    """
    The awaitable counterpart of `KeyValueStore`

    `redis.asyncio.Redis` satisfies this protocol.
    """

    def set(self, name: KeyT, value: EncodedT, **kwargs: Any) -> Awaitable[Optional[bool]]: ...

    def get(self, name: KeyT) -> Awaitable[Optional[bytes]]: ...

    def getset(self, name: KeyT, value: EncodedT) -> Awaitable[Optional[bytes]]: ...

    def getdel(self, name: KeyT) -> Awaitable[Optional[bytes]]: ...

    def getex(self, name: KeyT, **kwargs: Any) -> Awaitable[Optional[bytes]]: ...

    def incrby(self, name: KeyT, amount: int = 1) -> Awaitable[int]: ...

    def decrby(self, name: KeyT, amount: int = 1) -> Awaitable[int]: ...

    def incrbyfloat(self, name: KeyT, amount: float = 1.0) -> Awaitable[float]: ...

    def append(self, key: KeyT, value: EncodedT) -> Awaitable[int]: ...

    def strlen(self, name: KeyT) -> Awaitable[int]: ...

    def setrange(self, name: KeyT, offset: int, value: EncodedT) -> Awaitable[int]: ...

    def getrange(self, key: KeyT, start: int, end: int) -> Awaitable[bytes]: ...

    def mset(self, mapping: Mapping[KeyT, EncodedT]) -> Awaitable[bool]: ...

    def msetnx(self, mapping: Mapping[KeyT, EncodedT]) -> Awaitable[bool]: ...

    def mget(self, keys: List[KeyT], *args: KeyT) -> Awaitable[List[Optional[bytes]]]: ...

    def exists(self, *names: KeyT) -> Awaitable[int]: ...

    def delete(self, *names: KeyT) -> Awaitable[int]: ...

    def pexpire(self, name: KeyT, time: ExpiryT, **kwargs: Any) -> Awaitable[bool]: ...

    def pttl(self, name: KeyT) -> Awaitable[int]: ...

    def flushdb(self, asynchronous: bool = False, **kwargs: Any) -> Awaitable[bool]: ...

