from __future__ import annotations

"""
Typed Value Operations over a byte-oriented store

Usage:

    from kvops.components.client import KVStore
    from kvops.components.operations import ValueOperations

    ops = ValueOperations(
        client = KVStore.from_url('redis://localhost:6379/0'),
        key_serializer = 'str',
        value_serializer = 'int',
    )
    ops.set('counter', 10)
    ops.increment('counter', -3) # 7

Every operation maps to a single store command, so atomicity of
conditional writes and increments is whatever the store guarantees
for that command. Nothing here locks or retries.
"""

from kvops.configs import settings
from kvops.errors import capture_error, InvalidArgumentError, StoreUnavailableError
from kvops.io.serializers import get_serializer, SerializerT
from kvops.types.common import TimeUnit, ExpirationResolution, to_expiration
from kvops.types.generic import K, V, TimeoutT, KeyValueStore, AsyncKeyValueStore
from kvops.utils.helpers import flatten_keys
from typing import Dict, Generic, Iterable, List, Mapping, Optional, Union

UnitT = Union[str, TimeUnit]


class ValueOperations(Generic[K, V]):
    """
    Typed single-value operations

    The sync methods run against `client` and the `a`-prefixed methods
    against `aclient`. Either may be omitted when only one flavour is used.
    """

    def __init__(
        self,
        client: Optional[KeyValueStore] = None,
        aclient: Optional[AsyncKeyValueStore] = None,
        key_serializer: Optional[Union[str, type, SerializerT]] = None,
        value_serializer: Optional[Union[str, type, SerializerT]] = None,
        expiration_resolution: Optional[Union[str, ExpirationResolution]] = None,
    ):
        if client is None and aclient is None:
            raise InvalidArgumentError('Either `client` or `aclient` must be provided')
        self._client = client
        self._aclient = aclient
        self.key_serializer = get_serializer(
            settings.key_serializer if key_serializer is None else key_serializer,
            encoding = settings.encoding,
            encoding_errors = settings.encoding_errors,
        )
        self.value_serializer = get_serializer(
            settings.value_serializer if value_serializer is None else value_serializer,
            encoding = settings.encoding,
            encoding_errors = settings.encoding_errors,
        )
        self.expiration_resolution = ExpirationResolution(
            settings.expiration_resolution if expiration_resolution is None else expiration_resolution
        )
        self.encoding = settings.encoding
        settings.autologger.info(f'Initialized {self}')

    def __repr__(self) -> str:
        return (
            f'<{self.__class__.__name__} key_serializer={self.key_serializer.name} '
            f'value_serializer={self.value_serializer.name} expiration={self.expiration_resolution.value}>'
        )

    @property
    def client(self) -> KeyValueStore:
        """
        Returns the sync store client
        """
        if self._client is None:
            raise StoreUnavailableError('No sync client is configured for these operations')
        return self._client

    @property
    def aclient(self) -> AsyncKeyValueStore:
        """
        Returns the async store client
        """
        if self._aclient is None:
            raise StoreUnavailableError('No async client is configured for these operations')
        return self._aclient

    """
    Encoding Helpers
    """

    def raw_key(self, key: K) -> bytes:
        """
        Serializes the key
        """
        return self.key_serializer.serialize(key)

    def raw_keys(self, *keys: Union[K, Iterable[K]]) -> List[bytes]:
        """
        Serializes the keys, given either as arguments or as one iterable
        """
        return [self.raw_key(key) for key in flatten_keys(keys)]

    def raw_value(self, value: V) -> bytes:
        """
        Serializes the value
        """
        return self.value_serializer.serialize(value)

    def raw_mapping(self, mapping: Mapping[K, V]) -> Dict[bytes, bytes]:
        """
        Serializes every key and value in the mapping
        """
        return {self.raw_key(k): self.raw_value(v) for k, v in mapping.items()}

    def deserialize_value(self, value: Optional[bytes]) -> Optional[V]:
        """
        Deserializes a stored value, None when absent
        """
        return self.value_serializer.deserialize(value)

    def deserialize_values(self, values: Iterable[Optional[bytes]]) -> List[Optional[V]]:
        """
        Deserializes the stored values in order
        """
        return [self.deserialize_value(v) for v in values]

    def deserialize_range(self, value: Optional[bytes]) -> Optional[V]:
        """
        Deserializes a byte range, where an empty range maps to the serializer's empty value
        """
        return self.value_serializer.deserialize_range(value)

    def expiration_kwargs(self, timeout: Optional[TimeoutT], unit: Optional[UnitT] = TimeUnit.SECONDS) -> Dict[str, int]:
        """
        Returns the `ex` / `px` argument for the store
        """
        if timeout is None: return {}
        arg, amount = to_expiration(timeout, unit, self.expiration_resolution)
        return {arg: amount}

    @staticmethod
    def validate_offset(offset: int) -> int:
        """
        Validates a write offset
        """
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise InvalidArgumentError(f'Offset must be an integer, got {offset!r}')
        if offset < 0:
            raise InvalidArgumentError(f'Offset must be non-negative, got {offset}')
        return offset

    @staticmethod
    def validate_range(start: Optional[int], end: Optional[int]) -> None:
        """
        Validates a read range, both bounds or neither
        """
        if (start is None) != (end is None):
            raise InvalidArgumentError(f'Both `start` and `end` are required for a range read, got {start!r}, {end!r}')
        for bound in (start, end):
            if bound is not None and (isinstance(bound, bool) or not isinstance(bound, int)):
                raise InvalidArgumentError(f'Range bounds must be integers, got {bound!r}')

    @staticmethod
    def validate_int_delta(delta: int) -> int:
        """
        Validates an integer delta
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise InvalidArgumentError(f'Delta must be an integer, got {delta!r}')
        return delta

    @staticmethod
    def validate_delta(delta: Union[int, float]) -> Union[int, float]:
        """
        Validates an integer or float delta
        """
        if isinstance(delta, bool) or not isinstance(delta, (int, float)):
            raise InvalidArgumentError(f'Delta must be an int or float, got {delta!r}')
        return delta

    def encode_suffix(self, value: Union[str, bytes]) -> bytes:
        """
        Encodes the text appended to a stored value
        """
        if isinstance(value, str): return value.encode(self.encoding)
        if isinstance(value, (bytes, bytearray, memoryview)): return bytes(value)
        raise InvalidArgumentError(f'Append expects str or bytes, got {type(value).__name__}')

    """
    Sync Methods
    """

    @capture_error()
    def set(
        self,
        key: K,
        value: V,
        offset: Optional[int] = None,
        *,
        timeout: Optional[TimeoutT] = None,
        unit: Optional[UnitT] = TimeUnit.SECONDS,
    ) -> None:
        """
        Sets the value of the key

        - `offset`: overwrite the stored bytes from `offset` onward,
          zero-padding any gap (cannot be combined with a timeout)
        - `timeout` / `unit` (keyword-only): expire the key after the duration,
          rounded up to the store's expiration resolution
        """
        if offset is not None:
            if timeout is not None:
                raise InvalidArgumentError('`offset` cannot be combined with `timeout`')
            self.client.setrange(self.raw_key(key), self.validate_offset(offset), self.raw_value(value))
            return
        self.client.set(self.raw_key(key), self.raw_value(value), **self.expiration_kwargs(timeout, unit))

    @capture_error()
    def get(
        self,
        key: K,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> Optional[V]:
        """
        Returns the value of the key, or the inclusive byte range
        [start, end] of it when both bounds are given
        """
        self.validate_range(start, end)
        if start is None:
            return self.deserialize_value(self.client.get(self.raw_key(key)))
        return self.deserialize_range(self.client.getrange(self.raw_key(key), start, end))

    @capture_error()
    def get_and_set(self, key: K, value: V) -> Optional[V]:
        """
        Sets the value of the key and returns the previous one
        """
        return self.deserialize_value(self.client.getset(self.raw_key(key), self.raw_value(value)))

    @capture_error()
    def get_and_delete(self, key: K) -> Optional[V]:
        """
        Returns the value of the key and deletes it
        """
        return self.deserialize_value(self.client.getdel(self.raw_key(key)))

    @capture_error()
    def get_and_expire(self, key: K, timeout: TimeoutT, unit: Optional[UnitT] = TimeUnit.SECONDS) -> Optional[V]:
        """
        Returns the value of the key and sets its expiration
        """
        return self.deserialize_value(self.client.getex(self.raw_key(key), **self.expiration_kwargs(timeout, unit)))

    @capture_error()
    def get_and_persist(self, key: K) -> Optional[V]:
        """
        Returns the value of the key and removes its expiration
        """
        return self.deserialize_value(self.client.getex(self.raw_key(key), persist = True))

    @capture_error()
    def increment(self, key: K, delta: Union[int, float] = 1) -> Union[int, float]:
        """
        Increments the number stored at the key, treating an absent key as 0

        An int delta uses INCRBY and returns an int, a float
        delta uses INCRBYFLOAT and returns a float.
        """
        delta = self.validate_delta(delta)
        if isinstance(delta, int):
            return self.client.incrby(self.raw_key(key), delta)
        return float(self.client.incrbyfloat(self.raw_key(key), delta))

    @capture_error()
    def decrement(self, key: K, delta: int = 1) -> int:
        """
        Decrements the integer stored at the key, treating an absent key as 0
        """
        return self.client.decrby(self.raw_key(key), self.validate_int_delta(delta))

    @capture_error()
    def append(self, key: K, value: Union[str, bytes]) -> int:
        """
        Appends to the value of the key and returns the new length in bytes
        """
        return self.client.append(self.raw_key(key), self.encode_suffix(value))

    @capture_error()
    def size(self, key: K) -> int:
        """
        Returns the length in bytes of the stored value, 0 if absent
        """
        return self.client.strlen(self.raw_key(key))

    @capture_error()
    def set_if_absent(
        self,
        key: K,
        value: V,
        timeout: Optional[TimeoutT] = None,
        unit: Optional[UnitT] = TimeUnit.SECONDS,
    ) -> bool:
        """
        Sets the value only if the key does not exist
        """
        return bool(self.client.set(self.raw_key(key), self.raw_value(value), nx = True, **self.expiration_kwargs(timeout, unit)))

    @capture_error()
    def set_if_present(
        self,
        key: K,
        value: V,
        timeout: Optional[TimeoutT] = None,
        unit: Optional[UnitT] = TimeUnit.SECONDS,
    ) -> bool:
        """
        Sets the value only if the key already exists
        """
        return bool(self.client.set(self.raw_key(key), self.raw_value(value), xx = True, **self.expiration_kwargs(timeout, unit)))

    @capture_error()
    def multi_set(self, mapping: Mapping[K, V]) -> None:
        """
        Sets every key to its value in one command
        """
        if not mapping: return
        self.client.mset(self.raw_mapping(mapping))

    @capture_error()
    def multi_set_if_absent(self, mapping: Mapping[K, V]) -> bool:
        """
        Sets every key to its value only if none of the keys exist

        Returns False, writing nothing, when any key already exists.
        """
        if not mapping: return True
        return bool(self.client.msetnx(self.raw_mapping(mapping)))

    @capture_error()
    def multi_get(self, keys: Iterable[K]) -> List[Optional[V]]:
        """
        Returns the values of the keys in the same order, None for absent keys
        """
        raw_keys = self.raw_keys(list(keys))
        if not raw_keys: return []
        return self.deserialize_values(self.client.mget(raw_keys))

    """
    Async Methods
    """

    @capture_error()
    async def aset(
        self,
        key: K,
        value: V,
        offset: Optional[int] = None,
        *,
        timeout: Optional[TimeoutT] = None,
        unit: Optional[UnitT] = TimeUnit.SECONDS,
    ) -> None:
        """
        [Async] Sets the value of the key
        """
        if offset is not None:
            if timeout is not None:
                raise InvalidArgumentError('`offset` cannot be combined with `timeout`')
            await self.aclient.setrange(self.raw_key(key), self.validate_offset(offset), self.raw_value(value))
            return
        await self.aclient.set(self.raw_key(key), self.raw_value(value), **self.expiration_kwargs(timeout, unit))

    @capture_error()
    async def aget(
        self,
        key: K,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> Optional[V]:
        """
        [Async] Returns the value of the key, or a byte range of it
        """
        self.validate_range(start, end)
        if start is None:
            return self.deserialize_value(await self.aclient.get(self.raw_key(key)))
        return self.deserialize_range(await self.aclient.getrange(self.raw_key(key), start, end))

    @capture_error()
    async def aget_and_set(self, key: K, value: V) -> Optional[V]:
        """
        [Async] Sets the value of the key and returns the previous one
        """
        return self.deserialize_value(await self.aclient.getset(self.raw_key(key), self.raw_value(value)))

    @capture_error()
    async def aget_and_delete(self, key: K) -> Optional[V]:
        """
        [Async] Returns the value of the key and deletes it
        """
        return self.deserialize_value(await self.aclient.getdel(self.raw_key(key)))

    @capture_error()
    async def aget_and_expire(self, key: K, timeout: TimeoutT, unit: Optional[UnitT] = TimeUnit.SECONDS) -> Optional[V]:
        """
        [Async] Returns the value of the key and sets its expiration
        """
        return self.deserialize_value(await self.aclient.getex(self.raw_key(key), **self.expiration_kwargs(timeout, unit)))

    @capture_error()
    async def aget_and_persist(self, key: K) -> Optional[V]:
        """
        [Async] Returns the value of the key and removes its expiration
        """
        return self.deserialize_value(await self.aclient.getex(self.raw_key(key), persist = True))

    @capture_error()
    async def aincrement(self, key: K, delta: Union[int, float] = 1) -> Union[int, float]:
        """
        [Async] Increments the number stored at the key
        """
        delta = self.validate_delta(delta)
        if isinstance(delta, int):
            return await self.aclient.incrby(self.raw_key(key), delta)
        return float(await self.aclient.incrbyfloat(self.raw_key(key), delta))

    @capture_error()
    async def adecrement(self, key: K, delta: int = 1) -> int:
        """
        [Async] Decrements the integer stored at the key
        """
        return await self.aclient.decrby(self.raw_key(key), self.validate_int_delta(delta))

    @capture_error()
    async def aappend(self, key: K, value: Union[str, bytes]) -> int:
        """
        [Async] Appends to the value of the key and returns the new length
        """
        return await self.aclient.append(self.raw_key(key), self.encode_suffix(value))

    @capture_error()
    async def asize(self, key: K) -> int:
        """
        [Async] Returns the length in bytes of the stored value
        """
        return await self.aclient.strlen(self.raw_key(key))

    @capture_error()
    async def aset_if_absent(
        self,
        key: K,
        value: V,
        timeout: Optional[TimeoutT] = None,
        unit: Optional[UnitT] = TimeUnit.SECONDS,
    ) -> bool:
        """
        [Async] Sets the value only if the key does not exist
        """
        return bool(await self.aclient.set(self.raw_key(key), self.raw_value(value), nx = True, **self.expiration_kwargs(timeout, unit)))

    @capture_error()
    async def aset_if_present(
        self,
        key: K,
        value: V,
        timeout: Optional[TimeoutT] = None,
        unit: Optional[UnitT] = TimeUnit.SECONDS,
    ) -> bool:
        """
        [Async] Sets the value only if the key already exists
        """
        return bool(await self.aclient.set(self.raw_key(key), self.raw_value(value), xx = True, **self.expiration_kwargs(timeout, unit)))

    @capture_error()
    async def amulti_set(self, mapping: Mapping[K, V]) -> None:
        """
        [Async] Sets every key to its value in one command
        """
        if not mapping: return
        await self.aclient.mset(self.raw_mapping(mapping))

    @capture_error()
    async def amulti_set_if_absent(self, mapping: Mapping[K, V]) -> bool:
        """
        [Async] Sets every key to its value only if none of the keys exist
        """
        if not mapping: return True
        return bool(await self.aclient.msetnx(self.raw_mapping(mapping)))

    @capture_error()
    async def amulti_get(self, keys: Iterable[K]) -> List[Optional[V]]:
        """
        [Async] Returns the values of the keys in the same order
        """
        raw_keys = self.raw_keys(list(keys))
        if not raw_keys: return []
        return self.deserialize_values(await self.aclient.mget(raw_keys))
