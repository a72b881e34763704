from __future__ import annotations

"""
The KVTemplate

Owns the store clients and the key / value serializer pair, and hands
out the Value Operations bound to them.
"""

from kvops.configs import settings
from kvops.errors import capture_error, StoreUnavailableError
from kvops.io.serializers import get_serializer, SerializerT
from kvops.types.common import TimeUnit, ExpirationResolution, to_expiration
from kvops.types.generic import K, V, KeyValueStore, AsyncKeyValueStore
from kvops.utils.helpers import flatten_keys
from .operations import ValueOperations, TimeoutT, UnitT
from typing import Generic, Iterable, Optional, Union


class KVTemplate(Generic[K, V]):
    """
    The KVTemplate
    """

    def __init__(
        self,
        client: Optional[KeyValueStore] = None,
        aclient: Optional[AsyncKeyValueStore] = None,
        key_serializer: Optional[Union[str, type, SerializerT]] = None,
        value_serializer: Optional[Union[str, type, SerializerT]] = None,
        name: Optional[str] = 'default',
        expiration_resolution: Optional[Union[str, ExpirationResolution]] = None,
    ):
        self.name = name
        self.settings = settings
        self.logger = settings.logger
        self.autologger = settings.autologger
        self._value_ops: Optional[ValueOperations[K, V]] = None
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

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} name={self.name!r} key_serializer={self.key_serializer.name} value_serializer={self.value_serializer.name}>'

    def ops_for_value(self) -> ValueOperations[K, V]:
        """
        Returns the Value Operations bound to this template
        """
        if self._value_ops is None:
            self._value_ops = ValueOperations(
                client = self._client,
                aclient = self._aclient,
                key_serializer = self.key_serializer,
                value_serializer = self.value_serializer,
                expiration_resolution = self.expiration_resolution,
            )
        return self._value_ops

    @property
    def client(self) -> KeyValueStore:
        """
        Returns the sync store client
        """
        if self._client is None:
            raise StoreUnavailableError(f"[{self.name}] No sync client is configured")
        return self._client

    @property
    def aclient(self) -> AsyncKeyValueStore:
        """
        Returns the async store client
        """
        if self._aclient is None:
            raise StoreUnavailableError(f"[{self.name}] No async client is configured")
        return self._aclient

    @property
    def ops(self) -> ValueOperations[K, V]:
        """
        Shortcut for `ops_for_value()`
        """
        return self.ops_for_value()

    def _raw_keys(self, keys: tuple) -> list:
        return [self.key_serializer.serialize(k) for k in flatten_keys(keys)]

    """
    Key Methods
    """

    @capture_error()
    def has_key(self, key: K) -> bool:
        """
        Returns whether the key exists
        """
        return bool(self.client.exists(self.key_serializer.serialize(key)))

    @capture_error()
    def delete(self, *keys: Union[K, Iterable[K]]) -> int:
        """
        Deletes the keys and returns how many existed
        """
        raw_keys = self._raw_keys(keys)
        if not raw_keys: return 0
        return self.client.delete(*raw_keys)

    @capture_error()
    def expire(self, key: K, timeout: TimeoutT, unit: Optional[UnitT] = TimeUnit.SECONDS) -> bool:
        """
        Sets the expiration of the key, rounded up to the store's resolution
        """
        _, amount = to_expiration(timeout, unit, self.expiration_resolution)
        if self.expiration_resolution == ExpirationResolution.SECONDS: amount *= 1000
        return bool(self.client.pexpire(self.key_serializer.serialize(key), amount))

    @capture_error()
    def get_expire(self, key: K, unit: Optional[UnitT] = TimeUnit.SECONDS) -> int:
        """
        Returns the remaining time to live of the key in the unit

        Returns -1 when the key has no expiration and -2 when it does not exist.
        """
        return self._convert_ttl(self.client.pttl(self.key_serializer.serialize(key)), unit)

    @capture_error()
    def flush_db(self) -> None:
        """
        Removes every key of the current database
        """
        self.autologger.info(f'[{self.name}] Flushing the database')
        self.client.flushdb()

    @capture_error()
    async def ahas_key(self, key: K) -> bool:
        """
        [Async] Returns whether the key exists
        """
        return bool(await self.aclient.exists(self.key_serializer.serialize(key)))

    @capture_error()
    async def adelete(self, *keys: Union[K, Iterable[K]]) -> int:
        """
        [Async] Deletes the keys and returns how many existed
        """
        raw_keys = self._raw_keys(keys)
        if not raw_keys: return 0
        return await self.aclient.delete(*raw_keys)

    @capture_error()
    async def aexpire(self, key: K, timeout: TimeoutT, unit: Optional[UnitT] = TimeUnit.SECONDS) -> bool:
        """
        [Async] Sets the expiration of the key
        """
        _, amount = to_expiration(timeout, unit, self.expiration_resolution)
        if self.expiration_resolution == ExpirationResolution.SECONDS: amount *= 1000
        return bool(await self.aclient.pexpire(self.key_serializer.serialize(key), amount))

    @capture_error()
    async def aget_expire(self, key: K, unit: Optional[UnitT] = TimeUnit.SECONDS) -> int:
        """
        [Async] Returns the remaining time to live of the key in the unit
        """
        return self._convert_ttl(await self.aclient.pttl(self.key_serializer.serialize(key)), unit)

    @capture_error()
    async def aflush_db(self) -> None:
        """
        [Async] Removes every key of the current database
        """
        self.autologger.info(f'[{self.name}] Flushing the database')
        await self.aclient.flushdb()

    @staticmethod
    def _convert_ttl(pttl: int, unit: Optional[UnitT]) -> int:
        if pttl < 0: return pttl
        unit = TimeUnit.SECONDS if unit is None else TimeUnit.from_value(unit)
        return (pttl * TimeUnit.MILLISECONDS.nanos) // unit.nanos

    """
    Lifecycle
    """

    def close(self):
        """
        Closes the sync client
        """
        if self._client is not None:
            self._client.close()

    async def aclose(self):
        """
        Closes the clients
        """
        self.close()
        if self._aclient is not None:
            await self._aclient.aclose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
