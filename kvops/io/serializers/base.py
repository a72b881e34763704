from __future__ import annotations

"""
Base Serializers
"""

import abc
from kvops.utils.logs import logger
from kvops.errors import SerializationError
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar('T')


class BaseSerializer(abc.ABC, Generic[T]):
    """
    The Base Serializer Class

    Subclasses implement `encode_value` and `decode_value`. The public
    `serialize` / `deserialize` methods always return / accept bytes and
    surface every failure as a `SerializationError`.
    """
    name: Optional[str] = None
    encoding: Optional[str] = 'utf-8'
    binary: Optional[bool] = False
    empty_value: Optional[Any] = None

    def __init__(
        self,
        encoding: Optional[str] = None,
        encoding_errors: Optional[str] = 'strict',
        **kwargs,
    ):
        """
        Initializes the serializer
        """
        if encoding is not None: self.encoding = encoding
        self.encoding_errors = encoding_errors
        self._kwargs = kwargs

    @abc.abstractmethod
    def encode_value(self, value: T, **kwargs) -> Union[str, bytes]:
        """
        Encodes the value
        """

    @abc.abstractmethod
    def decode_value(self, value: bytes, **kwargs) -> T:
        """
        Decodes the value
        """

    def to_bytes(self, value: Union[str, bytes, bytearray, memoryview]) -> bytes:
        """
        Coerces the encoded value to bytes
        """
        if isinstance(value, str): return value.encode(self.encoding, self.encoding_errors)
        if isinstance(value, (bytearray, memoryview)): return bytes(value)
        return value

    def serialize(self, value: T, **kwargs) -> bytes:
        """
        Serializes the value to bytes
        """
        if value is None:
            raise SerializationError(f'[{self.name}] Cannot serialize a null value')
        try:
            return self.to_bytes(self.encode_value(value, **kwargs))
        except SerializationError:
            raise
        except Exception as e:
            raise SerializationError(f'[{self.name}] Error in Encoding: {str(value)[:500]}', source_error = e) from e

    def deserialize(self, value: Optional[Union[bytes, bytearray, memoryview]], **kwargs) -> Optional[T]:
        """
        Deserializes the bytes, returning None for an absent value
        """
        if value is None: return None
        try:
            return self.decode_value(self.to_bytes(value), **kwargs)
        except SerializationError:
            raise
        except Exception as e:
            logger.debug(f'[{self.name}] Error in Decoding: {str(value)[:500]}')
            raise SerializationError(f'[{self.name}] Error in Decoding: {str(value)[:500]}', source_error = e) from e

    def deserialize_range(self, value: Optional[Union[bytes, bytearray, memoryview]], **kwargs) -> Optional[T]:
        """
        Deserializes a byte range cut out of a stored value

        An empty range maps to `empty_value`.
        """
        if not value: return self.empty_value
        return self.deserialize(value, **kwargs)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} name={self.name!r} encoding={self.encoding!r}>'


class BinaryBaseSerializer(BaseSerializer[T]):

    binary: Optional[bool] = True
