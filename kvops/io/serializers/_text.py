from __future__ import annotations

from typing import Optional, Union
from .base import BaseSerializer, BinaryBaseSerializer


class StringSerializer(BaseSerializer[str]):
    """
    Encodes text with a fixed encoding (utf-8 by default)
    """
    name: str = "str"
    empty_value: str = ''

    def encode_value(self, value: str, **kwargs) -> bytes:
        """
        Encodes the value
        """
        if not isinstance(value, str):
            raise TypeError(f'Expected str, got {type(value).__name__}')
        return value.encode(self.encoding, self.encoding_errors)

    def decode_value(self, value: bytes, **kwargs) -> str:
        """
        Decodes the value
        """
        return value.decode(self.encoding, self.encoding_errors)

    def deserialize_range(self, value: Optional[Union[bytes, bytearray, memoryview]], **kwargs) -> Optional[str]:
        """
        Decodes a byte range, replacing characters cut at either boundary
        """
        if not value: return self.empty_value
        return self.to_bytes(value).decode(self.encoding, 'replace')


class BytesSerializer(BinaryBaseSerializer[bytes]):
    """
    Passes bytes through unchanged
    """
    name: str = "bytes"
    empty_value: bytes = b''

    def encode_value(self, value: Union[bytes, bytearray, memoryview], **kwargs) -> bytes:
        """
        Encodes the value
        """
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f'Expected bytes, got {type(value).__name__}')
        return bytes(value)

    def decode_value(self, value: bytes, **kwargs) -> bytes:
        """
        Decodes the value
        """
        return value
