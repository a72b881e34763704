from .base import BaseSerializer, BinaryBaseSerializer
from ._text import StringSerializer, BytesSerializer
from ._numeric import LongSerializer, DoubleSerializer
from ._json import JsonSerializer
from typing import Dict, Optional, Union, Type

SerializerT = Union[StringSerializer, BytesSerializer, LongSerializer, DoubleSerializer, JsonSerializer, BaseSerializer]

RegisteredSerializers: Dict[str, Type[SerializerT]] = {
    "str": StringSerializer,
    "bytes": BytesSerializer,
    "int": LongSerializer,
    "float": DoubleSerializer,
    "json": JsonSerializer,
}

# Python types that resolve to a registered serializer
RegisteredSerializerTypes: Dict[type, str] = {
    str: "str",
    bytes: "bytes",
    int: "int",
    float: "float",
}


def register_serializer(
    name: str,
    serializer: Type[SerializerT],
    override: Optional[bool] = False,
) -> None:
    """
    Registers a Serializer
    """
    global RegisteredSerializers
    if name in RegisteredSerializers and not override:
        raise ValueError(f"Serializer `{name}` already registered with {RegisteredSerializers[name]} and override is False")
    RegisteredSerializers[name] = serializer


def get_serializer(
    serializer: Optional[Union[str, type, SerializerT]] = None,
    **kwargs
) -> SerializerT:
    """
    Returns a Serializer

    Accepts a registered name (`str`, `int`, `float`, `bytes`, `json`),
    a python type such as `int`, or an existing serializer instance.
    """
    if isinstance(serializer, BaseSerializer): return serializer
    if serializer is None:
        from kvops.configs import settings
        serializer = settings.value_serializer
    if isinstance(serializer, type):
        if serializer in RegisteredSerializerTypes:
            serializer = RegisteredSerializerTypes[serializer]
        elif issubclass(serializer, BaseSerializer):
            return serializer(**kwargs)
    if serializer in RegisteredSerializers:
        return RegisteredSerializers[serializer](**kwargs)
    raise ValueError(f"Invalid Serializer Type: {serializer}")
