from __future__ import annotations

"""
KVOps - Typed Value Operations over a Redis-like Store
"""
from . import io
from .client import KVOpsClient
from .configs import settings
from .errors import (
    KVOpsException,
    SerializationError,
    InvalidArgumentError,
    StoreUnavailableError,
    StoreError,
)
from .io.serializers import (
    BaseSerializer,
    StringSerializer,
    BytesSerializer,
    LongSerializer,
    DoubleSerializer,
    JsonSerializer,
    get_serializer,
    register_serializer,
)
from .types.common import TimeUnit, ExpirationResolution
from .components.client import KVStore, AsyncKVStore
from .components.operations import ValueOperations
from .components.template import KVTemplate
from .version import VERSION

from typing import Any, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .io.serializers import SerializerT
    from .types.generic import KeyValueStore, AsyncKeyValueStore


def get_template(
    name: Optional[str] = 'default',
    url: Optional[str] = None,
    key_serializer: Optional[Union[str, type, 'SerializerT']] = None,
    value_serializer: Optional[Union[str, type, 'SerializerT']] = None,
    client: Optional['KeyValueStore'] = None,
    aclient: Optional['AsyncKeyValueStore'] = None,
    **kwargs: Any,
) -> KVTemplate:
    """
    Returns the KVTemplate registered under the name, creating it if needed
    """
    return KVOpsClient.get_template(
        name = name,
        url = url,
        key_serializer = key_serializer,
        value_serializer = value_serializer,
        client = client,
        aclient = aclient,
        **kwargs,
    )


def ops_for_value(*args, **kwargs) -> ValueOperations:
    """
    Returns the Value Operations of the named template
    """
    return get_template(*args, **kwargs).ops_for_value()
