from __future__ import annotations

"""
This module controls the default configurations for certain parameters and provides
the ability to override them.
"""

from typing import Optional

DEFAULT_KVOPS_URL = "redis://localhost:6379/0"

DEFAULT_KEY_SERIALIZER = "str"
DEFAULT_VALUE_SERIALIZER = "str"

# Redis has honored millisecond expirations (SET PX) since 2.6
DEFAULT_EXPIRATION_RESOLUTION = "milliseconds"


def get_default_kvops_url() -> str:
    """
    Returns the default url
    """
    return DEFAULT_KVOPS_URL


def set_default_serializers(
    key_serializer: Optional[str] = None,
    value_serializer: Optional[str] = None,
) -> None:
    """
    Sets the default key and value serializers used by new settings
    """
    global DEFAULT_KEY_SERIALIZER, DEFAULT_VALUE_SERIALIZER
    if key_serializer is not None: DEFAULT_KEY_SERIALIZER = key_serializer
    if value_serializer is not None: DEFAULT_VALUE_SERIALIZER = value_serializer


def get_default_key_serializer() -> str:
    """
    Returns the default key serializer
    """
    return DEFAULT_KEY_SERIALIZER


def get_default_value_serializer() -> str:
    """
    Returns the default value serializer
    """
    return DEFAULT_VALUE_SERIALIZER
