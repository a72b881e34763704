from __future__ import annotations

"""
Main Config Class
"""

from pydantic import Field, field_validator
from lzl.proxied import ProxyObject

from kvops.types.base import BaseModel
from kvops.types.common import ExpirationResolution
from .types import BaseSettings, SettingsConfigDict
from .defaults import (
    get_default_kvops_url,
    get_default_key_serializer,
    get_default_value_serializer,
    DEFAULT_EXPIRATION_RESOLUTION,
)
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from kvops.utils.logs import Logger


def normalize_url(url: str) -> str:
    """
    Adds the default scheme to bare `host:port/db` urls
    """
    url = str(url)
    if "://" not in url: url = f"redis://{url}"
    return url


class KVOpsClientConfig(BaseModel):
    """
    Connection options handed to the store client
    """
    socket_timeout: Optional[float] = None
    socket_connect_timeout: Optional[float] = None
    socket_keepalive: Optional[bool] = None
    health_check_interval: Optional[int] = None
    max_connections: Optional[int] = None

    def get_client_kwargs(self, **kwargs) -> Dict[str, Any]:
        """
        Returns the kwargs for `redis.Redis.from_url`
        """
        config = self.model_dump(exclude_none = True)
        config.update({k: v for k, v in kwargs.items() if v is not None})
        return config


class KVOpsSettings(BaseSettings):
    """
    KVOps Settings
    """

    url: str = Field(default_factory = get_default_kvops_url)
    key_serializer: str = Field(default_factory = get_default_key_serializer)
    value_serializer: str = Field(default_factory = get_default_value_serializer)
    encoding: str = 'utf-8'
    encoding_errors: str = 'strict'
    expiration_resolution: ExpirationResolution = ExpirationResolution(DEFAULT_EXPIRATION_RESOLUTION)

    debug: Optional[bool] = None

    # Client Settings
    client_config: Optional[KVOpsClientConfig] = Field(default_factory = KVOpsClientConfig)

    @field_validator('url', mode = 'before')
    def validate_url(cls, v: str) -> str:
        """
        Validate the URL
        """
        return normalize_url(v)

    @property
    def logger(self) -> 'Logger':
        """
        Returns the logger
        """
        from kvops.utils.logs import logger
        return logger

    @property
    def null_logger(self) -> 'Logger':
        """
        Returns a null logger
        """
        from kvops.utils.logs import null_logger
        return null_logger

    @property
    def autologger(self) -> 'Logger':
        """
        Returns the logger if debug is enabled
        """
        return self.logger if self.debug else self.null_logger

    @property
    def version(self) -> str:
        """
        Returns the version of the library
        """
        from kvops.version import VERSION
        return VERSION

    def configure(self, **kwargs):
        """
        Update the config for the other settings
        """
        if 'client_config' in kwargs: client_config = kwargs.pop('client_config')
        else:
            client_config = {
                field: kwargs.pop(field)
                for field in KVOpsClientConfig.model_fields
                if field in kwargs
            }
        if isinstance(client_config, BaseModel): client_config = client_config.model_dump(exclude_none = True)
        if client_config: self.client_config.update_config(**client_config)
        if 'expiration_resolution' in kwargs:
            kwargs['expiration_resolution'] = ExpirationResolution(kwargs['expiration_resolution'])
        if 'url' in kwargs: kwargs["url"] = normalize_url(kwargs["url"])
        self.update_config(**kwargs)

    model_config = SettingsConfigDict(
        env_prefix = 'KVOPS_',
        case_sensitive = False,
    )

settings: 'KVOpsSettings' = ProxyObject(
    obj_getter = 'kvops.utils.lazy.get_settings',
)
