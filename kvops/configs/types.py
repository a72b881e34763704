from __future__ import annotations

"""
Base Config Types
"""

from pydantic_settings import BaseSettings as _BaseSettings, SettingsConfigDict
from kvops.types.base import BaseModel
from typing import Union


class BaseSettings(_BaseSettings):
    """
    Base Settings
    """

    def update_config(self, **kwargs):
        """
        Update the config for the other settings
        """
        for k, v in kwargs.items():
            if not hasattr(self, k): continue
            if isinstance(getattr(self, k), (BaseSettings, BaseModel)):
                val: Union['BaseSettings', BaseModel] = getattr(self, k)
                if hasattr(val, 'update_config'):
                    val.update_config(**v)
                else: val = val.__class__(**v)
                setattr(self, k, val)
            else: setattr(self, k, v)

    model_config = SettingsConfigDict(
        env_prefix = '',
        case_sensitive = False,
    )
