from __future__ import annotations

"""
Base Types
"""

from pydantic import BaseModel as _BaseModel, ConfigDict
from typing import Any, Dict, Optional, Set


class BaseModel(_BaseModel):
    """
    Base Model
    """

    def update_config(self, **kwargs):
        """
        Update the config for the other settings
        """
        for k, v in kwargs.items():
            if not hasattr(self, k): continue
            if isinstance(getattr(self, k), BaseModel):
                val: 'BaseModel' = getattr(self, k)
                if hasattr(val, 'update_config'):
                    val.update_config(**v)
                else: val = val.__class__(**v)
                setattr(self, k, val)
            else: setattr(self, k, v)

    @classmethod
    def extract_kwargs(
        cls, 
        _prefix: Optional[str] = None,
        _include_prefix: Optional[bool] = None,
        _exclude: Optional[Set[str]] = None,
        _exclude_none: Optional[bool] = True,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Extract the kwargs that are valid for this model
        """
        if _prefix:
            _kwargs = {(k if _include_prefix else k.replace(_prefix, '')): v for k, v in kwargs.items() if k.startswith(_prefix) and k.replace(_prefix, '') in cls.model_fields}
        else:
            _kwargs = {k: v for k, v in kwargs.items() if k in cls.model_fields}
        if _exclude_none: _kwargs = {k: v for k, v in _kwargs.items() if v is not None}
        if _exclude is not None: _kwargs = {k: v for k, v in _kwargs.items() if k not in _exclude}
        return _kwargs

    model_config = ConfigDict(
        extra = 'allow',
        arbitrary_types_allowed = True,
    )
