from __future__ import annotations

import json
from types import ModuleType
from typing import Any, Optional, Union
from kvops.utils.helpers import lazy_import
from .base import BaseSerializer

default_json: ModuleType = json


class JsonSerializer(BaseSerializer[Any]):
    """
    Any JSON-compatible value as utf-8 JSON text
    """
    name: Optional[str] = "json"
    jsonlib: ModuleType = default_json

    def __init__(
        self,
        jsonlib: Optional[Union[str, ModuleType]] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if jsonlib is not None:
            if isinstance(jsonlib, str): jsonlib = lazy_import(jsonlib)
            assert hasattr(jsonlib, "dumps") and hasattr(jsonlib, "loads"), f"Invalid JSON Library: {jsonlib}"
            self.jsonlib = jsonlib
        self.jsonlib_name = self.jsonlib.__name__

    def encode_value(self, value: Any, **kwargs) -> Union[str, bytes]:
        """
        Encodes the value
        """
        return self.jsonlib.dumps(value, **kwargs)

    def decode_value(self, value: bytes, **kwargs) -> Any:
        """
        Decodes the value
        """
        return self.jsonlib.loads(value, **kwargs)
