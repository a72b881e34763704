from __future__ import annotations

# Lazy Initialization
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from kvops.configs.main import KVOpsSettings

_kvops_settings: Optional['KVOpsSettings'] = None


def get_settings() -> 'KVOpsSettings':
    """
    Gets the settings object
    """
    global _kvops_settings
    if _kvops_settings is None:
        from kvops.configs.main import KVOpsSettings
        _kvops_settings = KVOpsSettings()
    return _kvops_settings


_template_manager = None


def get_template_manager():
    """
    Gets the process-wide template manager
    """
    global _template_manager
    if _template_manager is None:
        from kvops.client import KVOpsTemplateManager
        _template_manager = KVOpsTemplateManager()
    return _template_manager
