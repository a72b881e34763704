from .main import KVOpsSettings, KVOpsClientConfig, settings
