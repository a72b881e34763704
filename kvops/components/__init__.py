from .client import KVStore, AsyncKVStore
from .operations import ValueOperations
from .template import KVTemplate
