import os

from lzl.logging import (
    get_logger,
    null_logger,
    Logger,
    NullLogger
)

# Shared by every kvops module, `LOGGER_LEVEL` overrides the level
logger_level: str = os.getenv('LOGGER_LEVEL', 'INFO').upper()
logger = get_logger(
    'kvops',
    logger_level
)
