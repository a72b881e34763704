"""
Exceptions raised by the Value Operations
"""

import functools
from redis.exceptions import (
    RedisError,
    ResponseError,
    ConnectionError as RedisConnectionError,
    TimeoutError as RedisTimeoutError,
)
from typing import Optional, Union, Callable, TypeVar
from .utils.logs import logger
from .utils.helpers import is_coro_func


class KVOpsException(Exception):

    verbose: Optional[bool] = None
    fatal: Optional[bool] = None
    level: Optional[str] = 'ERROR'
    traceback_depth: Optional[int] = None

    def __init__(
        self,
        msg: Optional[str] = None,
        fatal: Optional[bool] = None,
        verbose: Optional[bool] = None,
        level: Optional[str] = None,
        traceback_depth: Optional[int] = None,
        source_error: Optional[Exception] = None,
        *args,
        **kwargs,
    ):
        self.msg = msg or ''
        self.source_error = source_error
        if source_error is not None: self.msg += f'\n{source_error}'
        if fatal is not None: self.fatal = fatal
        if verbose is not None: self.verbose = verbose
        if level is not None: self.level = level
        if traceback_depth is not None: self.traceback_depth = traceback_depth
        super().__init__(self.msg.strip(), *args, **kwargs)
        self.display()

    def display(self):
        """
        Displays the error
        """
        if self.verbose:
            logger.log(self.level, self.log_msg)

    @property
    def error_name(self) -> str:
        """
        Returns the error name
        """
        name = self.__class__.__name__
        if not self.source_error or name != 'KVOpsException': return name
        return self.source_error.__class__.__name__

    @property
    def log_msg(self) -> str:
        """
        Returns the log message
        """
        msg = f'[{self.error_name}]'
        if self.msg: msg += f' {self.msg}'
        if self.fatal:
            import traceback
            msg += f'\n{traceback.format_exc(limit = self.traceback_depth)}'
        return msg.strip()


class SerializationError(KVOpsException):
    """
    Raised when a value cannot be encoded or decoded for its declared type.
    """
    level = 'WARNING'
    traceback_depth = 1
    verbose = True


class InvalidArgumentError(KVOpsException, ValueError):
    """
    Raised for negative offsets, malformed ranges and invalid expirations.
    """
    level = 'WARNING'
    traceback_depth = 1
    verbose = False


class StoreUnavailableError(KVOpsException):
    """
    Raised when the store cannot be reached.
    """
    level = 'ERROR'
    traceback_depth = 2
    verbose = True


class StoreError(KVOpsException):
    """
    Raised when the store rejects a command for any other reason.
    """
    level = 'ERROR'
    traceback_depth = 2
    verbose = True


# Fragments of the store replies when a numeric command hits a non-numeric value
_numeric_reply_errors = (
    'not an integer',
    'not a valid float',
    'would produce nan or infinity',
)


def transpose_error(
    exc: Union[RedisError, KVOpsException, Exception],
    msg: Optional[str] = None,
    fatal: Optional[bool] = None,
    verbose: Optional[bool] = None,
    **kwargs,
) -> Exception:
    """
    Transposes the error to a KVOpsException
    """
    if isinstance(exc, KVOpsException): return exc
    if isinstance(exc, (RedisConnectionError, RedisTimeoutError)):
        return StoreUnavailableError(msg = msg, fatal = fatal, verbose = verbose, source_error = exc, **kwargs)
    if isinstance(exc, ResponseError) and any(e in str(exc) for e in _numeric_reply_errors):
        return SerializationError(msg = msg, fatal = fatal, verbose = verbose, source_error = exc, **kwargs)
    if isinstance(exc, RedisError):
        return StoreError(msg = msg, fatal = fatal, verbose = verbose, source_error = exc, **kwargs)
    return exc

RT = TypeVar('RT')

def capture_error(
    verbose: Optional[bool] = None,
    **error_kwargs,
) -> Callable[[Callable[..., RT]], Callable[..., RT]]:
    """
    Decorator to capture errors and transpose them to KVOpsExceptions
    """
    def decorator(func):
        if is_coro_func(func):
            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    err = transpose_error(e, msg = f'[{func.__name__}]', verbose = verbose, **error_kwargs)
                    if err is e: raise
                    raise err from e
            return wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                err = transpose_error(e, msg = f'[{func.__name__}]', verbose = verbose, **error_kwargs)
                if err is e: raise
                raise err from e
        return wrapper
    return decorator
