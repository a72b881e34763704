import pytest
import redis
from unittest.mock import MagicMock
from kvops import (
    ValueOperations,
    KVOpsException,
    SerializationError,
    StoreUnavailableError,
    StoreError,
    InvalidArgumentError,
)
from kvops.errors import transpose_error, capture_error


def test_transpose_connection_errors():
    assert isinstance(transpose_error(redis.ConnectionError('refused')), StoreUnavailableError)
    assert isinstance(transpose_error(redis.TimeoutError('timed out')), StoreUnavailableError)

def test_transpose_numeric_reply_errors():
    err = transpose_error(redis.ResponseError('value is not an integer or out of range'))
    assert isinstance(err, SerializationError)
    err = transpose_error(redis.ResponseError('value is not a valid float'))
    assert isinstance(err, SerializationError)

def test_transpose_other_errors():
    source = redis.ResponseError('WRONGTYPE Operation against a key holding the wrong kind of value')
    err = transpose_error(source)
    assert isinstance(err, StoreError)
    assert err.source_error is source
    assert 'WRONGTYPE' in str(err)

def test_transpose_passes_through():
    err = InvalidArgumentError('bad')
    assert transpose_error(err) is err
    key_error = KeyError('x')
    assert transpose_error(key_error) is key_error

def test_invalid_argument_is_value_error():
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(InvalidArgumentError, KVOpsException)

def test_capture_error_chains_source():

    @capture_error()
    def fail():
        raise redis.ConnectionError('down')

    with pytest.raises(StoreUnavailableError) as exc_info:
        fail()
    assert isinstance(exc_info.value.__cause__, redis.ConnectionError)
    assert '[fail]' in str(exc_info.value)

async def test_capture_error_async():

    @capture_error()
    async def afail():
        raise redis.TimeoutError('slow')

    with pytest.raises(StoreUnavailableError):
        await afail()

def test_store_unavailable_is_not_retried():
    client = MagicMock()
    client.get.side_effect = redis.ConnectionError('Connection refused')
    ops = ValueOperations(client = client, key_serializer = 'str', value_serializer = 'str')
    with pytest.raises(StoreUnavailableError):
        ops.get('key')
    assert client.get.call_count == 1

def test_bulk_store_failure_surfaces():
    client = MagicMock()
    client.msetnx.side_effect = redis.ConnectionError('Connection reset')
    ops = ValueOperations(client = client, key_serializer = 'str', value_serializer = 'int')
    with pytest.raises(StoreUnavailableError):
        ops.multi_set_if_absent({'a': 1, 'b': 2})

def test_serialization_error_before_store_call():
    client = MagicMock()
    ops = ValueOperations(client = client, key_serializer = 'str', value_serializer = 'int')
    with pytest.raises(SerializationError):
        ops.set('key', 'not an int')
    client.set.assert_not_called()

def test_requires_a_client():
    with pytest.raises(InvalidArgumentError):
        ValueOperations()

def test_missing_flavour_client():
    ops = ValueOperations(client = MagicMock(), value_serializer = 'str')
    with pytest.raises(StoreUnavailableError):
        ops.aclient
