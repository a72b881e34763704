import uuid
import random
import itertools
import pytest
import fakeredis

from typing import Any, Callable, NamedTuple
from kvops import KVTemplate, KVOpsClient


class Binding(NamedTuple):
    """
    A value serializer and a factory producing distinct values for it
    """
    name: str
    value_serializer: str
    value_factory: Callable[[], Any]


_counter = itertools.count(random.randint(1, 10_000))

def string_factory() -> str:
    return uuid.uuid4().hex

def long_factory() -> int:
    return next(_counter)

def double_factory() -> float:
    return next(_counter) + 0.25


STRING_BINDING = Binding('str', 'str', string_factory)
LONG_BINDING = Binding('int', 'int', long_factory)
DOUBLE_BINDING = Binding('float', 'float', double_factory)
BINDINGS = [STRING_BINDING, LONG_BINDING, DOUBLE_BINDING]


@pytest.fixture
def server():
    return fakeredis.FakeServer()

@pytest.fixture
def client(server):
    client = fakeredis.FakeRedis(server = server)
    yield client
    client.flushdb()
    client.close()

@pytest.fixture
async def aclient(server):
    aclient = fakeredis.FakeAsyncRedis(server = server)
    yield aclient
    await aclient.flushdb()
    await aclient.aclose()

@pytest.fixture
def make_key() -> Callable[[], str]:
    return lambda: f'test:{uuid.uuid4().hex}'

def _template(client, binding: Binding, **kwargs) -> KVTemplate:
    return KVTemplate(
        client = client,
        key_serializer = 'str',
        value_serializer = binding.value_serializer,
        name = f'test_{binding.name}',
        **kwargs,
    )


@pytest.fixture(params = BINDINGS, ids = [b.name for b in BINDINGS])
def binding(request) -> Binding:
    return request.param

@pytest.fixture
def template(client, binding) -> KVTemplate:
    return _template(client, binding)

@pytest.fixture
def value_ops(template):
    return template.ops_for_value()

@pytest.fixture
def make_value(binding) -> Callable[[], Any]:
    return binding.value_factory


@pytest.fixture
def string_ops(client):
    return _template(client, STRING_BINDING).ops_for_value()

@pytest.fixture
def long_ops(client):
    return _template(client, LONG_BINDING).ops_for_value()

@pytest.fixture
def double_ops(client):
    return _template(client, DOUBLE_BINDING).ops_for_value()


@pytest.fixture(autouse = True)
def clear_templates():
    """
    Clears the registered templates before and after each test
    """
    KVOpsClient.templates.clear()
    yield
    KVOpsClient.templates.clear()


@pytest.fixture
def make_template(client, binding) -> Callable[..., KVTemplate]:
    """
    Builds a template for the current binding with extra options
    """
    return lambda **kwargs: _template(client, binding, **kwargs)
