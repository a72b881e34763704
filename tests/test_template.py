import pytest
import fakeredis
from kvops import (
    KVTemplate,
    KVOpsClient,
    TimeUnit,
    ValueOperations,
    StoreUnavailableError,
    LongSerializer,
    get_template,
    ops_for_value,
)


def test_ops_for_value_is_cached(template):
    ops = template.ops_for_value()
    assert isinstance(ops, ValueOperations)
    assert template.ops_for_value() is ops
    assert template.ops is ops
    assert ops.key_serializer is template.key_serializer
    assert ops.value_serializer is template.value_serializer

def test_has_key_and_delete(template, value_ops, make_key, make_value):
    key1, key2 = make_key(), make_key()
    value_ops.multi_set({key1: make_value(), key2: make_value()})
    assert template.has_key(key1)
    assert template.delete(key1, key2, make_key()) == 2
    assert not template.has_key(key1)
    assert template.delete([]) == 0

def test_expire_and_get_expire(template, value_ops, make_key, make_value):
    key = make_key()
    value_ops.set(key, make_value())
    assert template.get_expire(key) == -1
    assert template.expire(key, 10, TimeUnit.SECONDS) is True
    assert 9 <= template.get_expire(key) <= 10
    assert 9000 < template.get_expire(key, TimeUnit.MILLISECONDS) <= 10_000
    assert template.get_expire(make_key()) == -2
    assert template.expire(make_key(), 10) is False

def test_expire_with_seconds_resolution(make_template, make_key, make_value):
    template = make_template(expiration_resolution = 'seconds')
    key = make_key()
    template.ops_for_value().set(key, make_value())
    assert template.expire(key, 1, TimeUnit.MILLISECONDS) is True
    assert 0 < template.get_expire(key, 'ms') <= 1000

def test_flush_db(template, value_ops, make_key, make_value):
    key = make_key()
    value_ops.set(key, make_value())
    template.flush_db()
    assert not template.has_key(key)

def test_template_without_client():
    template = KVTemplate(aclient = fakeredis.FakeAsyncRedis())
    with pytest.raises(StoreUnavailableError):
        template.has_key('key')

def test_serializer_instances(client, make_key):
    serializer = LongSerializer()
    template = KVTemplate(client = client, value_serializer = serializer)
    assert template.value_serializer is serializer
    ops = template.ops_for_value()
    key = make_key()
    ops.set(key, 7)
    assert client.get(key) == b'7'

def test_default_serializers_from_settings(client):
    template = KVTemplate(client = client)
    assert template.key_serializer.name == 'str'
    assert template.value_serializer.name == 'str'

def test_client_manager_caches_templates(client):
    template = KVOpsClient.get_template(name = 'counters', client = client, value_serializer = 'int')
    assert KVOpsClient.get_template(name = 'counters') is template
    assert get_template(name = 'counters') is template
    assert ops_for_value(name = 'counters') is template.ops_for_value()
    replaced = KVOpsClient.get_template(name = 'counters', client = client, overwrite = True)
    assert replaced is not template
    assert KVOpsClient.remove_template('counters') is replaced

def test_client_manager_add_template(client):
    template = KVTemplate(client = client, name = 'added')
    KVOpsClient.add_template(template)
    assert KVOpsClient.get_template('added') is template
    with pytest.raises(ValueError):
        KVOpsClient.add_template(KVTemplate(client = client, name = 'added'))
    KVOpsClient.close_templates()
    assert KVOpsClient.templates == {}

def test_client_manager_builds_clients_from_url():
    template = KVOpsClient.create_template(name = 'from_url', url = 'redis://localhost:6399/2', socket_timeout = 0.5)
    assert template.client.connection_pool.connection_kwargs['db'] == 2
    assert template.client.connection_pool.connection_kwargs['socket_timeout'] == 0.5
    assert template.aclient.connection_pool.connection_kwargs['port'] == 6399
    template.close()

def test_unreachable_store(make_key):
    template = KVOpsClient.create_template(name = 'unreachable', url = 'redis://localhost:1/0', socket_connect_timeout = 0.2)
    with pytest.raises(StoreUnavailableError):
        template.ops_for_value().get(make_key())
    template.close()

def test_client_options_with_given_client(client):
    template = KVOpsClient.create_template(name = 'given', client = client, socket_timeout = 0.5, expiration_resolution = 'seconds')
    assert template.client is client
    assert template.expiration_resolution.value == 'seconds'
    with pytest.raises(TypeError):
        KVTemplate(client = client, unknown_option = True)
