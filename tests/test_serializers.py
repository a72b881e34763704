import math
import pytest
from kvops import (
    StringSerializer,
    BytesSerializer,
    LongSerializer,
    DoubleSerializer,
    JsonSerializer,
    BaseSerializer,
    SerializationError,
    get_serializer,
    register_serializer,
)
from kvops.io.serializers import RegisteredSerializers


@pytest.mark.parametrize('serializer, value', [
    (StringSerializer(), 'hello'),
    (StringSerializer(), ''),
    (StringSerializer(), 'ünïcödé ✓'),
    (BytesSerializer(), b'\x00\x01\xff'),
    (LongSerializer(), 0),
    (LongSerializer(), -42),
    (LongSerializer(), 2 ** 63 - 1),
    (LongSerializer(), -(2 ** 63)),
    (DoubleSerializer(), 0.1),
    (DoubleSerializer(), -1234.5678),
    (DoubleSerializer(), 1e300),
    (DoubleSerializer(), 5e-324),
    (JsonSerializer(), {'a': [1, 2.5, None, 'x']}),
], ids = lambda x: x.name if isinstance(x, BaseSerializer) else None)
def test_round_trip(serializer, value):
    data = serializer.serialize(value)
    assert isinstance(data, bytes)
    assert serializer.deserialize(data) == value

def test_long_renders_plain_decimal():
    s = LongSerializer()
    assert s.serialize(0) == b'0'
    assert s.serialize(-15) == b'-15'
    assert s.serialize(1200) == b'1200'

def test_double_renders_parseable_decimal():
    s = DoubleSerializer()
    assert s.serialize(1.5) == b'1.5'
    assert s.serialize(3) == b'3.0'
    assert float(s.serialize(0.1)) == 0.1

@pytest.mark.parametrize('data', [b'007', b'1.5', b'', b' 12', b'12\n', b'+5', b'-0', b'1_000', b'abc'])
def test_long_rejects_malformed(data):
    with pytest.raises(SerializationError):
        LongSerializer().deserialize(data)

@pytest.mark.parametrize('value', [True, 1.5, '12', 2 ** 63, -(2 ** 63) - 1])
def test_long_rejects_unrepresentable(value):
    with pytest.raises(SerializationError):
        LongSerializer().serialize(value)

@pytest.mark.parametrize('data', [b'nan', b'inf', b'-inf', b'', b'1.5x', b'1,5', b'1.5\n'])
def test_double_rejects_malformed(data):
    with pytest.raises(SerializationError):
        DoubleSerializer().deserialize(data)

@pytest.mark.parametrize('value', [math.nan, math.inf, -math.inf, False, '1.5'])
def test_double_rejects_unrepresentable(value):
    with pytest.raises(SerializationError):
        DoubleSerializer().serialize(value)

@pytest.mark.parametrize('serializer', [StringSerializer(), BytesSerializer(), LongSerializer(), DoubleSerializer(), JsonSerializer()])
def test_null_values(serializer):
    with pytest.raises(SerializationError):
        serializer.serialize(None)
    assert serializer.deserialize(None) is None

def test_string_rejects_other_types():
    with pytest.raises(SerializationError):
        StringSerializer().serialize(12)
    with pytest.raises(SerializationError):
        StringSerializer().deserialize(b'\xff\xfe')

def test_string_encoding():
    s = StringSerializer(encoding = 'latin-1')
    assert s.serialize('é') == b'\xe9'
    assert s.deserialize(b'\xe9') == 'é'

def test_empty_values():
    assert StringSerializer().empty_value == ''
    assert BytesSerializer().empty_value == b''
    assert LongSerializer().empty_value is None
    assert DoubleSerializer().empty_value is None

def test_get_serializer():
    assert isinstance(get_serializer('str'), StringSerializer)
    assert isinstance(get_serializer('int'), LongSerializer)
    assert isinstance(get_serializer(float), DoubleSerializer)
    assert isinstance(get_serializer(bytes), BytesSerializer)
    assert isinstance(get_serializer(JsonSerializer), JsonSerializer)
    s = LongSerializer()
    assert get_serializer(s) is s
    with pytest.raises(ValueError):
        get_serializer('unknown')

def test_json_serializer_with_custom_lib():
    s = JsonSerializer(jsonlib = 'json')
    assert s.jsonlib_name == 'json'
    assert s.deserialize(s.serialize([1, 2])) == [1, 2]

def test_register_serializer():

    class UpperSerializer(StringSerializer):
        name = 'upper'

        def decode_value(self, value: bytes, **kwargs) -> str:
            return super().decode_value(value).upper()

    register_serializer('upper', UpperSerializer)
    try:
        assert isinstance(get_serializer('upper'), UpperSerializer)
        with pytest.raises(ValueError):
            register_serializer('upper', StringSerializer)
        register_serializer('upper', StringSerializer, override = True)
        assert type(get_serializer('upper')) is StringSerializer
    finally:
        RegisteredSerializers.pop('upper', None)

def test_string_range_decoding():
    serializer = StringSerializer()
    assert serializer.deserialize_range(b'') == ''
    assert serializer.deserialize_range(b'h\xc3') == 'h\ufffd'
    with pytest.raises(SerializationError):
        serializer.deserialize(b'h\xc3')

def test_numeric_range_decoding():
    assert LongSerializer().deserialize_range(b'') is None
    assert LongSerializer().deserialize_range(b'12') == 12
    assert BytesSerializer().deserialize_range(b'') == b''
