import pytest

from blamshot.core import Chunk, opened
from blamshot.enum import Compliant
from blamshot.exceptions import ClosedError, FieldTooLongError, TruncatedDataError
from blamshot.fields import StructField, StringField, BlobField, AsciiStringField
from blamshot.meta import Meta
from blamshot.properties import ContainerState, Dependency, Offset
from blamshot.streams import Stream


def test_meta():
    class Dummy(Chunk):
        field = StructField('i')

    class Dummy2(Chunk):
        field2 = StructField('i')

    d = Dummy()
    d2 = Dummy2()

    assert isinstance(d._meta, Meta)
    assert len(d._meta.fields) == 1
    assert isinstance(d.field, StructField)
    assert d.field.father is d
    assert len(d2._meta.fields) == 1


def test_fields_are_not_shared():
    class Dummy(Chunk):
        field = StructField('I')

    a, b = Dummy(), Dummy()

    a.field = 0xcafe

    assert a.field.value == 0xcafe
    assert b.field.value == 0
    assert a.field is not b.field


def test_inheritance():
    '''subclasses inherit fields'''
    class Father(Chunk):
        field_a = StringField(0x10, offset=0)
        field_b = StructField('I', offset=0x10)

    class Son(Father):
        field_c = StringField(0x08, offset=0x14)

    field_b_value = b'\x01\x02\x03\x04'
    field_c_value = b'ABCDEFGH'
    son = Son()
    son.unpack(Stream(b'A' * 16 + field_b_value + field_c_value))

    assert [_ for _, __ in son.get_fields()] == [
        'field_a', 'field_b', 'field_c',
    ]

    assert son.field_b.value == 0x04030201
    assert son.field_c.value == field_c_value


def test_chunk_w_dependencies():
    class Example(Chunk):
        size = StructField('I', offset=0)
        data = BlobField(Dependency('.size'), offset=4)

    example = Example()
    example.unpack(Stream(b'\x03\x00\x00\x00abcdef'))

    assert example.size.value == 3
    assert example.data.value == b'abc'

    example.data = b'kebab'

    assert example.size.value == 5
    assert example.data.length == 5


def test_chunk_unpack_chain():
    class Example(Chunk):
        size = StructField('I', offset=0)
        data = BlobField(Dependency('.size'), offset=4)

    with pytest.raises(TruncatedDataError) as excinfo:
        Example().unpack(Stream(b'\x10\x00\x00\x00abc'))

    assert excinfo.value.chain == ['data']


def test_chunk_offset_dependency():
    class Example(Chunk):
        size = StructField('B', offset=0)
        data = BlobField(Dependency('.size'), offset=1)
        trailer = StringField(default=b'END', offset=Offset('.data'))

    example = Example()
    example.data = b'abcd'

    assert example.trailer.offset == 5
    assert example.layout == {
        'size': (0, 1),
        'data': (1, 4),
        'trailer': (5, 3),
    }

    stream = Stream(b'')
    example.pack(stream)

    assert stream.getvalue() == b'\x04abcdEND'


def test_sub_chunks():
    class Inner(Chunk):
        a = StructField('B', offset=0)

    class Outer(Chunk):
        inner = Inner()
        b = StructField('B', offset=1)

    outer = Outer()
    outer.unpack(Stream(b'\x01\x02'))

    assert outer.inner.father is outer
    assert outer.inner.a.father is outer.inner
    assert outer.inner.a.value == 1
    assert outer.layout == {
        'inner.a': (0, 1),
        'b': (1, 1),
    }


def test_pack_is_all_or_nothing():
    class Text(Chunk):
        first = AsciiStringField(4, offset=0)
        second = AsciiStringField(4, offset=4)

    text = Text(compliant=Compliant.SLOT)
    text.first = 'abc'
    text.second = 'toolong'

    stream = Stream(b'\xff' * 8)

    with pytest.raises(FieldTooLongError) as excinfo:
        text.pack(stream)

    assert excinfo.value.chain == ['second']
    assert stream.getvalue() == b'\xff' * 8


def test_opened():
    class Resource:
        state = ContainerState.OPEN

        @opened
        def use(self):
            return 'used'

    resource = Resource()

    assert resource.use() == 'used'

    resource.state = ContainerState.CLOSED

    with pytest.raises(ClosedError):
        resource.use()
