"""
A Field is "fundamental" datatype from the format point of view: it lives at
an absolute offset of the stream and knows how to read (unpack) and write (pack)
itself there.
"""
import logging
import struct

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Offset, PropertyDescriptor
from .exceptions import FieldTooLongError, FormatError


logger = logging.getLogger(__name__)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, field_name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT, is_magic=False, readonly=False):
        super().__init__()
        self.field_name = field_name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic
        self.readonly = readonly

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def is_compliant(self, level):
        '''Returns True if this field or one of its fathers (while inheriting) requires the level'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def __set_offset(self, value):
        self.__offset = value

    def __get_offset(self):
        if isinstance(self.__offset, Offset):
            return self.__offset.resolve(self)

        return self.__offset

    offset = property(__get_offset, __set_offset)

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    def validate(self):
        '''A magic field is valid only when it holds its default value'''
        return not self.is_magic or self.value == self.default

    def check(self):
        '''Called before packing: raises if the value cannot be written as it is.'''
        pass

    def get_offset(self):
        return self.offset if self.offset is not None else 0

    def pack(self, stream):
        offset = self.get_offset()
        logger.debug('packing %s at offset 0x%x' % (self.field_name, offset))
        stream.seek(offset)
        stream.write(self.raw)

    def unpack(self, stream):
        offset = self.get_offset()
        stream.seek(offset)
        self.value = self._unpack(stream)
        logger.debug('unpacked %s at offset 0x%x: %r' % (self.field_name, offset, self))

    def _unpack(self, stream):
        raise NotImplementedError(f"method {self.__class__.__name__}._unpack() not implemented")


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def _unpack(self, stream):
        return struct.unpack(self.get_format(), stream.read_exactly(self.size))[0]


class MirroredStructField(StructField):
    """A value that the format stores more than once: the field's offset holds the
    authoritative copy, read when unpacking, while packing writes the value at the
    offset and at every mirror so that the copies can't diverge.
    """

    def __init__(self, format, mirrors=(), **kw):
        self.mirrors = tuple(mirrors)
        super().__init__(format, **kw)

    def read_mirrors(self, stream):
        values = []
        for offset in self.mirrors:
            stream.seek(offset)
            values.append(super()._unpack(stream))

        return values

    def _unpack(self, stream):
        value = super()._unpack(stream)
        mirrors = self.read_mirrors(stream)

        disagreeing = [(offset, _) for offset, _ in zip(self.mirrors, mirrors) if _ != value]
        if disagreeing:
            msg = 'field \'%s\' is 0x%x at 0x%x but %s' % (
                self.field_name,
                value,
                self.get_offset(),
                ', '.join('0x%x at 0x%x' % (_value, _offset) for _offset, _value in disagreeing),
            )
            if self.is_compliant(Compliant.SIZE):
                raise FormatError(msg, chain=[])
            logger.warning(msg)

        return value

    def pack(self, stream):
        raw = self.raw
        for offset in (self.get_offset(),) + self.mirrors:
            logger.debug('packing %s at offset 0x%x' % (self.field_name, offset))
            stream.seek(offset)
            stream.write(raw)


class StringField(Field):
    """Represent a contiguous chunk of bytes with fixed length."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self.length = n or len(kw['default'])

        super().__init__(**kw)

    def __len__(self):
        return self.length

    def value_from_default(self):
        return b'\x00' * self.length if not self.default else self.default

    def _get_size(self):
        return self.length

    def _set_value(self, value) -> None:
        if len(value) != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        super()._set_value(bytes(value))

    def _get_raw(self):
        return self.value

    def _unpack(self, stream):
        return stream.read_exactly(self.length)


class BlobField(Field):
    """Opaque bytes whose length usually comes from another field via a Dependency:
    setting the value writes its length back to that field.

        class Example(Chunk):
            size = fields.StructField('i')
            data = fields.BlobField(Dependency('.size'))
    """

    length = PropertyDescriptor('length', int)

    def __init__(self, n=0, maximum=None, **kw):
        self.length = n
        self.maximum = maximum
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%d bytes)>' % (self.__class__.__name__, len(self.value))

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        return self.default or b''

    def _set_value(self, value):
        value = bytes(value)

        if self.maximum is not None and len(value) > self.maximum:
            raise FieldTooLongError(
                f"field '{self.field_name}' can hold at most {self.maximum} bytes, not {len(value)}")

        super()._set_value(value)
        self.length = len(value)

    def _get_size(self):
        return len(self.value)

    def _get_raw(self):
        return self.value

    def check(self):
        '''The length can be assigned on its own, it must still describe the data.'''
        if self.length != len(self.value):
            raise ValueError(
                f"field '{self.field_name}' has length {self.length} but holds {len(self.value)} bytes")

    def _unpack(self, stream):
        length = self.length
        if length < 0:
            raise FormatError(f"negative length {length} for field '{self.field_name}'", chain=[])

        return stream.read_exactly(length)


class TextField(Field):
    """Text terminated by a null code unit living in a slot of fixed width.

    Nothing prevents the format from having text longer than the slot, that
    would overwrite the field after it: when the father requires Compliant.SLOT
    check() refuses such a value, otherwise we only warn about it.

    A text that fits the slot only without its terminator is written cut to
    the slot: reading stops at the end of the slot anyway.
    """
    encoding = None
    terminator = None
    errors = 'strict'

    def __init__(self, slot, default='', **kw):
        self.slot = slot
        super().__init__(default=default, **kw)

    def _set_value(self, value):
        if not isinstance(value, str):
            raise ValueError(f"field '{self.field_name}' needs a str, not {value.__class__.__name__}")

        super()._set_value(value)

    def _get_size(self):
        return len(self.raw)

    def _get_raw(self):
        text = self.value.encode(self.encoding, errors=self.errors)
        raw = text + self.terminator

        if len(text) <= self.slot < len(raw):
            return raw[:self.slot]

        return raw

    def check(self):
        size = self.size
        if size <= self.slot:
            return

        msg = 'text for field \'%s\' needs %d bytes but the slot at 0x%x has only %d' % (
            self.field_name, size, self.get_offset(), self.slot)

        if self.is_compliant(Compliant.SLOT):
            raise FieldTooLongError(msg, chain=[])

        logger.warning(msg)

    def _unpack(self, stream):
        raw = stream.read(self.slot)
        unit = len(self.terminator)

        for idx in range(0, len(raw) - unit + 1, unit):
            if raw[idx:idx + unit] == self.terminator:
                raw = raw[:idx]
                break
        else:
            logger.debug('no terminator found for field \'%s\'' % self.field_name)
            raw = raw[:len(raw) - len(raw) % unit]

        return raw.decode(self.encoding, errors=self.errors)


class AsciiStringField(TextField):
    encoding = 'ascii'
    terminator = b'\x00'
    errors = 'surrogateescape'  # bytes over 0x7f survive a read and write back


class UTF16StringField(TextField):

    terminator = b'\x00\x00'
    errors = 'surrogatepass'

    @property
    def encoding(self):
        return 'utf-16-le' if self.endianess == Endianess.LITTLE_ENDIAN else 'utf-16-be'
