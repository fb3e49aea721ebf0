"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a stream without need of sub-components.
"""
import logging
import struct
from enum import Flag, auto

from .enum import Compliant
from .meta import FieldBase
from .exceptions import SNSSException, BadMagic, InvalidText


def round_up(value, alignment=4):
    '''Round value up to the next multiple of alignment.'''
    return (value + alignment - 1) // alignment * alignment


class Field(FieldBase):
    """Base class to subclass from.

    After unpacking, offset is the absolute position of the first byte of
    the field in the original buffer and size the number of bytes consumed."""

    def __init__(self, name=None, father=None, default=None, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = None
        self._size = 0
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self._value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def __str__(self):
        return str(self.value)

    def is_compliant(self, level):
        '''Returns the compliant'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    value = property(fget=lambda self: self._get_value())

    def _get_value(self):
        return self._value

    size = property(fget=lambda self: self._get_size())

    def _get_size(self):
        return self._size

    def to_python(self):
        '''Plain python representation of the decoded data.'''
        return self.value

    def unpack(self, stream):
        self.offset = stream.tell()
        self.logger.debug('unpacking %s at offset 0x%x', self.__class__.__name__, self.offset)

        self._value = self._unpack(stream)
        self._size = stream.tell() - self.offset

        return self._value

    def _unpack(self, stream):
        raise NotImplementedError(f'method {self.__class__.__name__}._unpack() not implemented')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    little endian integers from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        return '<%s' % self.format

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _convert(self, value):
        return value

    def _unpack(self, stream):
        return self._convert(stream.read_struct(self.get_format()))


class BooleanField(StructField):
    """Signed 32 bits integer where any value different from zero is True."""

    def __init__(self, **kw):
        super().__init__('i', default=False, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.value)

    def _convert(self, value):
        return value != 0


class StringField(Field):
    """Represent a contiguous chunk of bytes of fixed length.

    When is_magic is set the value read must correspond to the default."""

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

    def _unpack(self, stream):
        if self.is_magic:
            # a short input can't contain the magic either
            found = stream.remaining()[:self.length]
            if found != self.default:
                if self.is_compliant(Compliant.MAGIC):
                    raise BadMagic(f'expected magic {self.default!r}, found {found!r}', offset=self.offset)
                self.logger.warning(f'the magic doesn\'t correspond: expected {self.default!r}, found {found!r}')

        return stream.take(self.length)


class PaddingField(Field):
    '''Takes n bytes or, if not indicated, as much stream as possible.'''

    def __init__(self, n=None, **kw):
        self.length = n
        super().__init__(default=b'', **kw)

    def __repr__(self):
        return '<%s(%d bytes)>' % (self.__class__.__name__, len(self.value))

    def _unpack(self, stream):
        if self.length is None:
            return stream.read_all()

        return stream.take(self.length)


class PickleBytesField(Field):
    '''Length-prefixed data aligned to a 4 bytes boundary.

    The layout is the one used by the chromium Pickle class: an unsigned
    32 bits length followed by the data, zero-padded so that the next field
    starts at a multiple of four bytes

        .---------.--------------------.---------.
        | length  |  data              | padding |
        '---------'--------------------'---------'

    The length counts units of "unit" bytes; only the first length * unit
    bytes are part of the value, the padding is consumed and discarded.'''

    unit = 1
    alignment = 4

    def __init__(self, **kw):
        self.length = 0
        super().__init__(default=self.value_empty(), **kw)

    def value_empty(self):
        return b''

    def _get_raw_size(self):
        return self.length * self.unit

    def _unpack(self, stream):
        start = stream.tell()

        self.length = stream.read_u32_le()
        n = self._get_raw_size()
        padded = round_up(n, self.alignment)

        self.logger.debug('%s: length %d (%d bytes on the wire)', self.name, self.length, padded)

        stream.ensure(padded, offset=start, what=f'field of length {self.length}')
        raw = stream.take(padded)

        return self._decode(raw[:n], start + 4)

    def _decode(self, raw, offset):
        return raw


class PickleStringField(PickleBytesField):
    '''Length-prefixed text, the length indicates the number of bytes.'''

    encoding = 'utf-8'

    def value_empty(self):
        return ''

    def _decode(self, raw, offset):
        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise InvalidText(f'invalid {self.encoding} text: {e.reason}', offset=offset + e.start) from e


class PickleString16Field(PickleStringField):
    '''Length-prefixed text encoded as UTF-16, the length indicates the number of code units.'''

    unit = 2
    encoding = 'utf-16-le'


class SelectField(Field):
    """Allow to select the kind of final field based on condition in the parent chunk.
    You need to pass the name of the field to use as key and a dictionary with the mapping
    between the value of such field and the field to use. You can use Type.DEFAULT as a default.

    Like in the following example we have a format that uses the first byte to indicate what
    follows: for value one you have another 4 bytes, otherwise all the remaining data

        class Dummy(Chunk):
            type = fields.StructField('B')
            data = fields.SelectField('type', {
                1: fields.StructField('I'),
                fields.SelectField.Type.DEFAULT: fields.PaddingField(),
            })
    """
    class Type(Flag):
        DEFAULT = auto()

    def __init__(self, key, mapping, **kwargs):
        self._key = key
        self._mapping = mapping
        self._field = None

        super().__init__(**kwargs)

    def __repr__(self):
        return f'<{self.__class__.__name__}{self._field!r}>'

    @property
    def field(self):
        '''The field selected during unpacking.'''
        return self._field

    def _get_value(self):
        return self._field.value if self._field is not None else None

    def _get_size(self):
        return self._field.size if self._field is not None else 0

    def to_python(self):
        return self._field.to_python() if self._field is not None else None

    def select(self, key):
        return self._mapping[key] if key in self._mapping else self._mapping[SelectField.Type.DEFAULT]

    def _unpack(self, stream):
        self.logger.debug('resolving key \'%s\'' % self._key)
        key = getattr(self.father, self._key).value

        self._field = self.select(key).create(father=self)
        self._field.name = self.name
        self.logger.debug(f'using {self._field.__class__.__name__} for key {key!r}')

        self._field.unpack(stream)

        return self._field.value


class RecordArrayField(Field):
    '''Un/Pack an array of records each one prefixed by its length.

    Each element is unpacked from a stream scoped to exactly the number
    of bytes indicated by the length prefix so that an element can never
    read into the next one. The array ends when the stream has not enough
    data for another length prefix.

    This class behaves like a (read-only) list.
    '''

    def __init__(self, field, length_format='H', **kw):
        self.field = field
        self.length_format = '<%s' % length_format
        super().__init__(default=[], **kw)

    def value_from_default(self):
        return []

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def to_python(self):
        return [_.to_python() for _ in self.value]

    def instance_element(self):
        return self.field.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack_element(self, element, stream):
        try:
            element.unpack(stream)
        except SNSSException as e:
            e.chain.insert(0, element.name)
            raise

    def _unpack(self, stream):
        elements = []
        prefix_size = struct.calcsize(self.length_format)

        while stream.left >= prefix_size:
            start = stream.tell()
            length = stream.read_struct(self.length_format)
            record = stream.substream(length, offset=start)

            element = self.instance_element()
            element.name = str(len(elements))
            self.logger.debug('unpacking record #%s of %d bytes at offset 0x%x', element.name, length, record.tell())

            self.unpack_element(element, record)
            elements.append(element)

        if stream.left:
            self.logger.warning('%d trailing bytes at offset %d are too few for a record', stream.left, stream.tell())

        return elements
