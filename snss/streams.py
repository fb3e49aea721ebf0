import logging
import struct

from .exceptions import Truncated


logger = logging.getLogger(__name__)


class Stream(object):
    '''Read-only cursor over an immutable buffer.

    The cursor always works with absolute offsets into the buffer it was
    originally created from: a sub-stream obtained with substream() shares
    the same buffer and simply has a narrower window, so that the offsets
    reported by errors raised from nested decoders remain meaningful for
    the whole file.'''

    def __init__(self, obj, start=0, end=None):
        if not isinstance(obj, (bytes, bytearray, memoryview)):
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % obj.__class__.__name__)

        self.obj = obj if isinstance(obj, memoryview) else memoryview(bytes(obj))
        self.start = start
        self.end = len(self.obj) if end is None else end
        self._position = start

        if not 0 <= self.start <= self.end <= len(self.obj):
            raise ValueError(f'window [{self.start}, {self.end}) is outside the buffer')

    def __repr__(self):
        return f'<{self.__class__.__name__}(0x{self.start:x}-0x{self.end:x} @ 0x{self._position:x})>'

    def __len__(self):
        return self.left

    def tell(self):
        '''Absolute offset of the cursor.'''
        return self._position

    @property
    def left(self):
        '''Number of bytes between the cursor and the end of the window.'''
        return self.end - self._position

    def is_exhausted(self):
        return self._position >= self.end

    def ensure(self, n, offset=None, what=None):
        '''Raise Truncated if fewer than n bytes are left.

        The offset reported defaults to the actual cursor position but the
        caller can indicate a different one (like the start of a length prefix).'''
        if n <= self.left:
            return

        raise Truncated(
            f'{what or "read"} needs {n} bytes but only {self.left} are available',
            offset=self._position if offset is None else offset,
        )

    def take(self, n):
        '''Return the next n raw bytes, advancing the cursor.'''
        if n < 0:
            raise ValueError(f'cannot take a negative number of bytes ({n})')

        self.ensure(n)
        data = self.obj[self._position:self._position + n].tobytes()
        self._position += n

        return data

    def remaining(self):
        '''All the bytes from the cursor to the end of the window, without advancing.'''
        return self.obj[self._position:self.end].tobytes()

    def read_all(self):
        '''Like remaining() but it consumes the data.'''
        return self.take(self.left)

    def _read_struct(self, format):
        size = struct.calcsize(format)
        raw = self.take(size)

        return struct.unpack(format, raw)[0]

    def read_u8(self):
        return self._read_struct('<B')

    def read_u16_le(self):
        return self._read_struct('<H')

    def read_u32_le(self):
        return self._read_struct('<I')

    def read_i32_le(self):
        return self._read_struct('<i')

    def read_struct(self, format):
        '''Generic version of the read_*() methods using a struct format.'''
        return self._read_struct(format)

    def substream(self, n, offset=None):
        '''Return a new stream scoped to the next n bytes, advancing this one past them.

        It's possible to indicate which offset must be reported in case of
        truncation.'''
        self.ensure(n, offset=offset, what='record')

        sub = Stream(self.obj, start=self._position, end=self._position + n)
        self._position += n

        logger.debug('created %r from %r', sub, self)

        return sub
