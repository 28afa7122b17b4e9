import io
import os
import logging

from .exceptions import TruncatedDataError


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: every access is done seeking to an
    absolute offset and the stream can be resized.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self._type = type(obj)
        self.obj = obj
        self.path = None
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.path or self._type.__name__)

    def __getattr__(self, name):
        if name == 'obj':
            raise AttributeError(name)
        return getattr(self.obj, name)

    def init_str(self):
        '''We think this is a path: the file is copied in memory so that
        updating the container doesn't touch the file until saved.'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.path = self.obj
        with open(self.path, 'rb') as f:
            self.obj = io.BytesIO(f.read())

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def init_file(self):
        '''A file-like object already opened is taken as it is'''
        for method in ('read', 'write', 'seek', 'tell'):
            if not hasattr(self.obj, method):
                raise ValueError('\'%s\' cannot be used as a stream' % self._type.__name__)

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

        return self

    def read_exactly(self, size):
        offset = self.obj.tell()
        data = self.obj.read(size)

        if len(data) != size:
            raise TruncatedDataError(
                'expected %d bytes at offset 0x%x, only %d available' % (size, offset, len(data)))

        return data

    def write(self, data):
        return self.obj.write(data)

    @property
    def length(self):
        self.save()
        length = self.obj.seek(0, io.SEEK_END)
        self.restore()

        return length

    def set_length(self, length):
        '''Truncate or extend with zeros the stream so that it's exactly "length" bytes.'''
        current = self.length

        logger.debug('resizing stream from 0x%x to 0x%x' % (current, length))

        if length < current:
            self.obj.truncate(length)
        elif length > current:
            self.obj.seek(current)
            self.obj.write(b'\x00' * (length - current))

    def getvalue(self):
        self.save()
        self.obj.seek(0)
        value = self.obj.read()
        self.restore()

        return value

    @property
    def closed(self):
        return self.obj.closed

    def close(self):
        self.obj.close()

    def save(self):
        self.history.append(self.obj.tell())

    def restore(self):
        old_seek = self.history.pop()
        self.obj.seek(old_seek)
