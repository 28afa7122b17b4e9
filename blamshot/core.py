"""
Core module for the abstraction of a file format

"""
import functools
import logging
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .exceptions import BlamShotException, ClosedError
from .properties import ContainerState


logger = logging.getLogger(__name__)


def opened(method):
    '''The decorated method can be called only while the container has its stream open.'''
    @functools.wraps(method)
    def _wrapper(self, *args, **kwargs):
        if self.state != ContainerState.OPEN:
            raise ClosedError('%s() called on a container in state %s' % (method.__name__, self.state.name))

        return method(self, *args, **kwargs)

    return _wrapper


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a Chunk is
    a group of fields, each one at its own absolute offset, so the fields
    don't need to be contiguous nor ordered.

    A Chunk can contain sub-chunks, declared like any other field.
    """

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        '''Offset and size of each field, sub-chunks are flattened as "chunk.field".'''
        result = {}
        for name, field in self.get_fields():
            if isinstance(field, Chunk):
                for sub_name, sub_layout in field.layout.items():
                    result[f'{name}.{sub_name}'] = sub_layout
            else:
                result[name] = (field.get_offset(), field.size)

        return result

    def validate(self):
        return all(field.validate() for _, field in self.get_fields())

    def check(self):
        for field_name, field in self.get_fields():
            try:
                field.check()
            except BlamShotException as e:
                e.chain.append(field_name)
                raise

    def pack(self, stream):
        '''Write every field at its offset; nothing is written if one of the
        fields cannot be packed.'''
        self.check()

        for field_name, field in self.get_fields():
            logger.debug('packing %s.%s' % (self.__class__.__name__, field_name))
            field.pack(stream)

    def unpack(self, stream, names=None):
        '''Read the fields named in "names" (all of them by default) from the stream.

        Every field seeks its own offset so the order of the calls doesn't matter;
        when an exception bubbles up the name of the field is added to its chain.
        '''
        for field_name, field in self.get_fields():
            if names is not None and field_name not in names:
                continue

            logger.debug('unpacking %s.%s' % (self.__class__.__name__, field_name))

            try:
                field.unpack(stream)
            except BlamShotException as e:
                e.chain.append(field_name)
                raise
