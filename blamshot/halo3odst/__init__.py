'''
# Halo 3: ODST screenshot

The 'screen.shot' file extracted from a saved screenshot container is a "_blf"
file: a big-endian format with a header of fixed offsets followed by a
JPEG image of variable length and a fixed footer.

  .---------------------------------.
  | 0x000 "_blf"                    |
  | 0x00e "halo 3 saved screenshot" |
  | 0x048 name (UTF-16)             |
  | 0x067 description (UTF-16)      |
  | 0x0e8 author (ASCII)            |
  | 0x10c size of the JPEG (copy)   |
  | 0x144 size of the JPEG (copy)   |
  | 0x2b4 size of the JPEG          |
  | 0x2b8 JPEG data                 |
  | ...   "_eof" footer (17 bytes)  |
  '---------------------------------'

The three sizes must always agree and the footer must always follow the JPEG,
so replacing the image means rewriting all of them and resizing the file.
'''
import logging
import os

from .. import fields
from ..core import Chunk, opened
from ..enum import Compliant
from ..exceptions import FormatError, TruncatedDataError
from ..properties import ContainerState, Dependency, Offset
from ..streams import Stream


logger = logging.getLogger(__name__)


BLF_MAGIC = b'_blf'
BLF_TYPE = b'halo 3 saved screenshot'
FOOTER = b'_eof\x00\x00\x00\x11\x00\x01\x00\x01\x00\x02\xb8\x01\x00'

INT32_MAX = 0x7fffffff


class Signature(Chunk):
    magic = fields.StringField(default=BLF_MAGIC, offset=0x00, is_magic=True)
    type  = fields.StringField(default=BLF_TYPE, offset=0x0e, is_magic=True)


class Header(Chunk):
    '''The human readable metadata: every text lives in a slot that ends
    where the next field starts.'''
    name        = fields.UTF16StringField(0x1f, offset=0x48, endianess=fields.Endianess.BIG_ENDIAN)
    description = fields.UTF16StringField(0x81, offset=0x67, endianess=fields.Endianess.BIG_ENDIAN)
    author      = fields.AsciiStringField(0x24, offset=0xe8)


class Screenshot(Chunk):
    '''The embedded JPEG with its size, the size at 0x2b4 is the one used
    for reading and the other two are copies.'''
    size   = fields.MirroredStructField('i', offset=0x2b4, mirrors=(0x10c, 0x144), endianess=fields.Endianess.BIG_ENDIAN)
    data   = fields.BlobField(Dependency('.size'), offset=0x2b8, maximum=INT32_MAX)
    footer = fields.StringField(default=FOOTER, offset=Offset('.data'), is_magic=True)

    def unpack(self, stream, names=None):
        super().unpack(stream, names=('size', 'data'))

        # the footer is always rewritten from scratch so a wrong one is not fatal
        try:
            self.footer.unpack(stream)
        except TruncatedDataError:
            logger.warning('no footer after the screenshot at offset 0x%x' % self.footer.offset)
        else:
            if not self.footer.validate():
                logger.warning('unexpected footer %r at offset 0x%x' % (self.footer.value, self.footer.offset))

        self.footer.init()

    def pack(self, stream):
        '''The order is important: first the sizes, then the stream is resized to
        fit exactly data and footer, then data and footer are written.'''
        self.check()

        self.size.pack(stream)
        stream.set_length(self.footer.offset + self.footer.size)
        self.data.pack(stream)
        self.footer.pack(stream)


class ScreenShot(Chunk):
    '''A Halo 3: ODST 'screen.shot' extracted from a container file.

    It can be built from a path, from raw bytes or from a binary file-like object;
    in every case the container owns the stream until close() is called:

        with ScreenShot('screen.shot') as shot:
            shot.header.name = 'Sunset'
            shot.inject(jpeg)
            shot.update()
            shot.save('screen.shot')

    After close() every operation touching the stream raises ClosedError, the
    values already loaded in header and screenshot stay readable.
    '''
    signature  = Signature()
    header     = Header()
    screenshot = Screenshot(readonly=True)

    def __init__(self, source, compliant=Compliant.SLOT):
        self.state = ContainerState.UNINITIALIZED
        self._stream = None

        super().__init__(compliant=compliant)

        self._stream = Stream(source)
        self.state = ContainerState.OPEN

        if not self.is_valid():
            self.close()
            raise FormatError('%s is not a Halo 3: ODST screenshot' % self._source_name(source))

        try:
            self.load_header()
            self.load_screenshot()
        except Exception:
            self.close()
            raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @staticmethod
    def _source_name(source):
        if isinstance(source, (str, os.PathLike)):
            return repr(os.fspath(source))

        return 'the %s given' % source.__class__.__name__

    @property
    @opened
    def stream(self):
        '''The underlying binary file object'''
        return self._stream.obj

    @property
    @opened
    def raw(self):
        return self._stream.getvalue()

    @property
    @opened
    def layout(self):
        return super().layout

    @opened
    def is_valid(self):
        try:
            self.signature.unpack(self._stream)
        except TruncatedDataError:
            logger.debug('stream too short to contain the signature')
            return False

        return self.signature.validate()

    @opened
    def load_header(self):
        self.header.unpack(self._stream)

    @opened
    def load_screenshot(self):
        self.screenshot.unpack(self._stream)

    @opened
    def update(self):
        self.update_header()
        self.update_screenshot()

    @opened
    def update_header(self):
        self.header.pack(self._stream)

    @opened
    def update_screenshot(self):
        self.screenshot.pack(self._stream)

    @opened
    def inject(self, image):
        '''Replace the JPEG in memory, you need to call update() to write it.

        The image can be bytes-like or a binary file-like object.'''
        if hasattr(image, 'getvalue'):
            image = image.getvalue()
        elif hasattr(image, 'read'):
            image = image.read()

        self.screenshot.data = image

        logger.debug('injected %d bytes' % self.screenshot.size.value)

    @opened
    def extract(self) -> bytes:
        return bytes(self.screenshot.data.value)

    @opened
    def save(self, path=None):
        '''Write the whole stream to a file, by default the one it was read from.'''
        path = path if path is not None else self._stream.path
        if path is None:
            raise ValueError('no path to save to')

        logger.debug('saving to \'%s\'' % path)

        with open(path, 'wb') as f:
            f.write(self.raw)

    def close(self):
        if self.state == ContainerState.CLOSED:
            return

        if self._stream is not None:
            self._stream.close()

        self.state = ContainerState.CLOSED
