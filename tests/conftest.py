import io
import struct
from pathlib import Path

import pytest


FOOTER = b'_eof\x00\x00\x00\x11\x00\x01\x00\x01\x00\x02\xb8\x01\x00'


def _build_shot(image=b'\xaa\xbb\xcc\xdd', name='', description='', author='',
                magic=b'_blf', type=b'halo 3 saved screenshot', sizes=None, footer=FOOTER):
    '''Build a minimal screen.shot with the given contents.'''
    data = bytearray(0x2b8)

    data[0x00:0x00 + len(magic)] = magic
    data[0x0e:0x0e + len(type)] = type

    for offset, raw in (
        (0x48, name.encode('utf-16-be') + b'\x00\x00'),
        (0x67, description.encode('utf-16-be') + b'\x00\x00'),
        (0xe8, author.encode('ascii') + b'\x00'),
    ):
        data[offset:offset + len(raw)] = raw

    sizes = sizes if sizes is not None else (len(image),) * 3
    for offset, size in zip((0x2b4, 0x10c, 0x144), sizes):
        data[offset:offset + 4] = struct.pack('>i', size)

    return bytes(data) + image + footer


@pytest.fixture
def test_root_dir():
    return Path(__file__).parent


@pytest.fixture
def build_shot():
    return _build_shot


@pytest.fixture
def footer():
    return FOOTER


@pytest.fixture
def jpeg():
    '''A real JPEG, the library handles it as opaque bytes anyway.'''
    from PIL import Image

    buffer = io.BytesIO()
    Image.new('RGB', (32, 18), color=(200, 80, 20)).save(buffer, format='JPEG')

    return buffer.getvalue()
