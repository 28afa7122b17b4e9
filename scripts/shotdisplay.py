#!/usr/bin/env python3
'''
Show the screenshot embedded into a Halo 3: ODST 'screen.shot'.
'''
import io
import logging
import os
import sys

from PIL import Image

from blamshot.halo3odst import ScreenShot


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logger.setLevel(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)


def usage(progname):
    print(f'usage: {progname} <screen.shot path>')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    with ScreenShot(sys.argv[1]) as shot:
        header = shot.header
        data = shot.extract()

    image = Image.open(io.BytesIO(data))

    logger.info(f"'{header.name.value}' by {header.author.value}: {image.format} {image.size[0]}x{image.size[1]}")

    image.show(title=header.name.value)
