#!/usr/bin/env python3
'''
Save the JPEG embedded into a Halo 3: ODST 'screen.shot'.
'''
import logging
import os
import sys

from blamshot.halo3odst import ScreenShot


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <screen.shot path> <jpeg path>')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 3:
        usage(sys.argv[0])

    shot_path, jpeg_path = sys.argv[1:3]

    with ScreenShot(shot_path) as shot:
        image = shot.extract()

    with open(jpeg_path, 'wb') as f:
        f.write(image)

    logger.info(f'written {len(image)} bytes to \'{jpeg_path}\'')
