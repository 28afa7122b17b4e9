#!/usr/bin/env python3
'''
Print the metadata and the layout of a Halo 3: ODST 'screen.shot'.
'''
import logging
import os
import sys

from blamshot.halo3odst import ScreenShot


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <screen.shot path>')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    with ScreenShot(sys.argv[1]) as shot:
        print(f'name:        {shot.header.name.value}')
        print(f'description: {shot.header.description.value}')
        print(f'author:      {shot.header.author.value}')
        print(f'screenshot:  {shot.screenshot.size.value} bytes')
        print()

        for name, (offset, size) in shot.layout.items():
            print(f'0x{offset:08x} {size:8d} {name}')
