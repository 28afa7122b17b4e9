#!/usr/bin/env python3
'''
Replace the JPEG and/or the metadata of a Halo 3: ODST 'screen.shot'.

 $ shotinject.py screen.shot --image sunset.jpg --name Sunset --author Bob
'''
import argparse
import logging
import os
import sys

from blamshot.enum import Compliant
from blamshot.exceptions import BlamShotException
from blamshot.halo3odst import ScreenShot


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def parse_args(args):
    parser = argparse.ArgumentParser(description='Modify a Halo 3: ODST screen.shot')
    parser.add_argument('shot', help="path of the 'screen.shot'")
    parser.add_argument('--image', help='JPEG to embed')
    parser.add_argument('--name')
    parser.add_argument('--description')
    parser.add_argument('--author')
    parser.add_argument('--output', help='where to save, by default the original file is overwritten')
    parser.add_argument('--force', action='store_true', help='allow texts longer than their slot')

    return parser.parse_args(args)


if __name__ == '__main__':
    args = parse_args(sys.argv[1:])

    compliant = Compliant.NONE if args.force else Compliant.SLOT

    try:
        with ScreenShot(args.shot, compliant=compliant) as shot:
            for field_name in ('name', 'description', 'author'):
                value = getattr(args, field_name)
                if value is not None:
                    setattr(shot.header, field_name, value)

            if args.image:
                with open(args.image, 'rb') as f:
                    shot.inject(f.read())

            shot.update()
            shot.save(args.output)
    except BlamShotException as e:
        logger.error(f'{e} (fields: {".".join(reversed(e.chain)) or "-"})')
        sys.exit(1)
