#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

import unittest

from apetag.key import is_valid_key, check_key, MAX_KEY_LENGTH

import logging
#logging.basicConfig(level=logging.DEBUG)
log = logging.getLogger(__name__)


class test_key(unittest.TestCase):

    def test_is_valid_key(self):

        for key, valid in (
                (b'TITLE', True),
                (b'Album Artist', True),
                (b'~!', True),
                (b'A', False),
                (b'', False),
                (b'A' * MAX_KEY_LENGTH, True),
                (b'A' * (MAX_KEY_LENGTH + 1), False),
                (b'TI\x1fLE', False),
                (b'TI\x7fLE', False),
                (b'TI\xc3\xa9LE', False),
                (b'ID3', False),
                (b'TAG', False),
                (b'OggS', False),
                (b'oggs', False),
                (b'MP+', False),
                (b'MP+X', True),
                (b'TAGS', True),
                (b'MY CUSTOM KEY', True),
        ):
            with self.subTest(key=key):
                self.assertIs(is_valid_key(key), valid)

    def test_check_key(self):

        for key, valid in (
                ('TITLE', True),
                ('Replaygain_Track_Gain', True),
                ('id3', False),
                ('Tag', False),
                ('T', False),
                ('Titré', False),
                ('AB\udcff', False),
                (b'TITLE', False),
                (None, False),
        ):
            with self.subTest(key=key):
                self.assertIs(check_key(key), valid)

if __name__ == '__main__':
    unittest.main()

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
