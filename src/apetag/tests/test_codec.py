#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

import unittest

import struct

from apetag.codec import parse_items, render_tag
from apetag.footer import ApeFooter
from apetag.item import ApeItem
from apetag.itemlistmap import ItemListMap

import logging
#logging.basicConfig(level=logging.DEBUG)
log = logging.getLogger(__name__)


def make_record(key, value, flags=0, value_length=None):
    if value_length is None:
        value_length = len(value)
    return struct.pack('<II', value_length, flags) + key + b'\0' + value


class test_codec(unittest.TestCase):

    def test_parse(self):
        data = make_record(b'Title', b'Foo') \
            + make_record(b'Artist', b'A\0B') \
            + make_record(b'Cover', b'\xff\xd8', flags=2)
        items = ItemListMap()
        self.assertEqual(parse_items(data, 3, items), 3)
        self.assertEqual(list(items), ['TITLE', 'ARTIST', 'COVER'])
        self.assertEqual(items['Artist'].values, ['A', 'B'])
        self.assertEqual(items['Cover'].binary_data, b'\xff\xd8')

    def test_item_count_limit(self):
        data = make_record(b'Title', b'Foo') \
            + make_record(b'Artist', b'Bar') \
            + make_record(b'Album', b'Baz')
        items = ItemListMap()
        self.assertEqual(parse_items(data, 2, items), 2)
        self.assertEqual(list(items), ['TITLE', 'ARTIST'])

        items = ItemListMap()
        self.assertEqual(parse_items(data, 10, items), 3)

        items = ItemListMap()
        self.assertEqual(parse_items(data, 0, items), 0)
        self.assertTrue(items.is_empty())

    def test_short_buffer(self):
        items = ItemListMap()
        self.assertEqual(parse_items(b'', 1, items), 0)
        self.assertEqual(parse_items(make_record(b'T', b'x')[:-1], 1, items), 0)
        self.assertTrue(items.is_empty())

    def test_duplicate_keys(self):
        data = make_record(b'Title', b'First') \
            + make_record(b'TITLE', b'Second')
        items = ItemListMap()
        parse_items(data, 2, items)
        self.assertEqual(len(items), 1)
        self.assertEqual(items['title'].values, ['Second'])
        self.assertEqual(items['title'].key, 'TITLE')

    def test_skip_invalid_key(self):
        for bad_key in (b'T', b'ID3', b'Ti\x01le', b'Tag'):
            with self.subTest(key=bad_key):
                data = make_record(b'Title', b'Foo') \
                    + make_record(bad_key, b'Skipped') \
                    + make_record(b'Artist', b'Bar')
                items = ItemListMap()
                self.assertEqual(parse_items(data, 3, items), 2)
                self.assertEqual(list(items), ['TITLE', 'ARTIST'])
                self.assertEqual(items['Artist'].values, ['Bar'])

    def test_abort_missing_separator(self):
        data = make_record(b'Title', b'Foo') \
            + struct.pack('<II', 3, 0) + b'NoSeparatorHere'
        items = ItemListMap()
        self.assertEqual(parse_items(data, 2, items), 1)
        self.assertEqual(list(items), ['TITLE'])

    def test_abort_value_length(self):
        for value_length in (0xFFFFFFFF, 1000):
            with self.subTest(value_length=value_length):
                data = make_record(b'Title', b'Foo') \
                    + make_record(b'Broken', b'xyz', value_length=value_length) \
                    + make_record(b'Artist', b'Bar')
                items = ItemListMap()
                self.assertEqual(parse_items(data, 3, items), 1)
                self.assertEqual(list(items), ['TITLE'])

    def test_render(self):
        items = ItemListMap()
        items.add_value('Title', 'Foo')
        items.add_value('Artist', 'Bar')
        footer = ApeFooter()
        data = render_tag(items, footer)

        body = make_record(b'Title', b'Foo') + make_record(b'Artist', b'Bar')
        self.assertEqual(footer.item_count, 2)
        self.assertEqual(footer.tag_size, len(body) + 32)
        self.assertTrue(footer.header_present)
        self.assertEqual(len(data), len(body) + 64)
        self.assertEqual(data[32:-32], body)

        header = ApeFooter(data[:32])
        self.assertTrue(header.is_header)
        self.assertEqual(header.tag_size, footer.tag_size)
        self.assertEqual(header.item_count, 2)

        trailer = ApeFooter(data[-32:])
        self.assertFalse(trailer.is_header)
        self.assertTrue(trailer.header_present)
        self.assertEqual(trailer.tag_size, footer.tag_size)

    def test_render_parse(self):
        items = ItemListMap()
        items.add_value('Title', 'Foo')
        items.add_value('Genre', 'Rock')
        items.add_value('Genre', 'Pop', replace=False)
        items.set_binary_value('Cover Art (Front)', bytes(range(256)))
        data = render_tag(items, ApeFooter())

        other = ItemListMap()
        self.assertEqual(parse_items(data[32:-32], 3, other), 3)
        self.assertEqual(other, items)

    def test_render_empty(self):
        footer = ApeFooter()
        data = render_tag(ItemListMap(), footer)
        self.assertEqual(len(data), 64)
        self.assertEqual(footer.item_count, 0)
        self.assertEqual(footer.tag_size, 32)

if __name__ == '__main__':
    unittest.main()

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
