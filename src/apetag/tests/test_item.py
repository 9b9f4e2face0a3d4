#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

import unittest

import struct

from apetag.item import ApeItem, ItemType, MIN_ITEM_SIZE

import logging
#logging.basicConfig(level=logging.DEBUG)
log = logging.getLogger(__name__)


def make_record(key, value, flags=0):
    return struct.pack('<II', len(value), flags) + key + b'\0' + value


class test_item(unittest.TestCase):

    def test_text(self):
        item = ApeItem('Title', 'Hello')
        self.assertIs(item.type, ItemType.TEXT)
        self.assertEqual(item.values, ['Hello'])
        self.assertEqual(item.to_string(), 'Hello')
        self.assertFalse(item.is_empty())
        item.append_values(['World', 'Again'])
        self.assertEqual(item.values, ['Hello', 'World', 'Again'])
        self.assertEqual(item.pprint(), 'Hello / World / Again')
        self.assertEqual(item.to_string(), 'Hello')

    def test_binary(self):
        item = ApeItem('Cover Art (Front)', b'\x89PNG\0data', binary=True)
        self.assertIs(item.type, ItemType.BINARY)
        self.assertEqual(item.values, [])
        self.assertEqual(item.binary_data, b'\x89PNG\0data')
        self.assertEqual(item.to_string(), '')
        self.assertEqual(item.pprint(), '[9 bytes]')
        self.assertFalse(item.is_empty())
        self.assertTrue(ApeItem('Cover', b'', binary=True).is_empty())

    def test_locator(self):
        item = ApeItem('Related', b'http://example.com/', type=ItemType.LOCATOR)
        self.assertIs(item.type, ItemType.LOCATOR)
        self.assertEqual(item.pprint(), '[Locator] http://example.com/')

    def test_wrong_value_type(self):
        with self.assertRaises(TypeError):
            ApeItem('Title', b'bytes')
        with self.assertRaises(TypeError):
            ApeItem('Cover', 'text', binary=True)
        with self.assertRaises(TypeError):
            ApeItem('Title', ['ok', 1])
        item = ApeItem('Title', 'a')
        with self.assertRaises(TypeError):
            item.append_value(b'b')

    def test_is_empty(self):
        self.assertTrue(ApeItem().is_empty())
        self.assertTrue(ApeItem('Title', '').is_empty())
        self.assertTrue(ApeItem('Title', []).is_empty())
        self.assertFalse(ApeItem('Title', ['', 'x']).is_empty())

    def test_render(self):
        item = ApeItem('Title', ['Foo', 'Bar'])
        self.assertEqual(item.render(), make_record(b'Title', b'Foo\0Bar'))
        self.assertEqual(item.size(), len(item.render()))

        item = ApeItem('Title', 'x', read_only=True)
        self.assertEqual(item.render(), make_record(b'Title', b'x', flags=1))

        item = ApeItem('Cover', b'\1\2\3', binary=True)
        self.assertEqual(item.render(), make_record(b'Cover', b'\1\2\3', flags=2))
        self.assertEqual(item.size(), 8 + 5 + 1 + 3)

        item = ApeItem('Link', b'file:///x', type=ItemType.LOCATOR)
        self.assertEqual(item.render(), make_record(b'Link', b'file:///x', flags=4))

    def test_render_unicode(self):
        item = ApeItem('Artist', 'Björk')
        self.assertEqual(item.render(), make_record(b'Artist', 'Björk'.encode('utf-8')))
        self.assertEqual(item.size(), 8 + 6 + 1 + 6)

    def test_parse(self):
        item = ApeItem.parse(make_record(b'Artist', b'A\0B\0C'))
        self.assertEqual(item.key, 'Artist')
        self.assertIs(item.type, ItemType.TEXT)
        self.assertEqual(item.values, ['A', 'B', 'C'])
        self.assertFalse(item.read_only)

        item = ApeItem.parse(make_record(b'Cover', b'\0\1\2', flags=2 | 1))
        self.assertIs(item.type, ItemType.BINARY)
        self.assertEqual(item.binary_data, b'\0\1\2')
        self.assertTrue(item.read_only)

        item = ApeItem.parse(make_record(b'Link', b'http://x', flags=4))
        self.assertIs(item.type, ItemType.LOCATOR)
        self.assertEqual(item.binary_data, b'http://x')

    def test_parse_reserved_type(self):
        item = ApeItem.parse(make_record(b'Odd', b'xyz', flags=6))
        self.assertIs(item.type, ItemType.BINARY)
        self.assertEqual(item.binary_data, b'xyz')

    def test_parse_empty_value(self):
        item = ApeItem.parse(make_record(b'Title', b'') + b'\0')
        self.assertEqual(item.key, 'Title')
        self.assertEqual(item.values, [''])
        self.assertTrue(item.is_empty())

    def test_parse_bad_utf8(self):
        item = ApeItem.parse(make_record(b'Title', b'ab\xffcd'))
        self.assertEqual(item.values, ['ab\ufffdcd'])

    def test_parse_short(self):
        data = make_record(b'T', b'x')
        self.assertEqual(len(data), MIN_ITEM_SIZE)
        self.assertEqual(ApeItem.parse(data).key, 'T')
        item = ApeItem.parse(data[:-1])
        self.assertEqual(item.key, '')
        self.assertTrue(item.is_empty())

    def test_round_trip(self):
        for item in (
                ApeItem('Title', ['Foo', '', 'Bar']),
                ApeItem('Comment', 'multi\nline'),
                ApeItem('Cover Art (Back)', bytes(range(256)), binary=True),
                ApeItem('Link', b'http://x', type=ItemType.LOCATOR, read_only=True),
        ):
            with self.subTest(item=item):
                self.assertEqual(ApeItem.parse(item.render()), item)

if __name__ == '__main__':
    unittest.main()

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
