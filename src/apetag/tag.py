# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = (
    'ApeTag',
)

import logging
import re
log = logging.getLogger(__name__)

from . import codec
from . import properties as _properties
from .footer import ApeFooter, FILE_IDENTIFIER
from .itemlistmap import ItemListMap
from .key import check_key

_leading_uint_re = re.compile(r'^\s*(\d+)')


def _text_property(key, doc=None):

    def fget(self):
        item = self._items.get(key)
        return item.to_string() if item is not None else ''

    def fset(self, value):
        self.add_value(key, value, replace=True)

    def fdel(self):
        self.remove_item(key)

    return property(fget, fset, fdel, doc=doc)


def _uint_property(key, doc=None):

    def fget(self):
        item = self._items.get(key)
        if item is None:
            return 0
        # Leading digits, as in "2024-05-01" or "5/12"
        m = _leading_uint_re.match(item.to_string())
        return int(m.group(1)) if m else 0

    def fset(self, value):
        value = int(value)
        if value < 0:
            raise ValueError(f'{key} must be unsigned: {value}')
        if value == 0:
            self.remove_item(key)
        else:
            self.add_value(key, str(value), replace=True)

    def fdel(self):
        self.remove_item(key)

    return property(fget, fset, fdel, doc=doc)


class ApeTag(object):
    '''An APE tag: a set of items closed by a footer.

    Construct it empty, or bound to a file and the offset of the tag's footer
    in that file, in which case the tag is read immediately.
    '''

    FILE_IDENTIFIER = FILE_IDENTIFIER

    def __init__(self, file=None, footer_location=0):
        self.file = file
        self.footer_location = footer_location
        self._footer = ApeFooter()
        self._items = ItemListMap()
        if file is not None:
            self.read_from(file, footer_location)

    @classmethod
    def file_identifier(cls):
        return cls.FILE_IDENTIFIER

    @staticmethod
    def check_key(key):
        return check_key(key)

    title = _text_property('TITLE')
    artist = _text_property('ARTIST')
    album = _text_property('ALBUM')
    comment = _text_property('COMMENT')
    genre = _text_property('GENRE')
    year = _uint_property('YEAR')
    track = _uint_property('TRACK')

    @property
    def footer(self):
        return self._footer

    def items(self):
        return self._items

    def set_item(self, key, item):
        return self._items.set_item(key, item)

    def add_value(self, key, value, replace=True):
        self._items.add_value(key, value, replace=replace)

    def set_binary_value(self, key, data):
        self._items.set_binary_value(key, data)

    set_data = set_binary_value

    def remove_item(self, key):
        self._items.remove(key)

    def is_empty(self):
        return self._items.is_empty()

    def properties(self):
        return _properties.to_properties(self._items)

    def set_properties(self, properties):
        return _properties.from_properties(self._items, properties)

    def remove_unsupported_properties(self, keys):
        for key in keys:
            self.remove_item(key)

    def read_from(self, file, footer_location):
        self.file = file
        self.footer_location = footer_location
        if file is None or not file.is_valid():
            return

        file.seek(footer_location)
        self._footer.set_data(file.read_block(ApeFooter.SIZE))

        tag_size = self._footer.tag_size
        if tag_size <= ApeFooter.SIZE or tag_size > file.length():
            log.debug('ApeTag.read_from: No tag at offset %d (tag size %d)', footer_location, tag_size)
            return

        data_location = footer_location + ApeFooter.SIZE - tag_size
        if data_location < 0:
            log.debug('ApeTag.read_from: Tag at offset %d would start before the file (tag size %d)', footer_location, tag_size)
            return

        file.seek(data_location)
        data = file.read_block(tag_size - ApeFooter.SIZE)
        codec.parse_items(data, self._footer.item_count, self._items)

    def render(self):
        return codec.render_tag(self._items, self._footer)

    def pprint(self):
        for key, item in self._items.items():
            print('%s=%s' % (item.key or key, item.pprint()))

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, list(self._items.values()))

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
