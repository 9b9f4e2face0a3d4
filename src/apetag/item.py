# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = (
    'ItemType',
    'ApeItem',
    'MIN_ITEM_SIZE',
)

# https://wiki.hydrogenaudio.org/index.php?title=APE_Tag_Item

import enum
import logging
import struct
log = logging.getLogger(__name__)

ape_item_header_st = struct.Struct('<II')
"""
APE Tag Item Header
Name            Size in bytes   Description
Value Size      4               Length of the value in bytes
Item Flags      4               Bit 0:    Read-only
                                Bit 1..2: 0: UTF-8 text
                                          1: Binary
                                          2: Locator (URL, file name, ...)
                                          3: Reserved
Key             2..255          Printable ASCII, NUL terminated
Value           Value Size      Raw value bytes
"""

# header + 1 byte key + NUL + 1 byte value
MIN_ITEM_SIZE = ape_item_header_st.size + 3

ITEM_FLAG_READ_ONLY = 1 << 0
ITEM_TYPE_SHIFT = 1
ITEM_TYPE_MASK = 0x3


class ItemType(enum.IntEnum):
    TEXT = 0
    BINARY = 1
    LOCATOR = 2


class ApeItem(object):
    '''One key/value record of an APE tag.

    TEXT items hold a list of strings (stored NUL separated on disk). BINARY
    and LOCATOR items hold a single bytes payload.
    '''

    def __init__(self, key='', value=None, binary=False, *, type=None, read_only=False):
        self.key = key
        self.read_only = bool(read_only)
        self.values = []
        self.binary_data = b''
        if type is None:
            type = ItemType.BINARY if binary else ItemType.TEXT
        self.type = ItemType(type)
        if value is None:
            pass
        elif self.type is ItemType.TEXT:
            if isinstance(value, str):
                self.values = [value]
            elif isinstance(value, (list, tuple)):
                self.values = [self._check_text(v) for v in value]
            else:
                raise TypeError(f'Text item values must be str or a list of str, not {value.__class__.__name__}')
        else:
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise TypeError(f'Binary item value must be bytes, not {value.__class__.__name__}')
            self.binary_data = bytes(value)

    @staticmethod
    def _check_text(value):
        if not isinstance(value, str):
            raise TypeError(f'Text item values must be str, not {value.__class__.__name__}')
        return value

    @classmethod
    def parse(cls, data):
        '''Decode the item record at the start of data.

        The key is assumed to have been validated by the caller.
        '''
        data = bytes(data)
        if len(data) < MIN_ITEM_SIZE:
            log.debug('ApeItem.parse: Not enough data for an item (%d bytes)', len(data))
            return cls()
        value_length, flags = ape_item_header_st.unpack_from(data, 0)
        key_end = data.find(b'\0', ape_item_header_st.size)
        if key_end < 0:
            key_end = len(data)
        key = data[ape_item_header_st.size:key_end].decode('latin-1')
        value = data[key_end + 1:key_end + 1 + value_length]

        item_type = (flags >> ITEM_TYPE_SHIFT) & ITEM_TYPE_MASK
        try:
            item_type = ItemType(item_type)
        except ValueError:
            log.debug('ApeItem.parse: Reserved item type %d for %r, reading as binary', item_type, key)
            item_type = ItemType.BINARY

        item = cls(key, type=item_type, read_only=flags & ITEM_FLAG_READ_ONLY)
        if item_type is ItemType.TEXT:
            item.values = [v.decode('utf-8', 'replace') for v in value.split(b'\0')]
        else:
            item.binary_data = value
        return item

    def _value_bytes(self):
        if self.type is ItemType.TEXT:
            return b'\0'.join(v.encode('utf-8') for v in self.values)
        return self.binary_data

    def render(self):
        value = self._value_bytes()
        flags = (ITEM_FLAG_READ_ONLY if self.read_only else 0) \
            | (int(self.type) << ITEM_TYPE_SHIFT)
        return ape_item_header_st.pack(len(value), flags) \
            + self.key.encode('latin-1') + b'\0' \
            + value

    def size(self):
        return ape_item_header_st.size + len(self.key) + 1 + len(self._value_bytes())

    def append_value(self, value):
        self.values.append(self._check_text(value))

    def append_values(self, values):
        for value in values:
            self.append_value(value)

    def is_empty(self):
        if self.type is ItemType.TEXT:
            return not self.values \
                or (len(self.values) == 1 and not self.values[0])
        return not self.binary_data

    def to_string(self):
        if self.type is ItemType.TEXT and self.values:
            return self.values[0]
        return ''

    def pprint(self):
        if self.type is ItemType.TEXT:
            return ' / '.join(self.values)
        if self.type is ItemType.LOCATOR:
            return '[Locator] %s' % (self.binary_data.decode('utf-8', 'replace'),)
        return '[%d bytes]' % (len(self.binary_data),)

    def __eq__(self, other):
        if not isinstance(other, ApeItem):
            return NotImplemented
        return (self.key, self.type, self.read_only, self.values, self.binary_data) \
            == (other.key, other.type, other.read_only, other.values, other.binary_data)

    def __repr__(self):
        if self.type is ItemType.TEXT:
            value = self.values
        else:
            value = self.binary_data
        return '%s(%r, %r, type=%s)' % (self.__class__.__name__, self.key, value, self.type.name)

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
