# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = (
    'ParseStep',
    'parse_items',
    'render_tag',
)

import enum
import logging
import struct
log = logging.getLogger(__name__)

from .footer import ApeFooter
from .item import ApeItem, MIN_ITEM_SIZE
from .key import MIN_KEY_LENGTH, MAX_KEY_LENGTH, is_valid_key

_value_length_st = struct.Struct('<I')

# value length + flags
_ITEM_HEADER_SIZE = 8


class ParseStep(enum.Enum):
    CONTINUE = 'continue'
    SKIP_ITEM = 'skip_item'
    ABORT_PARSE = 'abort_parse'


def _parse_step(data, pos):
    '''Examine the item record at pos.

    Returns (step, key_length, value_length). On ABORT_PARSE the offsets in
    data can no longer be trusted and the lengths are meaningless.
    '''
    nul_pos = data.find(b'\0', pos + _ITEM_HEADER_SIZE)
    if nul_pos < 0:
        log.debug('parse_items: Could not find a key/value separator at offset %d. Stopped parsing.', pos)
        return ParseStep.ABORT_PARSE, 0, 0

    key_length = nul_pos - pos - _ITEM_HEADER_SIZE
    value_length, = _value_length_st.unpack_from(data, pos)

    if value_length >= len(data) or pos > len(data) - value_length:
        log.debug('parse_items: Invalid value length %d at offset %d. Stopped parsing.', value_length, pos)
        return ParseStep.ABORT_PARSE, key_length, value_length

    key = data[pos + _ITEM_HEADER_SIZE:nul_pos]
    if not MIN_KEY_LENGTH <= key_length <= MAX_KEY_LENGTH \
            or not is_valid_key(key):
        log.debug('parse_items: Skipped an item due to an invalid key: %r', key)
        return ParseStep.SKIP_ITEM, key_length, value_length

    return ParseStep.CONTINUE, key_length, value_length


def parse_items(data, item_count, items):
    '''Decode up to item_count item records from data into items.

    data is the tag body: everything between the optional header and the
    footer. Parsing stops at the first record whose separator or value
    length is corrupt; records with an invalid key are skipped. Returns the
    number of items stored.
    '''
    data = bytes(data)
    if len(data) < MIN_ITEM_SIZE:
        return 0

    nparsed = 0
    pos = 0
    i = 0
    while i < item_count and pos <= len(data) - MIN_ITEM_SIZE:
        i += 1
        step, key_length, value_length = _parse_step(data, pos)
        if step is ParseStep.ABORT_PARSE:
            break
        item_size = _ITEM_HEADER_SIZE + key_length + 1 + value_length
        if step is ParseStep.CONTINUE:
            item = ApeItem.parse(data[pos:pos + item_size])
            if items.set_item(item.key, item):
                nparsed += 1
        pos += item_size
    return nparsed


def render_tag(items, footer):
    '''Render header + item records + footer.

    Updates footer's item count, tag size and header flag; items is left
    untouched.
    '''
    data = []
    item_count = 0
    for item in items.values():
        data.append(item.render())
        item_count += 1
    data = b''.join(data)

    footer.item_count = item_count
    footer.tag_size = len(data) + ApeFooter.SIZE
    footer.header_present = True

    return footer.render_header() + data + footer.render_footer()

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
