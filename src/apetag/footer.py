# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = (
    'ApeFooter',
    'FILE_IDENTIFIER',
)

# https://wiki.hydrogenaudio.org/index.php?title=APE_Tags_Header

import logging
import struct
log = logging.getLogger(__name__)

FILE_IDENTIFIER = b'APETAGEX'

ape_footer_st = struct.Struct('<8sIIII8s')
"""
APE Tags Header/Footer
Name            Size in bytes   Description
Preamble        8               "APETAGEX"
Version         4               1000 (APEv1) or 2000 (APEv2)
Tag Size        4               Item records + footer, excluding the header
Item Count      4               Number of items
Tags Flags      4               Bit 31: Tag contains a header
                                Bit 30: Tag contains no footer
                                Bit 29: This is the header, not the footer
Reserved        8               Must be zero
"""

APE_VERSION_2 = 2000

FLAG_HAS_HEADER = 1 << 31
FLAG_HAS_NO_FOOTER = 1 << 30
FLAG_IS_HEADER = 1 << 29


class ApeFooter(object):
    '''The fixed size record that closes (and optionally opens) an APE tag.'''

    SIZE = ape_footer_st.size

    def __init__(self, data=None):
        self.reset()
        if data is not None:
            self.set_data(data)

    def reset(self):
        self.version = 0
        self.tag_size = 0
        self.item_count = 0
        self.header_present = False
        self.footer_present = True
        self.is_header = False

    @classmethod
    def size(cls):
        return cls.SIZE

    def set_data(self, data):
        data = bytes(data)
        if len(data) < self.SIZE:
            log.debug('ApeFooter.set_data: Short footer (%d bytes)', len(data))
            self.reset()
            return False
        magic, version, tag_size, item_count, flags, _ = \
            ape_footer_st.unpack_from(data, 0)
        if magic != FILE_IDENTIFIER:
            log.debug('ApeFooter.set_data: Invalid magic %r', magic)
            self.reset()
            return False
        self.version = version
        self.tag_size = tag_size
        self.item_count = item_count
        self.header_present = bool(flags & FLAG_HAS_HEADER)
        self.footer_present = not (flags & FLAG_HAS_NO_FOOTER)
        self.is_header = bool(flags & FLAG_IS_HEADER)
        return True

    @property
    def complete_tag_size(self):
        '''Tag size including the header, if any.'''
        if self.header_present:
            return self.tag_size + self.SIZE
        return self.tag_size

    def _render(self, is_header):
        flags = 0
        if self.header_present:
            flags |= FLAG_HAS_HEADER
        if is_header:
            flags |= FLAG_IS_HEADER
        return ape_footer_st.pack(
            FILE_IDENTIFIER,
            APE_VERSION_2,
            self.tag_size,
            self.item_count,
            flags,
            b'\0' * 8)

    def render_footer(self):
        return self._render(is_header=False)

    def render_header(self):
        if not self.header_present:
            return b''
        return self._render(is_header=True)

    def __repr__(self):
        return '%s(version=%r, tag_size=%r, item_count=%r, header_present=%r)' % (
            self.__class__.__name__,
            self.version, self.tag_size, self.item_count, self.header_present)

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
