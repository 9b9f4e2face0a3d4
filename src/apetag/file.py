# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = [
        'toPath',
        'File',
        'BinaryFile',
        'ApeFile',
        ]

from contextlib import contextmanager
from pathlib import Path
import io
import os

import logging
log = logging.getLogger(__name__)

from .footer import ApeFooter, FILE_IDENTIFIER
from .tag import ApeTag

ID3V1_SIZE = 128
ID3V1_IDENTIFIER = b'TAG'


def toPath(value):
    if isinstance(value, Path):
        return value
    return Path(value)


class File(object):

    open_mode = ''

    def __init__(self, file_name=None, open_mode=None, fp=None):
        self.file_name = None if file_name is None else toPath(file_name)
        if open_mode is not None:
            self.open_mode = open_mode or ''
        self.fp = fp
        super().__init__()

    def __fspath__(self):
        if self.file_name is None:
            raise ValueError('%r: file_name not defined' % (self,))
        return os.fspath(self.file_name)

    def __str__(self):
        if self.file_name is None:
            return '(unnamed)'
        else:
            return os.fspath(self)

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, str(self))

    def assert_file_name_defined(self):
        if not self.file_name:
            raise ValueError('%r: file_name not defined' % (self,))

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    @property
    def closed(self):
        return not self.fp or self.fp.closed

    def open(self, mode='r', **kwargs):
        assert self.fp is None, f'File is already opened: {self}'
        self.assert_file_name_defined()
        if 't' not in mode and 'b' not in mode:
            mode += self.open_mode
        self.fp = self.file_name.open(mode=mode, **kwargs)
        return self.fp

    def close(self):
        fp = self.fp
        if fp is not None:
            self.fp = None
            fp.close()
        # No exception if no fp, like file objects

    @contextmanager
    def opened(self, mode='r'):
        '''Use the current fp, or open (and later close) the file.'''
        if self.fp is not None:
            yield self.fp
        else:
            self.open(mode=mode)
            try:
                yield self.fp
            finally:
                self.close()

    def read(self, size=-1):
        if self.closed:
            raise ValueError('I/O operation on closed file')
        return self.fp.read(size)

    def write(self, *args, **kwargs):
        if self.closed:
            raise ValueError('I/O operation on closed file')
        return self.fp.write(*args, **kwargs)

    def flush(self):
        if self.fp:
            self.fp.flush()

    def seek(self, offset, whence=io.SEEK_SET):
        if self.closed:
            raise ValueError('I/O operation on closed file')
        return self.fp.seek(offset, whence)

    def tell(self):
        if self.closed:
            raise ValueError('I/O operation on closed file')
        return self.fp.tell()

    def truncate(self, size=None):
        if self.closed:
            raise ValueError('I/O operation on closed file')
        return self.fp.truncate(size)


class BinaryFile(File):

    open_mode = 'b'

    def is_valid(self):
        return not self.closed

    def read_block(self, length):
        return self.read(length)

    def length(self):
        pos = self.tell()
        try:
            return self.seek(0, io.SEEK_END)
        finally:
            self.seek(pos)


class ApeFile(BinaryFile):
    '''An audio file carrying an APE tag at its end.

    The tag is expected at the very end of the file or, as written by most
    Musepack/WavPack/Monkey's Audio taggers, right before an ID3v1 tag.
    '''

    def find_footer_location(self):
        length = self.length()
        if length >= ApeFooter.SIZE:
            self.seek(length - ApeFooter.SIZE)
            if self.read(len(FILE_IDENTIFIER)) == FILE_IDENTIFIER:
                return length - ApeFooter.SIZE
        if length >= ID3V1_SIZE + ApeFooter.SIZE and self._has_id3v1(length):
            footer_location = length - ID3V1_SIZE - ApeFooter.SIZE
            self.seek(footer_location)
            if self.read(len(FILE_IDENTIFIER)) == FILE_IDENTIFIER:
                return footer_location
        return None

    def _has_id3v1(self, length):
        if length < ID3V1_SIZE:
            return False
        self.seek(length - ID3V1_SIZE)
        return self.read(len(ID3V1_IDENTIFIER)) == ID3V1_IDENTIFIER

    def tag_range(self):
        '''Return the (start, end) offsets of the APE tag, header included.

        If there is no usable tag, start and end are both the offset at which
        a new tag would be inserted.
        '''
        length = self.length()
        footer_location = self.find_footer_location()
        if footer_location is not None:
            self.seek(footer_location)
            footer = ApeFooter(self.read_block(ApeFooter.SIZE))
            end = footer_location + ApeFooter.SIZE
            start = end - footer.complete_tag_size
            if footer.tag_size >= ApeFooter.SIZE and start >= 0:
                return start, end
            log.debug('%s: Ignoring APE tag with invalid size %d', self, footer.tag_size)
            return end, end
        if self._has_id3v1(length):
            return length - ID3V1_SIZE, length - ID3V1_SIZE
        return length, length

    def read_tag(self):
        with self.opened('rb'):
            footer_location = self.find_footer_location()
            if footer_location is None:
                log.debug('%s: No APE tag found', self)
                return ApeTag()
            return ApeTag(self, footer_location)

    def save(self, tag):
        '''Write tag to the file, replacing any existing APE tag.

        An empty tag removes the APE tag from the file.
        '''
        with self.opened('r+b'):
            start, end = self.tag_range()
            self.seek(end)
            trailer = self.read()
            self.seek(start)
            if tag.is_empty():
                log.debug('%s: Removing APE tag', self)
            else:
                data = tag.render()
                log.debug('%s: Writing APE tag (%d items, %d bytes)', self, tag.footer.item_count, len(data))
                self.write(data)
            self.write(trailer)
            self.truncate()
            self.flush()

    def strip(self):
        self.save(ApeTag())

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
