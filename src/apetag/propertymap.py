# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = (
    'PropertyMap',
)

import collections.abc


class PropertyMap(collections.abc.MutableMapping):
    '''Format-agnostic tag properties.

    Maps upper-cased property names to lists of string values.
    unsupported_data lists the keys of items that could not be represented
    as properties (binary data, unusable keys).
    '''

    def __init__(self, dict=None, **kwargs):
        self._properties = {}
        self.unsupported_data = []
        if dict is not None:
            self.update(dict)
        if len(kwargs):
            self.update(kwargs)

    @staticmethod
    def _sanitize_key(key):
        if not isinstance(key, str):
            raise KeyError(key)
        return key.upper()

    @staticmethod
    def _sanitize_values(values):
        if isinstance(values, str):
            return [values]
        return [str(v) for v in values]

    def __getitem__(self, key):
        return self._properties[self._sanitize_key(key)]

    def __setitem__(self, key, values):
        self._properties[self._sanitize_key(key)] = self._sanitize_values(values)

    def __delitem__(self, key):
        del self._properties[self._sanitize_key(key)]

    def __iter__(self):
        return iter(self._properties)

    def __len__(self):
        return len(self._properties)

    def __contains__(self, key):
        return isinstance(key, str) and key.upper() in self._properties

    def contains(self, key):
        return key in self

    def insert(self, key, values):
        '''Append values to key, creating it if needed.'''
        self._properties.setdefault(self._sanitize_key(key), []) \
            .extend(self._sanitize_values(values))

    def erase(self, key):
        self._properties.pop(self._sanitize_key(key), None)

    def copy(self):
        other = self.__class__(self)
        other.unsupported_data = list(self.unsupported_data)
        return other

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self._properties)

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
