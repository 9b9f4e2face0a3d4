# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = (
    'ItemListMap',
)

import collections.abc
import logging
log = logging.getLogger(__name__)

from .item import ApeItem, ItemType
from .key import check_key


class ItemListMap(collections.abc.MutableMapping):
    '''Case-insensitive mapping of APE keys to ApeItem objects.

    Keys are stored upper-cased; the items keep the key as given. Iteration
    follows insertion order.
    '''

    def __init__(self, items=None):
        self._items = {}
        if items is not None:
            self.update(items)

    @staticmethod
    def _sanitize_key(key):
        if not isinstance(key, str):
            raise KeyError(key)
        return key.upper()

    def __getitem__(self, key):
        return self._items[self._sanitize_key(key)]

    def __setitem__(self, key, item):
        self.set_item(key, item)

    def __delitem__(self, key):
        del self._items[self._sanitize_key(key)]

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __contains__(self, key):
        return isinstance(key, str) and self._sanitize_key(key) in self._items

    def get(self, key, default=None):
        if not isinstance(key, str):
            return default
        return self._items.get(self._sanitize_key(key), default)

    def set_item(self, key, item):
        if not check_key(key):
            log.debug('ItemListMap.set_item: Could not set an item due to an invalid key: %r', key)
            return False
        if not isinstance(item, ApeItem):
            raise TypeError(f'Not an ApeItem: {item!r}')
        self._items[self._sanitize_key(key)] = item
        return True

    def remove(self, key):
        if not isinstance(key, str):
            return
        self._items.pop(self._sanitize_key(key), None)

    def add_value(self, key, value, replace=True):
        if replace:
            self.remove(key)
        if not value:
            return
        # Binary and locator items hold a single value and are replaced.
        item = self.get(key)
        if item is not None and item.type is ItemType.TEXT:
            item.append_value(value)
        else:
            self.set_item(key, ApeItem(key, value))

    def set_binary_value(self, key, data):
        self.remove(key)
        if not data:
            return
        self.set_item(key, ApeItem(key, data, binary=True))

    def is_empty(self):
        return not self._items

    def __eq__(self, other):
        if isinstance(other, ItemListMap):
            return self._items == other._items
        return super().__eq__(other)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self._items)

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
