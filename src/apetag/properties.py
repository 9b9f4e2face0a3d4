# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = (
    'KEY_CONVERSIONS',
    'to_properties',
    'from_properties',
)

import logging
log = logging.getLogger(__name__)

from .item import ItemType
from .key import check_key
from .propertymap import PropertyMap

# Property names that differ from what is usual for APE tags
KEY_CONVERSIONS = (
    # (property, APE key)
    ('TRACKNUMBER', 'TRACK'),
    ('DATE', 'YEAR'),
    ('ALBUMARTIST', 'ALBUM ARTIST'),
    ('DISCNUMBER', 'DISC'),
    ('REMIXER', 'MIXARTIST'),
    ('RELEASESTATUS', 'MUSICBRAINZ_ALBUMSTATUS'),
    ('RELEASETYPE', 'MUSICBRAINZ_ALBUMTYPE'),
)

_ape_to_property_map = {ape_key: prop_key for prop_key, ape_key in KEY_CONVERSIONS}


def to_properties(items):
    '''Export the items of an ItemListMap as a PropertyMap.'''
    properties = PropertyMap()
    for key, item in items.items():
        tag_name = key.upper()
        if item.type is not ItemType.TEXT or not tag_name:
            properties.unsupported_data.append(item.key or key)
            continue
        tag_name = _ape_to_property_map.get(tag_name, tag_name)
        properties.insert(tag_name, item.values)
    return properties


def from_properties(items, properties):
    '''Make the text items of an ItemListMap match properties.

    Text items not present in properties are removed; binary and locator
    items are left alone. Returns a PropertyMap of the properties that could
    not be stored because their key is not a valid APE key.
    '''
    properties = PropertyMap(properties)
    for prop_key, ape_key in KEY_CONVERSIONS:
        if prop_key in properties:
            properties.insert(ape_key, properties[prop_key])
            properties.erase(prop_key)

    to_remove = [
        key
        for key, item in items.items()
        if key.upper() and item.type is ItemType.TEXT and key.upper() not in properties
    ]
    for key in to_remove:
        items.remove(key)

    invalid = PropertyMap()
    for tag_name, values in properties.items():
        if not check_key(tag_name):
            log.debug('from_properties: Invalid APE key %r', tag_name)
            invalid.insert(tag_name, values)
            continue
        item = items.get(tag_name)
        if item is not None and item.values == values:
            continue
        if not values:
            items.remove(tag_name)
        else:
            items.add_value(tag_name, values[0], replace=True)
            for value in values[1:]:
                items.add_value(tag_name, value, replace=False)
    return invalid

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
