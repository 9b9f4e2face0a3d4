# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = (
    'MIN_KEY_LENGTH',
    'MAX_KEY_LENGTH',
    'INVALID_KEYS',
    'is_valid_key',
    'check_key',
)

# https://wiki.hydrogenaudio.org/index.php?title=APE_key

MIN_KEY_LENGTH = 2
MAX_KEY_LENGTH = 255

# Reserved; these would be mistaken for other tag formats' magic.
INVALID_KEYS = frozenset((
    'ID3',
    'TAG',
    'OGGS',
    'MP+',
))


def is_valid_key(key):
    '''Return True if the raw key bytes are legal as an APE item key.

    Only printable ASCII including space (32..126) is allowed, the length must
    be between MIN_KEY_LENGTH and MAX_KEY_LENGTH bytes and the key must not be
    one of the reserved INVALID_KEYS (case-insensitive).
    '''
    key = bytes(key)
    if not MIN_KEY_LENGTH <= len(key) <= MAX_KEY_LENGTH:
        return False
    if any(c < 32 or c > 126 for c in key):
        return False
    return key.decode('ascii').upper() not in INVALID_KEYS


def check_key(key):
    '''Same as is_valid_key, for str keys.'''
    if not isinstance(key, str):
        return False
    if not MIN_KEY_LENGTH <= len(key) <= MAX_KEY_LENGTH:
        return False
    try:
        key = key.encode('utf-8')
    except UnicodeEncodeError:
        # Lone surrogates, as produced by os.fsdecode
        return False
    return is_valid_key(key)

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
