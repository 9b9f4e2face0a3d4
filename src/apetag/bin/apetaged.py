#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :
# PYTHON_ARGCOMPLETE_OK

from pathlib import Path
import json
import logging
import sys

from apetag import argparse
from apetag.app import app
from apetag.file import ApeFile
from apetag.propertymap import PropertyMap
from apetag.utils import humanbytes


@app.main_wrapper
def main():

    app.init(
            version='1.0',
            description='APE Tag Editor',
            )

    app.parser.add_argument('--version', '-V', action='version')

    pgroup = app.parser.add_argument_group('Program Control')
    pgroup.add_argument('--dry-run', '-n', dest='dry_run', action='store_true', help='dry-run mode')
    xgroup = pgroup.add_mutually_exclusive_group()
    xgroup.add_argument('--logging_level', default=argparse.SUPPRESS, help='set logging level')
    xgroup.add_argument('--quiet', '-q', dest='logging_level', default=argparse.SUPPRESS, action='store_const', const=logging.WARNING, help='quiet mode')
    xgroup.add_argument('--verbose', '-v', dest='logging_level', default=argparse.SUPPRESS, action='store_const', const=logging.VERBOSE, help='verbose mode')
    xgroup.add_argument('--debug', '-d', dest='logging_level', default=argparse.SUPPRESS, action='store_const', const=logging.DEBUG, help='debug mode')

    pgroup = app.parser.add_argument_group('Actions')
    xgroup = pgroup.add_mutually_exclusive_group()
    xgroup.add_argument('--list', '--list-tags', dest='action', default=None, action='store_const', const='list', help='list tags')
    xgroup.add_argument('--strip', dest='action', default=argparse.SUPPRESS, action='store_const', const='strip', help='remove the APE tag')

    pgroup = app.parser.add_argument_group('Tags')
    pgroup.add_argument('--set', dest='set_values', default=[], action='append', type=argparse.KeyValueType(), metavar='KEY=VALUE', help='set a text item, replacing existing values')
    pgroup.add_argument('--add', dest='add_values', default=[], action='append', type=argparse.KeyValueType(), metavar='KEY=VALUE', help='add a value to a text item')
    pgroup.add_argument('--remove', dest='remove_keys', default=[], action='append', metavar='KEY', help='remove an item')
    pgroup.add_argument('--binary', dest='binary_values', default=[], action='append', type=argparse.KeyValueType(Path), metavar='KEY=PATH', help='set a binary item from the contents of a file')
    pgroup.add_argument('--properties', dest='properties_file', default=None, type=Path, metavar='JSON_FILE', help='replace text items with the properties of a JSON file')
    pgroup.add_argument('--remove-unsupported', dest='remove_unsupported', action='store_true', help='remove items that are not text')

    pgroup = app.parser.add_argument_group('Other')
    pgroup.add_argument('--format', default='human', choices=('human', 'json'), help='output list format')
    pgroup.add_bool_argument('--unsupported', default=True, help='list unsupported items')

    app.parser.add_argument('files', nargs='*', default=None, type=Path, help='audio files')

    app.parse_args()

    if not hasattr(app.args, 'logging_level'):
        app.args.logging_level = logging.INFO
    app.set_logging_level(app.args.logging_level)

    edits = bool(app.args.set_values
                 or app.args.add_values
                 or app.args.remove_keys
                 or app.args.binary_values
                 or app.args.properties_file
                 or app.args.remove_unsupported)

    if getattr(app.args, 'action', None) is None:
        app.args.action = 'edit' if edits else 'list'
    elif edits:
        raise ValueError(f'Tag edits can not be combined with --{app.args.action}')

    if not app.args.files:
        raise Exception('No files provided')

    properties = None
    if app.args.properties_file:
        properties = load_properties(app.args.properties_file)

    if app.args.action == 'list':
        # {{{

        for file_name in app.args.files:
            taglist(file_name, app.args.format,
                    unsupported=app.args.unsupported)

        # }}}
    elif app.args.action == 'edit':
        # {{{

        for file_name in app.args.files:
            tagedit(file_name,
                    set_values=app.args.set_values,
                    add_values=app.args.add_values,
                    remove_keys=app.args.remove_keys,
                    binary_values=app.args.binary_values,
                    properties=properties,
                    remove_unsupported=app.args.remove_unsupported,
                    dry_run=app.args.dry_run)

        # }}}
    elif app.args.action == 'strip':
        # {{{

        for file_name in app.args.files:
            tagstrip(file_name, dry_run=app.args.dry_run)

        # }}}
    else:
        raise ValueError('Invalid action \'%s\'' % (app.args.action,))

def load_properties(file_name):
    with open(file_name, 'r', encoding='utf-8') as fp:
        d = json.load(fp)
    if not isinstance(d, dict):
        raise ValueError(f'{file_name}: Expected a JSON object')
    return PropertyMap(d)

def taglist(file_name, format, *, unsupported=True, file=None):
    if file is None:
        file = sys.stdout
    if format == 'human':
        app.log.verbose('Listing %s tags...', file_name)
    tag = ApeFile(file_name).read_tag()
    properties = tag.properties()
    unsupported_items = {}
    if unsupported:
        for key in properties.unsupported_data:
            item = tag.items().get(key)
            unsupported_items[key] = {
                'type': item.type.name.lower(),
                'size': len(item.binary_data),
            }
    if format == 'human':
        for key, values in properties.items():
            for value in values:
                print('%s=%s' % (key, value), file=file)
        for key, info in unsupported_items.items():
            print('%s: [%s, %s]' % (key, info['type'], humanbytes(info['size'])), file=file)
    elif format == 'json':
        d = {'properties': dict(properties)}
        if unsupported:
            d['unsupported'] = unsupported_items
        json.dump(d, fp=file, indent=2, sort_keys=True, ensure_ascii=False)
        print('', file=file)
    else:
        raise NotImplementedError(format)
    file.flush()  # Sync with logging
    return True

def tagedit(file_name, *,
            set_values=(),
            add_values=(),
            remove_keys=(),
            binary_values=(),
            properties=None,
            remove_unsupported=False,
            dry_run=False):
    ape_file = ApeFile(file_name)
    tag = ape_file.read_tag()

    if properties is not None:
        invalid = tag.set_properties(properties)
        for key, values in invalid.items():
            app.log.warning('%s: Invalid APE key %r; Ignoring values %r', file_name, key, values)
    if remove_unsupported:
        tag.remove_unsupported_properties(tag.properties().unsupported_data)
    for key in remove_keys:
        tag.remove_item(key)
    for replace, key_values in (
            (True, set_values),
            (False, add_values),
    ):
        for key, value in key_values:
            if not tag.check_key(key):
                app.log.warning('%s: Invalid APE key %r; Ignoring', file_name, key)
                continue
            tag.add_value(key, value, replace=replace)
    for key, picture_file in binary_values:
        if not tag.check_key(key):
            app.log.warning('%s: Invalid APE key %r; Ignoring', file_name, key)
            continue
        tag.set_binary_value(key, Path(picture_file).read_bytes())

    if dry_run:
        app.log.info('%s: Dry run; Not writing %d items', file_name, len(tag.items()))
        return True
    app.log.info('Writing %s...', file_name)
    ape_file.save(tag)
    return True

def tagstrip(file_name, *, dry_run=False):
    if dry_run:
        app.log.info('%s: Dry run; Not removing APE tag', file_name)
        return True
    app.log.info('Removing APE tag from %s...', file_name)
    ApeFile(file_name).strip()
    return True

if __name__ == "__main__":
    main()

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
