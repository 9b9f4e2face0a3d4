# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

import argparse as _argparse
from argparse import *

__all__ = list(_argparse.__all__) + [
    'DefaultWrapper',
    'KeyValueType',
]

class ArgumentDefaultsHelpFormatter(_argparse.ArgumentDefaultsHelpFormatter):

    def _get_help_string(self, action):
        help = action.help
        if help and '%(default)' not in help:
            if action.default is not SUPPRESS:
                defaulting_nargs = [OPTIONAL, ZERO_OR_MORE]
                if action.option_strings or action.nargs in defaulting_nargs:
                    if isinstance(action, _argparse._StoreTrueAction) and action.default is True:
                        return help + ' (default)'
                    elif isinstance(action, _argparse._StoreFalseAction) and action.default is False:
                        return help + ' (default)'
                    elif isinstance(action, (_argparse._StoreConstAction, _argparse._AppendAction)) \
                            and action.default in (None, False):
                        return help
        return super()._get_help_string(action)

class Namespace(_argparse.Namespace):
    pass

class _ActionsContainer(_argparse._ActionsContainer):

    def add_argument_group(self, *args, **kwargs):
        group = _ArgumentGroup(self, *args, **kwargs)
        self._action_groups.append(group)
        return group

    def add_mutually_exclusive_group(self, **kwargs):
        group = _MutuallyExclusiveGroup(self, **kwargs)
        self._mutually_exclusive_groups.append(group)
        return group

    def add_bool_argument(self, *args, **kwargs):
        '''Add a --xxx/--no-xxx pair of options storing True/False into the same dest.'''

        kwargs = self._get_optional_kwargs(*args, **kwargs)

        option_strings = kwargs.pop('option_strings')
        assert option_strings, f'Invalid option_strings: {option_strings}'
        long_option_strings = [option_string
                               for option_string in option_strings
                               if len(option_string) > 1 and option_string[1] in self.prefix_chars]
        assert long_option_strings, f'Invalid long_option_strings: {long_option_strings}'
        neg_option_strings = [
            f'{option_string[:2]}no-{option_string[2:]}'
            for option_string in long_option_strings]

        help = kwargs.pop('help', None)
        neg_help = kwargs.pop('neg_help', None)
        if help and not neg_help:
            if help.startswith('enable '):
                neg_help = f'disable {help[7:]}'
            elif help.startswith('do not '):
                neg_help = f'{help[7:]}'
            else:
                neg_help = f'do not {help}'

        default = kwargs.pop('default', False)

        self.add_argument(*option_strings,
                          default=default,
                          action='store_true',
                          help=help,
                          **kwargs)
        self.add_argument(*neg_option_strings,
                          default=SUPPRESS,
                          action='store_false',
                          help=neg_help,
                          **kwargs)

class _ArgumentGroup(_argparse._ArgumentGroup, _ActionsContainer):
    pass

class _MutuallyExclusiveGroup(_argparse._MutuallyExclusiveGroup, _ArgumentGroup):
    pass

class ArgumentParser(_argparse.ArgumentParser, _ActionsContainer):

    def parse_known_args(self, args=None, namespace=None):
        if namespace is None:
            namespace = Namespace()
        args, argv = super().parse_known_args(args=args, namespace=namespace)
        for k, v in args.__dict__.items():
            if isinstance(v, DefaultWrapper):
                setattr(args, k, v.inner)
        return args, argv


class DefaultWrapper(object):
    '''Wrap a default value so argparse does not pass it through `type`.'''

    def __init__(self, inner):
        self.inner = inner
        super().__init__()

    def __repr__(self):
        return f'{self.__class__.__name__}({self.inner!r})'

    def __str__(self):
        return str(self.inner)


class KeyValueType(object):
    '''argparse type for KEY=VALUE arguments; returns a (key, value) tuple.'''

    def __init__(self, value_type=str):
        self.value_type = value_type

    def __call__(self, arg_string):
        key, sep, value = arg_string.partition('=')
        if not sep or not key:
            raise ArgumentTypeError(f'expected KEY=VALUE: {arg_string!r}')
        return key, self.value_type(value)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.value_type)
