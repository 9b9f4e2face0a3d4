__all__ = [
        'app',
        ]

from pathlib import Path
import configparser
import errno
import functools
import io
import logging
import os
import sys
import traceback

import argcomplete
import coloredlogs

from . import argparse

DEFAULT_ROOT_LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'
DEFAULT_APP_LOG_FORMAT = '%(asctime)s %(levelname)s %(message)s'

DEFAULT_LEVEL_STYLES = dict(coloredlogs.DEFAULT_LEVEL_STYLES)
DEFAULT_LEVEL_STYLES.update(
        debug=dict(color='magenta', bold=getattr(coloredlogs, 'CAN_USE_BOLD_FONT', True)),
        )

def addLoggingLevelName(level, levelName):
    logging.addLevelName(level, levelName)
    setattr(logging, levelName, level)

    lowerName = levelName.lower()

    def Logger_func(self, msg, *args, **kwargs):
        self.log(level, msg, *args, **kwargs)
    setattr(logging.Logger, lowerName, Logger_func)

    def LoggerAdapter_func(self, msg, *args, **kwargs):
        self.log(level, msg, *args, **kwargs)
    setattr(logging.LoggerAdapter, lowerName, LoggerAdapter_func)

    def root_func(msg, *args, **kwargs):
        logging.log(level, msg, *args, **kwargs)
    setattr(logging, lowerName, root_func)

addLoggingLevelName((logging.INFO + logging.DEBUG) // 2, "VERBOSE")

class ConfigParser(configparser.ConfigParser):

    file_name = None

    def __init__(self, *, file_name=None, **kwargs):
        self.file_name = None if file_name is None else str(file_name)
        super().__init__(**kwargs)

    def read(self, file_name=None, filenames=None, no_exists_ok=False, **kwargs):
        if file_name is not None and filenames is not None:
            raise TypeError('Both file_name and filenames provided')
        if filenames is None:
            if file_name is None:
                file_name = self.file_name
            if file_name is None:
                raise TypeError('No file_name or filenames provided')
            filenames = [str(file_name)]
        read_ok = super().read(filenames=filenames, **kwargs)
        if not no_exists_ok and not read_ok:
            raise OSError(errno.ENOENT, 'Config file(s) not found', ', '.join(filenames))
        return read_ok

class App(object):

    prog = None
    description = None
    version = None
    contact = None

    log = logging.getLogger('__main__')

    config_parser = None
    parser = None
    args = None

    config_file_parser = None

    def __init__(self):
        self.args = argparse.Namespace()

    def init(
            self,
            # parser args:
            prog=None,
            description=None,
            version=None,
            contact=None,
            # logging args:
            logging_level=None,
            ):
        if prog is None:
            prog = Path(sys.argv[0]).name
        self.prog = prog
        self.version = version
        self.contact = contact
        self.description = description
        self.init_parser()
        self.init_logging(
                level=logging_level,
                )

    def init_parser(self, allow_config_file=True, fromfile_prefix_chars='@',
                    **kwargs):
        description = self.description or ''
        if self.version is not None:
            description += ' v%s' % (self.version,)
        if self.contact is not None:
            description += ' <%s>' % (self.contact,)

        parser_parents = []
        if allow_config_file:
            self.config_parser = argparse.ArgumentParser(
                formatter_class=argparse.ArgumentDefaultsHelpFormatter,
                description=description,
                add_help=False
                )
            self.config_parser.add_argument("--config", "-c", metavar="FILE",
                                          dest='config_file',
                                          default=argparse.DefaultWrapper(self.default_config_file()),
                                          type=argparse.FileType('r'),
                                          help="Specify config file")
            self.config_parser.add_argument("--no-config",
                                          dest='config_file',
                                          default=argparse.SUPPRESS,
                                          action='store_const', const=None,
                                          help="Disable config file")
            parser_parents.append(self.config_parser)

        self.parser = argparse.ArgumentParser(
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
            parents=parser_parents,
            fromfile_prefix_chars=fromfile_prefix_chars,
            prog=self.prog,
            description=description,
            **kwargs)
        self.parser.version = self.version

    def init_logging(self, level=None, **kwargs):
        self.log.name = self.prog
        coloredlogs.install(
                level=level,
                fmt=DEFAULT_ROOT_LOG_FORMAT,
                level_styles=DEFAULT_LEVEL_STYLES,
                **kwargs)
        coloredlogs.install(
                level=logging.NOTSET,
                logger=self.log,
                fmt=DEFAULT_APP_LOG_FORMAT,
                level_styles=DEFAULT_LEVEL_STYLES,
                )
        # The app logger has its own handler
        self.log.propagate = False

    def set_logging_level(self, level):
        if isinstance(level, str):
            level = int(level) if level.isdigit() else logging.getLevelName(level.upper())
        logging.getLogger().setLevel(level)
        coloredlogs.set_level(level)

    def default_config_file(self):
        if not self.prog:
            return None
        config_home = os.environ.get('XDG_CONFIG_HOME', None)
        config_home = Path(config_home) if config_home else Path.home() / '.config'
        config_file1 = config_home / self.prog / 'config'
        if config_file1.exists():
            return config_file1
        config_file2 = Path('~', self.prog + '.conf').expanduser()
        if config_file2.exists():
            return config_file2
        return config_file1  # The default that doesn't exist

    def parse_args(self, args=None, namespace=None):
        argcomplete.autocomplete(self.parser)

        if args is None:
            # args default to the system args
            args = sys.argv[1:]
        else:
            # make sure that args are mutable
            args = list(args)

        remaining_args = args

        config_args = []

        if self.config_parser:
            namespace, remaining_args = self.config_parser.parse_known_args(
                args=remaining_args,
                namespace=namespace)

            if namespace.config_file:
                self.read_config_file(namespace.config_file, no_exists_ok=True)
                try:
                    options_config = self.config_file_parser["options"]
                except KeyError:
                    pass
                else:
                    for k, v in options_config.items():
                        option_string = f'--{k}'
                        try:
                            action = self.parser._option_string_actions[option_string]
                        except KeyError:
                            raise ValueError(f'{self.config_file_parser.file_name}: Unknown option {k!r}')
                        if action.nargs == 0:
                            if v is not None:
                                raise ValueError(f'{option_string} takes no argument')
                        elif v is None:
                            raise ValueError(f'{option_string} takes an argument')
                        config_args.append(option_string)
                        if v is not None:
                            config_args.append(v)
                if isinstance(namespace.config_file, io.IOBase):
                    namespace.config_file.close()
                    try:
                        namespace.config_file = namespace.config_file.name
                    except AttributeError:
                        namespace.config_file = None

        # Config file options first so the command line overrides them
        namespace = self.parser.parse_args(
            args=config_args + remaining_args,
            namespace=namespace)

        self.args = namespace
        return self.args

    def read_config_file(self, config_file, no_exists_ok=False):
        if isinstance(config_file, io.IOBase):
            self.config_file_parser = ConfigParser(file_name=config_file.name,
                                                   allow_no_value=True)
            self.config_file_parser.read_file(config_file)
            ret = True
        elif isinstance(config_file, (str, os.PathLike)):
            self.config_file_parser = ConfigParser(file_name=config_file,
                                                   allow_no_value=True)
            ret = bool(self.config_file_parser.read(no_exists_ok=no_exists_ok))
        else:
            raise TypeError(config_file)
        return ret

    def main_wrapper(self, func):
        @functools.wraps(func)
        def wrapper():
            try:
                ret = func()
            except Exception as e:
                self.log.error("%s: %s", e.__class__.__name__, e)
                if self.log.isEnabledFor(logging.DEBUG):
                    etype, value, tb = sys.exc_info()
                    self.log.debug(''.join(traceback.format_exception(etype, value, tb)))
                self.exit(1)
            if ret is True or ret is None:
                self.exit(0)
            elif ret is False:
                self.exit(1)
            else:
                self.exit(ret)
        return wrapper

    def exit(self, ret):
        sys.exit(ret)


app = App()

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
