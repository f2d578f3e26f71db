# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import argparse
import json
import logging
import sys

from ._version import __version__
from .config import (
    get_defaults_for_argparse, build_config, entrypoint_configurables,
)
from .log import init_logging, set_spatch_log_level
from .schema_index import SchemaIndex
from .utils import read_json


class ConfigBackedParser(argparse.ArgumentParser):
    """Argument parser taking its defaults from the config of an entrypoint.

    The entrypoint defaults to the first word of the program name.
    """

    def __init__(self, *args, entrypoint=None, **kwargs):
        super(ConfigBackedParser, self).__init__(*args, **kwargs)
        self.entrypoint = entrypoint or self.prog.split(' ')[0]

    def parse_known_args(self, args=None, namespace=None):
        try:
            defs = get_defaults_for_argparse(self.entrypoint)
            self.set_defaults(**defs)
        except ValueError:
            pass
        return super(ConfigBackedParser, self).parse_known_args(args=args, namespace=namespace)


class LogLevelAction(argparse.Action):
    def __init__(self, option_strings, dest, default=None, **kwargs):
        # __call__ is not called if option not given:
        level = getattr(logging, default or 'INFO')
        init_logging(level=level)
        set_spatch_log_level(level)
        super(LogLevelAction, self).__init__(option_strings, dest, default=default, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        level = getattr(logging, values)
        set_spatch_log_level(level, True)


def modify_config_for_print(config):
    output = {}
    for k, v in config.items():
        if isinstance(v, dict):
            output[k] = modify_config_for_print(v)
            if not output[k]:
                output[k] = '{}'
        else:
            output[k] = json.dumps(v)
    return output


class ConfigHelpAction(argparse.Action):
    def __init__(self, option_strings, dest, help=None):
        super(ConfigHelpAction, self).__init__(
            option_strings, dest, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        from .prettyprint import pretty_print_dict, PrettyPrintConfig

        entrypoint = getattr(parser, 'entrypoint', parser.prog)
        header = entrypoint_configurables[entrypoint].__name__
        config = build_config(entrypoint, True)
        pretty_print_dict(
            {
                header: modify_config_for_print(config),
            },
            config=PrettyPrintConfig(out=sys.stderr)
        )
        sys.exit(1)


def add_generic_args(parser):
    """Adds a set of arguments common to all spatch commands.
    """
    parser.add_argument(
        '--version',
        action="version",
        version="%(prog)s " + __version__)
    parser.add_argument(
        '--config',
        help="list the valid config keys and their current effective values",
        action=ConfigHelpAction,
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="set the log level by name.",
        action=LogLevelAction,
    )


def add_schema_args(parser):
    """Adds arguments for commands that resolve paths with a schema.
    """
    parser.add_argument(
        '--schema',
        default=None,
        help="JSON Schema file declaring the identity keys (indexKey) "
             "of arrays. Without it, all arrays are positional.")
    parser.add_argument(
        '--no-validate-schema',
        dest='validate_schema',
        action='store_false',
        default=True,
        help="do not check the schema file against its metaschema.")


def add_output_args(parser):
    """Adds arguments for commands that write JSON documents.
    """
    parser.add_argument(
        '--indent',
        type=int,
        default=2,
        help="indentation of JSON output. Use a negative value for "
             "compact output.")


def schema_from_args(args):
    """Load the schema index named by the --schema argument.

    Returns None when no schema was given.
    """
    filename = getattr(args, 'schema', None)
    if not filename:
        return None
    schema = read_json(filename)
    return SchemaIndex.build(schema, validate=getattr(args, 'validate_schema', True))


def indent_from_args(args):
    indent = getattr(args, 'indent', 2)
    if indent is None or indent < 0:
        return None
    return indent
