# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import os
import sys

from .args import (
    add_generic_args, add_schema_args, add_output_args, ConfigBackedParser,
    schema_from_args, indent_from_args,
)
from .errors import PathParseError, ResolveError, SchemaError
from .log import error
from .resolving import resolve
from .utils import read_json, setup_std_streams


_description = """Print the value at a path in a JSON document.
Paths are JSON Pointers, where array elements can also be
selected by identity, as in /items/[id=item-2]/value.
"""


def main_query(args):
    fn = args.document
    if fn != "-" and not os.path.exists(fn):
        print("Missing file {}".format(fn))
        return 1

    try:
        schema = schema_from_args(args)
    except SchemaError as e:
        error("Invalid schema: %s", e)
        return 1
    doc = read_json(fn)

    try:
        value = resolve(doc, args.path, schema)
    except (PathParseError, ResolveError) as e:
        error("%s", e)
        return 1

    print(json.dumps(value, indent=indent_from_args(args)))
    return 0


def _build_arg_parser(prog=None):
    """Creates an argument parser for the spquery command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        entrypoint='spquery',
        )
    add_generic_args(parser)
    add_schema_args(parser)
    add_output_args(parser)
    parser.add_argument(
        "path",
        help="path of the value to print, '' for the whole document.")
    parser.add_argument(
        "document",
        nargs='?', default='-',
        help="JSON document filename, or - to read from stdin (default).")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_query(arguments)


if __name__ == "__main__":
    sys.exit(main())
