# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import os
import sys

from .args import (
    add_generic_args, add_schema_args, ConfigBackedParser, schema_from_args,
)
from .errors import ApplyError, InvalidPatch, ResolveError, SchemaError
from .log import error
from .prettyprint import pretty_print_patch, PrettyPrintConfig
from .rendering import decode
from .utils import read_json, setup_std_streams


_description = """Show a JSON Patch in terminal.
If the document the patch applies to is given,
removed and replaced values are shown too.
"""


def main_show(args):
    for fn in (args.patch, args.document):
        if fn is not None and fn != "-" and not os.path.exists(fn):
            print("Missing file {}".format(fn))
            return 1

    try:
        schema = schema_from_args(args)
    except SchemaError as e:
        error("Invalid schema: %s", e)
        return 1

    try:
        ops = decode(read_json(args.patch))
    except InvalidPatch as e:
        error("Invalid patch %s: %s", args.patch, e)
        return 1
    doc = None
    if args.document is not None:
        doc = read_json(args.document)

    # This printer is to keep the unit tests passing,
    # some tests capture output with capsys which doesn't
    # pick up on sys.stdout.write()
    class Printer:
        def write(self, text):
            print(text, end="")

    config = PrettyPrintConfig(out=Printer(), use_color=args.color)
    try:
        pretty_print_patch(ops, doc, schema, config)
    except (ApplyError, ResolveError) as e:
        error("Patch does not apply to %s: %s", args.document, e)
        return 1
    return 0


def _build_arg_parser(prog=None):
    """Creates an argument parser for the spshow command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        entrypoint='spshow',
        )
    add_generic_args(parser)
    add_schema_args(parser)
    parser.add_argument(
        "patch", help="patch filename, or - to read from stdin")
    parser.add_argument(
        "document", nargs='?', default=None,
        help="filename of the document the patch applies to")
    parser.add_argument(
        '--no-color',
        dest='color',
        action='store_false',
        default=True,
        help="do not use ANSI colors in output.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_show(arguments)


if __name__ == "__main__":
    sys.exit(main())
