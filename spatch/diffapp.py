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
from .diffing import diff, DiffConfig, DEFAULT_MAX_DEPTH
from .errors import DiffError, SchemaError
from .log import error
from .rendering import render
from .utils import EXPLICIT_MISSING_FILE, read_json, setup_std_streams


_description = """Compute a JSON Patch (RFC 6902) turning one JSON document into another.
With a schema, elements of arrays with a declared identity key (indexKey)
are matched by identity rather than by position.
"""


def main_diff(args):
    """Main handler of diff CLI"""
    base = args.base
    remote = args.remote
    output = getattr(args, 'out', None)

    # Check that files either exist, or are explicitly marked as missing:
    for fn in (base, remote):
        if (fn != "-" and not os.path.exists(fn) and
                fn != EXPLICIT_MISSING_FILE):
            print("Missing file {}".format(fn))
            return 1

    try:
        schema = schema_from_args(args)
    except SchemaError as e:
        error("Invalid schema: %s", e)
        return 1

    a = read_json(base, on_null='null')
    b = read_json(remote, on_null='null')

    try:
        config = DiffConfig(schema=schema, max_depth=args.max_depth)
        d = diff(a, b, config=config)
    except (DiffError, ValueError) as e:
        error("Can not diff %s and %s: %s", base, remote, e)
        return 1

    rendered = render(d, schema=schema, old=a, semantic=args.semantic)
    text = json.dumps(rendered, indent=indent_from_args(args))

    # Output as JSON to file, or print to stdout:
    if output:
        with open(output, "w") as df:
            df.write(text)
            df.write("\n")
    else:
        print(text)
    return 0


def _build_arg_parser(prog=None):
    """Creates an argument parser for the spdiff command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        entrypoint='spdiff',
        )
    add_generic_args(parser)
    add_schema_args(parser)
    add_output_args(parser)

    parser.add_argument(
        "base", help="the base JSON filename, or - for stdin.")
    parser.add_argument(
        "remote", help="the modified JSON filename.")

    parser.add_argument(
        '--positional',
        dest='semantic',
        action='store_false',
        default=True,
        help="address all array elements by index in the output, "
             "instead of by identity where the schema declares one.")
    parser.add_argument(
        '--max-depth',
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help="maximum nesting depth of the documents. Default is %d." % DEFAULT_MAX_DEPTH)
    parser.add_argument(
        '--out',
        default=None,
        help="if supplied, the patch is written to this file. "
             "Otherwise it is printed to the terminal.")

    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_diff(arguments)


if __name__ == "__main__":
    sys.exit(main())
