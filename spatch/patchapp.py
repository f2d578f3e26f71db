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
from .errors import ApplyError, InvalidPatch, SchemaError, TestFailed
from .log import error
from .patching import patch
from .rendering import decode
from .utils import read_json, setup_std_streams


_description = "Apply a JSON Patch (RFC 6902), possibly with identity selectors, to a JSON document."


def main_patch(args):
    for fn in (args.document, args.patch):
        if fn != "-" and not os.path.exists(fn):
            print("Missing file {}".format(fn))
            return 1

    try:
        schema = schema_from_args(args)
    except SchemaError as e:
        error("Invalid schema: %s", e)
        return 1

    doc = read_json(args.document)
    try:
        ops = decode(read_json(args.patch))
    except InvalidPatch as e:
        error("Invalid patch %s: %s", args.patch, e)
        return 1

    try:
        newdoc = patch(doc, ops, schema)
    except TestFailed as e:
        error("Patch test failed, document left unchanged: %s", e)
        return 1
    except ApplyError as e:
        error("Could not apply patch: %s", e)
        return 1

    text = json.dumps(newdoc, indent=indent_from_args(args))
    if args.output:
        with open(args.output, "w") as f:
            f.write(text)
            f.write("\n")
    else:
        print(text)
    return 0


def _build_arg_parser(prog=None):
    """Creates an argument parser for the sppatch command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        entrypoint='sppatch',
        )
    add_generic_args(parser)
    add_schema_args(parser)
    add_output_args(parser)

    parser.add_argument(
        "document", help="the JSON document filename, or - for stdin.")
    parser.add_argument(
        "patch", help="the patch filename.")
    parser.add_argument(
        '-o', '--output',
        default=None,
        help="if supplied, the patched document is written to this file. "
             "Otherwise it is printed to the terminal.")

    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_patch(arguments)


if __name__ == "__main__":
    sys.exit(main())
