# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple
import copy
import json
import pprint
import sys

import colorama

from .errors import InvalidPatch
from .patch_format import PatchOpKind
from .patching import apply_op
from .resolving import resolve
from .schema_index import as_schema_index
from .utils import json_type_name


# Indentation offset in pretty-print
IND = "  "

# Max line width used some placed in pretty-print
MAXWIDTH = 78


PATCH_ENTRY_END = '\n'

ColoredConstants = namedtuple('ColoredConstants', (
    'KEEP',
    'REMOVE',
    'ADD',
    'INFO',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        KEEP   = '{color}   '.format(color=''),
        REMOVE = '{color}-  '.format(color=colorama.Fore.RED),
        ADD    = '{color}+  '.format(color=colorama.Fore.GREEN),
        INFO   = '{color}## '.format(color=colorama.Fore.BLUE + colorama.Style.BRIGHT),
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        KEEP   = '   ',
        REMOVE = '-  ',
        ADD    = '+  ',
        INFO   = '## ',
        RESET  = '',
    )
}


class PrettyPrintConfig:
    def __init__(
            self,
            out=sys.stdout,
            use_color=True,
            ):
        self.out = out
        self.use_color = use_color

    @property
    def KEEP(self):
        return col_const[self.use_color].KEEP

    @property
    def REMOVE(self):
        return col_const[self.use_color].REMOVE

    @property
    def ADD(self):
        return col_const[self.use_color].ADD

    @property
    def INFO(self):
        return col_const[self.use_color].INFO

    @property
    def RESET(self):
        return col_const[self.use_color].RESET

DefaultConfig = PrettyPrintConfig()


def format_value(v):
    "Format simple value for printing. Uses json for strings and pprint for the rest."
    if isinstance(v, str):
        return json.dumps(v, ensure_ascii=False)
    if v is None or isinstance(v, bool):
        return json.dumps(v)
    return pprint.pformat(v)


def pretty_print_value(value, prefix="", config=DefaultConfig):
    """Print a possibly complex value with all lines prefixed.

    Calls out to generic formatters based on value
    type for dicts and lists.
    Uses format_value for simple values.
    """
    if isinstance(value, dict) and value:
        pretty_print_dict(value, (), prefix, config)
    elif isinstance(value, list) and value:
        pretty_print_list(value, prefix, config)
    else:
        pretty_print_multiline(format_value(value), prefix, config)


def pretty_print_key(k, prefix, config):
    config.out.write("%s%s:\n" % (prefix, k))


def pretty_print_key_value(k, v, prefix, config):
    config.out.write("%s%s: %s\n" % (prefix, k, v))


def pretty_print_patch_action(msg, path, config):
    config.out.write("%s%s %s:%s\n" % (config.INFO, msg, path, config.RESET))


def pretty_print_item(k, v, prefix="", config=DefaultConfig):
    if isinstance(v, dict) and v:
        pretty_print_key(k, prefix, config)
        pretty_print_dict(v, (), prefix+IND, config)
    elif isinstance(v, list) and v:
        pretty_print_key(k, prefix, config)
        pretty_print_list(v, prefix+IND, config)
    else:
        vstr = format_value(v)
        if "\n" in vstr:
            # Multiline strings
            pretty_print_key(k, prefix, config)
            for line in vstr.splitlines(False):
                config.out.write("%s%s\n" % (prefix+IND, line))
        else:
            # Singleline strings
            pretty_print_key_value(k, vstr, prefix, config)


def pretty_print_multiline(text, prefix="", config=DefaultConfig):
    assert isinstance(text, str), 'expected string argument'

    # Preprend prefix to lines, letting lines keep their own newlines
    lines = text.splitlines(True)
    for line in lines:
        config.out.write(prefix + line)

    # If the final line doesn't have a newline,
    # make sure we still start a new line
    if not text.endswith("\n"):
        config.out.write("\n")


def pretty_print_list(li, prefix="", config=DefaultConfig):
    listr = pprint.pformat(li)
    if len(listr) < MAXWIDTH - len(prefix) and "\n" not in listr:
        config.out.write("%s%s\n" % (prefix, listr))
    else:
        for k, v in enumerate(li):
            pretty_print_item("item[%d]" % k, v, prefix, config)


def pretty_print_dict(d, exclude_keys=(), prefix="", config=DefaultConfig):
    """Pretty-print a dict without wrapper keys

    Instead of {'key': 'value'}, do

        key: value
        key:
          long
          value

    """
    for k in sorted(set(d) - set(exclude_keys)):
        v = d[k]
        pretty_print_item(k, v, prefix, config)


def pretty_print_patch_entry(doc, e, config=DefaultConfig):
    """Pretty-print one patch operation.

    If doc is not None, it is the document the operation applies to,
    and values being removed or replaced are shown as well.
    """
    op = e.op
    path = str(e.path) or "<root>"

    if op == PatchOpKind.ADD:
        pretty_print_patch_action("added", path, config)
        pretty_print_value(e.value, config.ADD, config)

    elif op == PatchOpKind.REMOVE:
        pretty_print_patch_action("deleted", path, config)
        if doc is not None:
            pretty_print_value(resolve(doc, e.path), config.REMOVE, config)

    elif op == PatchOpKind.REPLACE:
        if doc is not None:
            aval = resolve(doc, e.path)
            bval = e.value
            if json_type_name(aval) != json_type_name(bval):
                typechange = " (type changed from %s to %s)" % (
                    json_type_name(aval), json_type_name(bval))
            else:
                typechange = ""
            pretty_print_patch_action("replaced" + typechange, path, config)
            pretty_print_value(aval, config.REMOVE, config)
        else:
            pretty_print_patch_action("replaced", path, config)
        pretty_print_value(e.value, config.ADD, config)

    elif op == PatchOpKind.MOVE:
        pretty_print_patch_action("moved %s to" % (e.from_,), path, config)

    elif op == PatchOpKind.COPY:
        pretty_print_patch_action("copied %s to" % (e.from_,), path, config)

    elif op == PatchOpKind.TEST:
        pretty_print_patch_action("tested", path, config)
        pretty_print_value(e.value, config.KEEP, config)

    else:
        raise InvalidPatch("Unknown patch op {}".format(op))

    config.out.write(PATCH_ENTRY_END + config.RESET)


def pretty_print_patch(ops, doc=None, schema=None, config=DefaultConfig):
    """Pretty-print a patch

    Parameters
    ----------

    ops: list of PatchOp
        The patch to print
    doc: json value or None
        The document the patch applies to. When given, removed
        and replaced values are printed too.
    schema: SchemaIndex, schema document or None
        Identity keys used to resolve paths in doc
    config: PrettyPrintConfig
        Config object determining where and how output is printed
    """
    schema = as_schema_index(schema)
    if doc is not None:
        doc = copy.deepcopy(doc)
    for i, e in enumerate(ops):
        pretty_print_patch_entry(doc, e, config)
        if doc is not None:
            doc = apply_op(doc, e, schema, op_index=i)
