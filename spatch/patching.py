# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy

from .errors import (
    ApplyError, ResolveError, NotFound, IndexOutOfRange, InvalidUse,
    MoveIntoSelf, TestFailed, TargetInvalidUse, as_apply_error,
)
from .log import debug
from .patch_format import PatchOp, PatchOpKind
from .paths import Index, APPEND
from .resolving import locate, locate_parent, IdentityToken
from .schema_index import as_schema_index
from .utils import values_equal, json_type_name


__all__ = ["patch", "apply_patch", "apply_op"]


def add_value(doc, path, value, schema=None):
    "Add value at path in doc, in place. Returns the new document root."
    if not path:
        return value
    container, token, _ = locate_parent(doc, path, schema)
    if isinstance(container, dict):
        container[token] = value
    elif token is APPEND:
        container.append(value)
    elif isinstance(token, IdentityToken):
        if not token.segment.matches(value):
            raise TargetInvalidUse(
                "value added at an identity selector must be an object "
                "with %s=%r" % (token.segment.field, token.segment.value), path)
        if token.index is None:
            container.append(value)
        else:
            container[token.index] = value
    else:
        if token > len(container):
            raise IndexOutOfRange(
                "can not add at index %d of array of length %d" % (token, len(container)),
                path)
        container.insert(token, value)
    return doc


def remove_value(doc, path, schema=None):
    "Remove the value at path in doc, in place. Returns the removed value."
    if not path:
        raise InvalidUse("can not remove the document root", path)
    container, token, _ = locate_parent(doc, path, schema)
    if isinstance(container, dict):
        if token not in container:
            raise NotFound("member %r not found" % token, path)
        return container.pop(token)
    return container.pop(_existing_index(container, token, path))


def replace_value(doc, path, value, schema=None):
    "Replace the value at path in doc, in place. Returns the new document root."
    if not path:
        return value
    container, token, _ = locate_parent(doc, path, schema)
    if isinstance(container, dict):
        if token not in container:
            raise NotFound("member %r not found" % token, path)
        container[token] = value
    else:
        container[_existing_index(container, token, path)] = value
    return doc


def _existing_index(array, token, path):
    if token is APPEND:
        raise InvalidUse("'-' does not refer to an existing element", path)
    if isinstance(token, IdentityToken):
        if token.index is None:
            raise NotFound(
                "no element with %s=%r" % (token.segment.field, token.segment.value), path)
        return token.index
    if token >= len(array):
        raise IndexOutOfRange(
            "index %d out of range for array of length %d" % (token, len(array)), path)
    return token


def _target_positional(doc, path, schema):
    "Positional form of a path whose last segment need not exist yet."
    container, token, parent = locate_parent(doc, path, schema)
    if isinstance(token, IdentityToken):
        if token.index is None:
            return None
        last = Index(token.index)
    elif isinstance(token, int):
        last = Index(token)
    else:
        last = path.last
    return parent.positional.child(last)


def move_value(doc, from_, path, schema=None):
    "Move the value at from_ to path in doc, in place. Returns the new document root."
    if from_ == path:
        # Still fails if there is nothing to move
        locate(doc, from_, schema)
        return doc
    if from_.is_proper_prefix_of(path):
        raise MoveIntoSelf("can not move a value into one of its children", path)
    if path:
        source = locate(doc, from_, schema).positional
        try:
            target = _target_positional(doc, path, schema)
        except ResolveError:
            # Left for add_value to report, against the document after removal
            target = None
        if target is not None and source.is_proper_prefix_of(target):
            raise MoveIntoSelf("can not move a value into one of its children", path)
    value = remove_value(doc, from_, schema)
    return add_value(doc, path, value, schema)


def copy_value(doc, from_, path, schema=None):
    "Copy the value at from_ to path in doc, in place. Returns the new document root."
    value = locate(doc, from_, schema).value
    return add_value(doc, path, copy.deepcopy(value), schema)


def check_value(doc, path, value, schema=None):
    "Raise TestFailed unless the value at path in doc equals value."
    actual = locate(doc, path, schema).value
    if not values_equal(actual, value):
        raise TestFailed(
            "test failed, found %s %s, expected %s %s" % (
                json_type_name(actual), _short(actual),
                json_type_name(value), _short(value)),
            path)


def _short(value, maxlen=40):
    s = repr(value)
    if len(s) > maxlen:
        s = s[:maxlen - 3] + "..."
    return s


def apply_op(doc, op, schema=None, op_index=None):
    """Apply a single operation to doc, in place where possible.

    Returns the new document root, which differs from doc when the
    operation replaces the root. Any failure is raised as an ApplyError.
    """
    kind = op.op
    try:
        if kind == PatchOpKind.ADD:
            return add_value(doc, op.path, copy.deepcopy(op.value), schema)
        elif kind == PatchOpKind.REMOVE:
            remove_value(doc, op.path, schema)
            return doc
        elif kind == PatchOpKind.REPLACE:
            return replace_value(doc, op.path, copy.deepcopy(op.value), schema)
        elif kind == PatchOpKind.MOVE:
            return move_value(doc, op.from_, op.path, schema)
        elif kind == PatchOpKind.COPY:
            return copy_value(doc, op.from_, op.path, schema)
        elif kind == PatchOpKind.TEST:
            check_value(doc, op.path, op.value, schema)
            return doc
        else:
            raise ApplyError("Invalid op {}.".format(kind), op.path)
    except ApplyError as e:
        e.op_index = op_index
        e.op = op
        raise
    except ResolveError as e:
        raise as_apply_error(e, op_index, op) from e


def patch(root, ops, schema=None):
    """Produce a patched copy of root, applying ops in order.

    ops is a list of PatchOp or of RFC 6902 operation dicts. root is
    never modified, and if any operation fails an ApplyError is raised
    and no document is produced.
    """
    if not all(isinstance(op, PatchOp) for op in ops):
        from .rendering import decode
        ops = decode(ops)
    schema = as_schema_index(schema)

    debug("Applying %d operations", len(ops))
    doc = copy.deepcopy(root)
    for i, op in enumerate(ops):
        doc = apply_op(doc, op, schema, op_index=i)
    return doc


# Alias
apply_patch = patch
