# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .errors import InvalidPatch
from .paths import Path, as_path


class PatchOp(dict):
    """One operation of a patch, with attribute access to its members.

    Members are named as in RFC 6902 (op, path, from, value), with
    paths held as `Path` objects. Since 'from' is a keyword in Python,
    it is available as the attribute `from_`.
    """
    def __getattr__(self, name):
        if name.startswith("__") and name.endswith("__"):
            return self.__getattribute__(name)
        if name == "from_":
            name = "from"
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        if name == "from_":
            name = "from"
        self[name] = value


class PatchOpKind:
    "Collection of valid values for the op member of patch operations."
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"

    ALL = (ADD, REMOVE, REPLACE, MOVE, COPY, TEST)

    # Kinds carrying a value, and kinds carrying a source path
    WITH_VALUE = (ADD, REPLACE, TEST)
    WITH_FROM = (MOVE, COPY)


def op_add(path, value):
    "Create an operation adding value at path."
    return PatchOp(op=PatchOpKind.ADD, path=as_path(path), value=value)

def op_remove(path):
    "Create an operation removing the value at path."
    return PatchOp(op=PatchOpKind.REMOVE, path=as_path(path))

def op_replace(path, value):
    "Create an operation replacing the value at path with value."
    return PatchOp(op=PatchOpKind.REPLACE, path=as_path(path), value=value)

def op_move(from_, path):
    "Create an operation moving the value at from_ to path."
    return PatchOp([("op", PatchOpKind.MOVE), ("from", as_path(from_)), ("path", as_path(path))])

def op_copy(from_, path):
    "Create an operation copying the value at from_ to path."
    return PatchOp([("op", PatchOpKind.COPY), ("from", as_path(from_)), ("path", as_path(path))])

def op_test(path, value):
    "Create an operation asserting that the value at path equals value."
    return PatchOp(op=PatchOpKind.TEST, path=as_path(path), value=value)


def is_valid_patch(ops):
    """Checks whether a patch (list of operations) is well formed.

    Returns a boolean indicating the well-formedness of the patch.
    """
    try:
        validate_patch(ops)
    except InvalidPatch:
        return False
    return True


def validate_patch(ops):
    """Check whether a patch (list of operations) is well formed.

    Raises an InvalidPatch error if not well formed.
    """
    if not isinstance(ops, list):
        raise InvalidPatch("Patch must be a list of operations, got %s." % type(ops).__name__)
    for i, e in enumerate(ops):
        validate_patch_op(e, i)


def validate_patch_op(e, index=None):
    """Check that e is a well formed patch operation.

    Members not used by the operation are allowed and ignored.
    Raises an InvalidPatch error if not well formed.
    """
    where = "" if index is None else "Operation %d: " % index
    if not isinstance(e, PatchOp):
        raise InvalidPatch("%sexpected a patch operation, got %r." % (where, e))
    op = e.get("op")
    if op not in PatchOpKind.ALL:
        raise InvalidPatch("%sunknown op %r." % (where, op))
    if not isinstance(e.get("path"), Path):
        raise InvalidPatch("%s%s needs a path." % (where, op))
    if op in PatchOpKind.WITH_VALUE and "value" not in e:
        raise InvalidPatch("%s%s needs a value." % (where, op))
    if op in PatchOpKind.WITH_FROM and not isinstance(e.get("from"), Path):
        raise InvalidPatch("%s%s needs a from path." % (where, op))
