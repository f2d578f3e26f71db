# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple

from .errors import NotFound, IndexOutOfRange, Ambiguous, TypeMismatch, InvalidUse
from .log import warning
from .paths import Key, Index, Identity, AppendMarker, APPEND, Path, as_path
from .schema_index import ITEMS, as_schema_index
from .utils import json_type_name


__all__ = ["resolve", "locate", "locate_parent", "Location", "IdentityToken"]


# Result of walking a path: the value found, the same path with identity
# selectors replaced by the indices they matched, and the schema location.
Location = namedtuple("Location", ["value", "positional", "location"])

# Last segment of a path that selects an array element by identity.
# index is None when no element matches.
IdentityToken = namedtuple("IdentityToken", ["segment", "index"])


def find_identity(array, segment, path=None):
    """Return the index of the one element selected by an identity segment.

    Returns None if no element matches, raises Ambiguous if several do.
    """
    found = None
    for i, item in enumerate(array):
        if segment.matches(item):
            if found is not None:
                raise Ambiguous(
                    "%s=%r matches elements %d and %d" % (
                        segment.field, segment.value, found, i),
                    path)
            found = i
    return found


def _check_declared_field(schema, location, segment):
    if schema is None:
        return
    declared = schema.lookup(location)
    if declared is not None and declared != segment.field:
        warning("Selecting by %r in an array whose identity key is %r",
                segment.field, declared)


def _step(current, segment, path, location, schema):
    "Take one step into current. Returns (child, positional segment, location part)."
    if isinstance(current, dict):
        if isinstance(segment, Identity):
            raise TypeMismatch(
                "identity selector needs an array, found object", path)
        name = segment.name
        if name not in current:
            raise NotFound("member %r not found" % name, path)
        return current[name], segment, name

    if isinstance(current, list):
        if isinstance(segment, Index):
            if segment.index >= len(current):
                raise IndexOutOfRange(
                    "index %d out of range for array of length %d" % (
                        segment.index, len(current)),
                    path)
            return current[segment.index], segment, ITEMS
        if isinstance(segment, Identity):
            _check_declared_field(schema, location, segment)
            i = find_identity(current, segment, path)
            if i is None:
                raise NotFound(
                    "no element with %s=%r" % (segment.field, segment.value), path)
            return current[i], Index(i), ITEMS
        if isinstance(segment, AppendMarker):
            raise InvalidUse("'-' does not refer to an existing element", path)
        raise NotFound("member %r not found, found array" % segment.name, path)

    if isinstance(segment, Identity):
        raise TypeMismatch(
            "identity selector needs an array, found %s" % json_type_name(current), path)
    raise NotFound(
        "can not step into %s" % json_type_name(current), path)


def locate(root, path, schema=None):
    """Walk path from root and return a Location.

    The located value is returned as is, not copied.
    """
    path = as_path(path)
    schema = as_schema_index(schema)
    current = root
    positional = []
    location = ()
    for i, segment in enumerate(path):
        current, pos, part = _step(current, segment, path[:i + 1], location, schema)
        positional.append(pos)
        location = location + (part,)
    return Location(current, Path(positional), location)


def resolve(root, path, schema=None):
    """Return the value at path in root.

    Raises NotFound (or IndexOutOfRange) if there is no such value,
    Ambiguous if an identity selector matches several elements.
    """
    return locate(root, path, schema).value


def locate_parent(root, path, schema=None):
    """Locate the container holding the target of a non-root path.

    Returns (container, token, parent location), where token is a member
    name for objects and, for arrays, an int index, APPEND or an
    IdentityToken. Whether the target itself exists is left to the caller.
    """
    path = as_path(path)
    if not path:
        raise InvalidUse("the document root has no parent", path)
    schema = as_schema_index(schema)
    parent = locate(root, path[:-1], schema)
    container = parent.value
    last = path.last

    if isinstance(container, dict):
        if isinstance(last, Identity):
            raise TypeMismatch(
                "identity selector needs an array, found object", path)
        return container, last.name, parent

    if isinstance(container, list):
        if isinstance(last, Index):
            return container, last.index, parent
        if isinstance(last, AppendMarker):
            return container, APPEND, parent
        if isinstance(last, Identity):
            _check_declared_field(schema, parent.location, last)
            return container, IdentityToken(last, find_identity(container, last, path)), parent
        if isinstance(last, Key):
            raise NotFound("member %r not found, found array" % last.name, path)

    raise TypeMismatch(
        "can not address %r in %s" % (last.token(), json_type_name(container)), path)
