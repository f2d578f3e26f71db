# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy

from ..errors import DiffError, PathParseError
from ..log import debug
from ..patch_format import op_add, op_remove, op_replace, validate_patch
from ..paths import Path, Index, key_segment
from ..schema_index import ITEMS, as_schema_index, normalize_location
from ..utils import values_equal

from .config import DiffConfig
from .identity import diff_identity_lists

__all__ = ["diff", "diff_values", "diff_dicts", "diff_lists"]


def diff(old, new, schema=None, config=None):
    """Compute a patch transforming old into new.

    Arrays that the schema declares an identity key for are diffed by
    element identity, all others by position. Returns a list of
    PatchOp, empty when old and new are equal.
    """
    if config is None:
        config = DiffConfig()
    if values_equal(old, new):
        return []
    if schema is not None:
        config = copy.copy(config)
        config.schema = as_schema_index(schema)

    d = diff_values(old, new, path=Path(), config=config, location=())

    # We can turn this off for performance after the library has been well tested:
    validate_patch(d)

    debug("Computed diff with %d operations", len(d))
    return d


def diff_values(a, b, path=Path(), config=None, location=None):
    """Compute the diff of two json values at path.

    location is the schema location of path, see SchemaIndex. It is
    derived from path when not given, which can not tell numeric
    member names from array indices.
    """
    if config is None:
        config = DiffConfig()
    if location is None:
        location = normalize_location(path)

    if isinstance(a, dict) and isinstance(b, dict):
        return diff_dicts(a, b, path=path, config=config, location=location)
    if isinstance(a, list) and isinstance(b, list):
        field = config.identity_field(location)
        if field is not None:
            return diff_identity_lists(a, b, field, path=path, config=config, location=location)
        return diff_lists(a, b, path=path, config=config, location=location)
    # Scalars, or a change of type
    if values_equal(a, b):
        return []
    return [op_replace(path, b)]


def _member_path(path, key, a, b):
    """Path of member key below path, or None if the member is unchanged.

    Raises DiffError for changed members whose name can not be written
    in a path.
    """
    try:
        return path.child(key_segment(key))
    except PathParseError:
        if values_equal(a, b):
            return None
        raise DiffError("member name %r can not be addressed by a path" % key, path)


_missing = object()


def diff_dicts(a, b, path=Path(), config=None, location=None):
    """Compute diff of two dicts.

    Members of a are visited in insertion order and either recursed
    into or removed, then members only in b are added in insertion order.
    """
    if config is None:
        config = DiffConfig()

    if not isinstance(a, dict) or not isinstance(b, dict):
        raise TypeError('Arguments to diff_dicts need to be dicts, got %r and %r' % (a, b))
    if location is None:
        location = normalize_location(path)
    config.check_depth(path)

    di = []
    for key, avalue in a.items():
        bvalue = b.get(key, _missing)
        subpath = _member_path(path, key, avalue, bvalue)
        if subpath is None:
            continue
        if bvalue is _missing:
            di.append(op_remove(subpath))
        else:
            di.extend(diff_values(avalue, bvalue, path=subpath, config=config,
                                  location=location + (key,)))

    for key, bvalue in b.items():
        if key not in a:
            subpath = _member_path(path, key, _missing, bvalue)
            di.append(op_add(subpath, bvalue))

    return di


def diff_lists(a, b, path=Path(), config=None, location=None):
    """Compute positional diff of two lists.

    Items at common indices are diffed recursively. Extra items of b
    are added at ascending indices, extra items of a removed at
    descending indices.
    """
    if config is None:
        config = DiffConfig()

    if not isinstance(a, list) or not isinstance(b, list):
        raise TypeError('Arguments to diff_lists need to be lists, got %r and %r' % (a, b))
    if location is None:
        location = normalize_location(path)
    config.check_depth(path)

    n = min(len(a), len(b))
    di = []
    for i in range(n):
        di.extend(diff_values(a[i], b[i], path=path.child(Index(i)), config=config,
                              location=location + (ITEMS,)))
    for i in range(n, len(b)):
        di.append(op_add(path.child(Index(i)), b[i]))
    for i in reversed(range(n, len(a))):
        di.append(op_remove(path.child(Index(i))))
    return di
