# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Diffing of arrays whose elements are identified by a key field.

Elements of the old and new array with the same identity value are
considered the same element, regardless of position. The diff is made
of, in this order:

1. removal of elements only in the old array,
2. the recursive diffs of elements in both arrays,
3. moves restoring the new order of the elements in both arrays,
4. additions of elements only in the new array.

All operations except the moves' targets and the additions address
elements by identity selector.
"""

import bisect
import math

from ..errors import IdentityConflict
from ..log import debug, warning
from ..patch_format import op_add, op_remove, op_move
from ..paths import Path, Index, Identity, APPEND
from ..schema_index import ITEMS, normalize_location
from ..utils import scalar_key

__all__ = ["diff_identity_lists", "longest_increasing_subsequence"]


def _has_identity(item, field):
    if not isinstance(item, dict) or field not in item:
        return False
    value = item[field]
    if scalar_key(value) is None:
        return False
    return not (isinstance(value, float) and not math.isfinite(value))


def _identity_map(items, field, path):
    "Map identity keys to element indices, raising IdentityConflict on duplicates."
    m = {}
    for i, item in enumerate(items):
        value = item[field]
        k = scalar_key(value)
        if k in m:
            raise IdentityConflict(
                "elements %d and %d share %s=%r" % (m[k], i, field, value),
                path, field=field, value=value)
        m[k] = i
    return m


def longest_increasing_subsequence(seq):
    """Return the indices into seq of one longest strictly increasing subsequence."""
    # tails[k] is the index of the smallest tail of an increasing run of length k+1
    tails = []
    tail_values = []
    prev = [None] * len(seq)
    for i, x in enumerate(seq):
        k = bisect.bisect_left(tail_values, x)
        if k > 0:
            prev[i] = tails[k - 1]
        if k == len(tails):
            tails.append(i)
            tail_values.append(x)
        else:
            tails[k] = i
            tail_values[k] = x
    result = []
    i = tails[-1] if tails else None
    while i is not None:
        result.append(i)
        i = prev[i]
    result.reverse()
    return result


def diff_identity_lists(a, b, field, path=Path(), config=None, location=None):
    """Compute diff of two lists whose items are identified by field.

    If some item is not an object with a string, number or boolean
    value for field, falls back to positional diffing.
    """
    from .generic import diff_values, diff_lists
    if config is None:
        from .config import DiffConfig
        config = DiffConfig()
    if location is None:
        location = normalize_location(path)

    if not all(_has_identity(x, field) for x in a) or not all(_has_identity(x, field) for x in b):
        warning("Items of array at %r lack a scalar %r member, diffing by position",
                str(path), field)
        return diff_lists(a, b, path=path, config=config, location=location)
    config.check_depth(path)

    amap = _identity_map(a, field, path)
    bmap = _identity_map(b, field, path)

    def selector(item):
        return path.child(Identity(field, item[field]))

    di = []

    # Removals, in old order
    for item in a:
        if scalar_key(item[field]) not in bmap:
            di.append(op_remove(selector(item)))

    # Changes to matched items, in old order
    matched = []
    for item in a:
        j = bmap.get(scalar_key(item[field]))
        if j is not None:
            matched.append((item, j))
            di.extend(diff_values(item, b[j], path=selector(item), config=config,
                                  location=location + (ITEMS,)))

    # Moves. Items on a longest run already in new order stay put, each
    # other item is moved right after its predecessor in the new order.
    targets = [j for _, j in matched]
    staying = set(longest_increasing_subsequence(targets))
    current = list(targets)
    by_target = sorted(range(len(matched)), key=lambda r: targets[r])
    for rank, r in enumerate(by_target):
        if r in staying:
            continue
        item, j = matched[r]
        current.remove(j)
        if rank == 0:
            pos = 0
        else:
            pos = current.index(targets[by_target[rank - 1]]) + 1
        current.insert(pos, j)
        di.append(op_move(selector(item), path.child(Index(pos))))
    if len(matched) - len(staying):
        debug("Moved %d of %d items in array at %r",
              len(matched) - len(staying), len(matched), str(path))

    # Additions, at their final index
    for j, item in enumerate(b):
        if scalar_key(item[field]) not in amap:
            if j == len(current):
                di.append(op_add(path.child(APPEND), item))
            else:
                di.append(op_add(path.child(Index(j)), item))
            current.insert(j, j)

    return di
