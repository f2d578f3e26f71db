# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy
import random

from spatch import patch, diff
from spatch.patch_format import is_valid_patch
from spatch.rendering import render, decode


def check_diff_and_patch(a, b, schema=None):
    "Check that patch(a, diff(a,b)) reproduces b, and leaves a alone."
    a_before = copy.deepcopy(a)
    d = diff(a, b, schema)
    assert is_valid_patch(d)
    assert patch(a, d, schema) == b
    assert a == a_before
    return d


def check_symmetric_diff_and_patch(a, b, schema=None):
    "Check that patch(a, diff(a,b)) reproduces b and vice versa."
    check_diff_and_patch(a, b, schema)
    check_diff_and_patch(b, a, schema)


def check_wire_round_trip(a, b, schema=None, semantic=True):
    "Check that the rendered JSON form of diff(a,b) still patches a into b."
    d = diff(a, b, schema)
    wire = render(d, schema=schema, old=a, semantic=semantic)
    assert patch(a, decode(wire), schema) == b
    return wire


def random_item(rng, key, depth=0):
    "Make a random object identified by key."
    item = {"id": key}
    for name in rng.sample("abcdef", rng.randint(0, 3)):
        r = rng.random()
        if r < 0.5 or depth > 1:
            item[name] = rng.choice([0, 1, 2.5, True, False, None, "x", "y"])
        elif r < 0.75:
            item[name] = [rng.randint(0, 3) for _ in range(rng.randint(0, 3))]
        else:
            item[name] = random_item(rng, name, depth + 1)
    return item


def random_identity_list(rng, keys, n):
    "Make a list of n random items, identified by distinct keys."
    return [random_item(rng, k) for k in rng.sample(keys, n)]


def mutate_identity_list(rng, items, keys):
    """Randomly remove, edit, add and reorder items of an identity list."""
    result = [copy.deepcopy(x) for x in items if rng.random() > 0.2]
    for x in result:
        if rng.random() < 0.3:
            x.update(random_item(rng, x["id"]))
    used = set(x["id"] for x in result) | set(x["id"] for x in items)
    free = [k for k in keys if k not in used]
    for k in rng.sample(free, min(len(free), rng.randint(0, 3))):
        result.insert(rng.randint(0, len(result)), random_item(rng, k))
    if rng.random() < 0.5:
        rng.shuffle(result)
    return result


def make_rng(seed):
    return random.Random(seed)
