# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import pytest

from spatch import diff, compute_diff, DiffConfig
from spatch.diffing import DEFAULT_MAX_DEPTH
from spatch.diffing.generic import diff_dicts, diff_lists
from spatch.errors import DiffError, NestingTooDeep
from spatch.patch_format import op_add, op_remove, op_replace
from spatch.paths import Path, Index
from spatch.rendering import render
from spatch.utils import values_equal

from .utils import check_diff_and_patch, check_symmetric_diff_and_patch


def test_diff_equal_values_is_empty():
    for x in [None, True, 0, 1.5, "", "abc", [], {}, [1, [2, {"a": None}]],
              {"a": {"b": [1, 2]}, "c": "d"}]:
        assert diff(x, x) == []
        assert diff(x, x, {"type": "array", "indexKey": "id"}) == []


def test_diff_scalars():
    assert diff(1, 2) == [op_replace("", 2)]
    assert diff("a", "b") == [op_replace("", "b")]
    assert diff(None, False) == [op_replace("", False)]
    # Booleans are not numbers
    assert diff(True, 1) == [op_replace("", 1)]
    assert diff(0, False) == [op_replace("", False)]
    # but 1 and 1.0 are the same number
    assert diff(1, 1.0) == []


def test_diff_type_changes_replace_whole_value():
    assert diff({"a": 1}, [1]) == [op_replace("", [1])]
    assert diff({"a": [1]}, {"a": {"0": 1}}) == [op_replace("/a", {"0": 1})]
    assert diff({"a": "1"}, {"a": 1}) == [op_replace("/a", 1)]


def test_diff_dicts_order():
    a = {"a": 1, "b": 2, "c": 3}
    b = {"b": 2, "c": 4, "d": 5, "a0": 6}
    assert diff(a, b) == [
        op_remove("/a"),
        op_replace("/c", 4),
        op_add("/d", 5),
        op_add("/a0", 6),
    ]
    check_symmetric_diff_and_patch(a, b)


def test_diff_nested_dicts():
    a = {"x": {"y": {"z": 1, "w": 2}}}
    b = {"x": {"y": {"z": 1, "w": 3}}}
    assert diff(a, b) == [op_replace("/x/y/w", 3)]


def test_diff_escapes_member_names():
    a = {"a/b": 1, "c~d": {"e": 1}}
    b = {"a/b": 2, "c~d": {"e": 2}}
    d = diff(a, b)
    assert [r["path"] for r in render(d)] == ["/a~1b", "/c~0d/e"]
    check_diff_and_patch(a, b)


def test_diff_members_named_like_indices():
    a = {"0": 1, "-": 2, "7": [1]}
    b = {"0": 3, "-": 4, "7": [1, 2]}
    d = check_diff_and_patch(a, b)
    assert [r["path"] for r in render(d)] == ["/0", "/-", "/7/1"]


def test_diff_unaddressable_member_names():
    # Unchanged members are fine
    assert diff({"": 1, "a": 1}, {"": 1, "a": 2}) == [op_replace("/a", 2)]
    with pytest.raises(DiffError):
        diff({"": 1}, {"": 2})
    with pytest.raises(DiffError):
        diff({"": 1}, {})
    with pytest.raises(DiffError):
        diff({}, {"[x=1]": 1})


def test_diff_lists_positional():
    assert diff([1, 2, 3], [1, 5]) == [op_replace("/1", 5), op_remove("/2")]
    assert diff([1], [1, 2, 3]) == [op_add("/1", 2), op_add("/2", 3)]
    assert diff([1, 2, 3], [1]) == [op_remove("/2"), op_remove("/1")]
    assert diff([[1, 2]], [[1, 3]]) == [op_replace("/0/1", 3)]
    check_symmetric_diff_and_patch([1, 2, 3, 4], [4, 3])
    check_symmetric_diff_and_patch([], [{"a": 1}, None])


def test_diff_without_schema_is_positional(list_base, list_changed):
    # Identity keyed items are still addressed by index without a schema
    assert render(diff(list_base, list_changed)) == [
        {"op": "replace", "path": "/list/1/value", "value": 200},
    ]


def test_diff_does_not_modify_inputs():
    a = {"a": [1, {"b": 2}], "c": {"d": None}}
    b = {"a": [{"b": 2}], "c": {"e": 1}}
    check_symmetric_diff_and_patch(a, b)


def test_diff_lists_and_dicts_type_checks():
    with pytest.raises(TypeError):
        diff_dicts([], {})
    with pytest.raises(TypeError):
        diff_lists({}, [])


def test_diff_lists_below_path():
    d = diff_lists([1], [2], path=Path(["a", 0]))
    assert d == [op_replace(Path(["a", Index(0), Index(0)]), 2)]


def _nested(depth, leaf):
    x = leaf
    for _ in range(depth):
        x = {"a": [x]}
    return x


def test_diff_depth_limit():
    a = _nested(10, 1)
    b = _nested(10, 2)
    # 10 objects and 10 arrays
    assert len(diff(a, b)[0].path) == 20
    assert len(diff(a, b, config=DiffConfig(max_depth=20))) == 1
    with pytest.raises(NestingTooDeep) as exc:
        diff(a, b, config=DiffConfig(max_depth=19))
    assert len(exc.value.path) == 19
    assert isinstance(exc.value, DiffError)


def test_diff_default_depth_limit():
    a = _nested(DEFAULT_MAX_DEPTH, 1)
    b = _nested(DEFAULT_MAX_DEPTH, 2)
    with pytest.raises(NestingTooDeep):
        diff(a, b)


def test_diff_equal_documents_deeper_than_limit():
    a = _nested(DEFAULT_MAX_DEPTH, 1)
    assert diff(a, _nested(DEFAULT_MAX_DEPTH, 1)) == []
    assert diff(a, a, config=DiffConfig(max_depth=1)) == []


def test_diff_config():
    with pytest.raises(ValueError):
        DiffConfig(max_depth=0)
    with pytest.raises(ValueError):
        DiffConfig(max_depth=True)
    config = DiffConfig(schema={"properties": {"l": {"type": "array", "indexKey": "id"}}})
    assert config.identity_field(Path(["l"])) == "id"
    assert config.identity_field(Path(["m"])) is None
    assert DiffConfig().identity_field(Path(["l"])) is None


def test_diff_schema_argument_overrides_config(list_base, list_changed, list_schema):
    config = DiffConfig()
    d = diff(list_base, list_changed, list_schema, config=config)
    assert render(d)[0]["path"] == "/list/[id=item-2]/value"
    # The passed config is left alone
    assert config.schema is None


def test_compute_diff_alias():
    assert compute_diff is diff


def test_values_equal():
    assert values_equal({"a": [1, 2.0]}, {"a": [1.0, 2]})
    assert not values_equal([True], [1])
    assert not values_equal({"a": None}, {"b": None})
    assert not values_equal([1, 2], [1])
    assert not values_equal({"a": 1}, [1])
    assert not values_equal(None, 0)
    assert values_equal(None, None)
