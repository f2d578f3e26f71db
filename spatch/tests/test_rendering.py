# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json

import pytest

from spatch import diff, patch
from spatch.errors import InvalidPatch, TargetNotFound, TestFailed
from spatch.patch_format import PatchOp, op_add, op_remove, op_replace, op_move, op_test
from spatch.paths import parse_path, Identity
from spatch.rendering import render, decode, decode_op, dumps, rewrite_path


def test_decode(list_schema):
    text = '[{"op": "replace", "path": "/list/[id=item-2]/value", "value": 200}]'
    ops = decode(text)
    assert ops == [op_replace("/list/[id=item-2]/value", 200)]
    assert isinstance(ops[0], PatchOp)
    assert ops[0].path[1] == Identity("id", "item-2")
    assert decode(text.encode("utf-8")) == ops
    assert decode(json.loads(text)) == ops


def test_decode_keeps_patch_ops():
    e = op_remove("/a")
    assert decode([e])[0] is e


def test_decode_drops_unknown_members():
    ops = decode([{"op": "remove", "path": "/a", "value": 1, "extra": True}])
    assert ops == [op_remove("/a")]
    ops = decode([{"op": "move", "from": "/a", "path": "/b", "value": 1}])
    assert ops == [op_move("/a", "/b")]


@pytest.mark.parametrize("raw", [
    "not json",
    "{}",
    '{"op": "add"}',
    [1],
    [{"path": "/a"}],
    [{"op": "jump", "path": "/a"}],
    [{"op": "add", "value": 1}],
    [{"op": "add", "path": "/a"}],
    [{"op": "replace", "path": "/a"}],
    [{"op": "test", "path": "/a"}],
    [{"op": "move", "path": "/a"}],
    [{"op": "copy", "path": "/a", "from": 3}],
    [{"op": "remove", "path": 1}],
    [{"op": "remove", "path": "a"}],
    [{"op": "remove", "path": "/a//b"}],
    [{"op": "remove", "path": "/[id]"}],
])
def test_decode_errors(raw):
    with pytest.raises(InvalidPatch):
        decode(raw)


def test_decode_error_names_operation():
    with pytest.raises(InvalidPatch) as exc:
        decode([{"op": "remove", "path": "/a"}, {"op": "remove", "path": "x"}])
    assert "Operation 1" in str(exc.value)
    with pytest.raises(InvalidPatch) as exc:
        decode_op({"op": "remove"})
    assert "Operation" not in str(exc.value)


def test_render_as_written():
    ops = [
        op_move("/a", "/b"),
        op_add("/l/[id=x]", {"id": "x"}),
        op_test("/a~1b", 1),
    ]
    assert render(ops) == [
        {"op": "move", "from": "/a", "path": "/b"},
        {"op": "add", "path": "/l/[id=x]", "value": {"id": "x"}},
        {"op": "test", "path": "/a~1b", "value": 1},
    ]
    assert list(render(ops)[0].keys()) == ["op", "from", "path"]


def test_render_semantic_from_positions(list_base, list_schema):
    ops = [op_replace("/list/1/value", 200), op_remove("/list/0")]
    assert render(ops, list_schema, old=list_base) == [
        {"op": "replace", "path": "/list/[id=item-2]/value", "value": 200},
        {"op": "remove", "path": "/list/[id=item-1]"},
    ]


def test_render_positional_from_identities(list_base, list_schema):
    ops = [op_remove("/list/[id=item-1]"), op_replace("/list/[id=item-2]/value", 200)]
    assert render(ops, list_schema, old=list_base, semantic=False) == [
        {"op": "remove", "path": "/list/0"},
        {"op": "replace", "path": "/list/0/value", "value": 200},
    ]


def test_render_positional_without_schema(list_base):
    ops = [op_replace("/list/[id=item-2]/value", 200)]
    assert render(ops, old=list_base, semantic=False) == [
        {"op": "replace", "path": "/list/1/value", "value": 200},
    ]
    # Semantic rendering without a schema leaves paths alone
    assert render(ops, old=list_base) == [
        {"op": "replace", "path": "/list/[id=item-2]/value", "value": 200},
    ]


def test_render_keeps_target_of_insertions(list_base, list_schema):
    ops = [
        op_add("/list/0", {"id": "item-0"}),
        op_add("/list/[id=item-3]", {"id": "item-3"}),
        op_move("/list/2", "/list/-"),
        op_add("/list/[id=item-1]/note", "x"),
    ]
    assert render(ops, list_schema, old=list_base) == [
        {"op": "add", "path": "/list/0", "value": {"id": "item-0"}},
        {"op": "add", "path": "/list/[id=item-3]", "value": {"id": "item-3"}},
        {"op": "move", "from": "/list/[id=item-2]", "path": "/list/-"},
        {"op": "add", "path": "/list/[id=item-1]/note", "value": "x"},
    ]


def test_render_ambiguous_identities_stay_positional(list_schema):
    doc = {"list": [{"id": 1}, {"id": 1}, {"id": 2}]}
    ops = [op_replace("/list/0", {"id": 3}), op_replace("/list/1", {"id": 4})]
    # The second op sees the first one applied
    assert render(ops, list_schema, old=doc) == [
        {"op": "replace", "path": "/list/0", "value": {"id": 3}},
        {"op": "replace", "path": "/list/[id=1]", "value": {"id": 4}},
    ]


def test_render_undeclared_identity_is_kept():
    doc = {"list": [{"id": "a"}, {"id": "b"}]}
    schema = {"properties": {"other": {"type": "array", "indexKey": "id"}}}
    ops = [op_remove("/list/[id=b]")]
    assert render(ops, schema, old=doc) == [{"op": "remove", "path": "/list/[id=b]"}]


def test_render_nested(catalog_base, catalog_changed, catalog_schema):
    d = diff(catalog_base, catalog_changed, catalog_schema)
    semantic = render(d, catalog_schema, old=catalog_base)
    assert semantic == render(d)
    positional = render(d, catalog_schema, old=catalog_base, semantic=False)
    assert [r["path"] for r in positional] == [
        "/title",
        "/products/1",
        "/products/0/variants/0",
        "/products/0/variants/0/stock",
        "/products/1/price",
        "/products/1/tags/1",
        "/products/1/variants/-",
        "/products/1",
        "/products/1",
        "/history/3",
        "/updated",
    ]
    assert positional[7]["from"] == "/products/0"
    assert patch(catalog_base, positional) == catalog_changed


def test_render_failing_patch(list_base, list_schema):
    with pytest.raises(TargetNotFound) as exc:
        render([op_remove("/list/0"), op_remove("/list/[id=item-1]")], list_schema, old=list_base)
    assert exc.value.op_index == 1
    with pytest.raises(TestFailed):
        render([op_test("/list/0/value", 0)], list_schema, old=list_base)


def test_render_does_not_modify_old(list_base, list_schema):
    before = json.dumps(list_base)
    render([op_remove("/list/0")], list_schema, old=list_base)
    assert json.dumps(list_base) == before


def test_render_accepts_wire_operations(list_base, list_schema):
    ops = [{"op": "remove", "path": "/list/1"}]
    assert render(ops, list_schema, old=list_base) == [
        {"op": "remove", "path": "/list/[id=item-2]"},
    ]


def test_rewrite_path(list_base, list_schema):
    p = parse_path("/list/0/value")
    assert rewrite_path(list_base, p, list_schema) == parse_path("/list/[id=item-1]/value")
    assert rewrite_path(list_base, p) is p
    assert rewrite_path(list_base, parse_path(""), list_schema) == parse_path("")
    assert rewrite_path(list_base, parse_path("/list/[id=item-2]"), list_schema,
                        semantic=False) == parse_path("/list/1")
    assert rewrite_path(list_base, parse_path("/list/7"), list_schema,
                        keep_last=True) == parse_path("/list/7")


def test_dumps(list_base, list_changed, list_schema):
    d = diff(list_base, list_changed, list_schema)
    text = dumps(d, list_schema, old=list_base)
    assert json.loads(text) == [
        {"op": "replace", "path": "/list/[id=item-2]/value", "value": 200},
    ]
    assert "\n" in text
    assert "\n" not in dumps(d, indent=None)
    assert patch(list_base, decode(text), list_schema) == list_changed


def test_rewrite_path_under_numeric_member_name():
    schema = {"properties": {"2024": {"type": "array", "indexKey": "id"}}}
    doc = {"2024": [{"id": "a", "v": 1}, {"id": "b", "v": 2}]}
    assert rewrite_path(doc, parse_path("/2024/1/v"), schema) == parse_path("/2024/[id=b]/v")
    assert render([op_remove("/2024/0")], schema, old=doc) == [
        {"op": "remove", "path": "/2024/[id=a]"},
    ]
