# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Conversion between patches and their RFC 6902 JSON form.

Rendering can rewrite paths while doing so: with a schema, positional
steps into identity-keyed arrays become identity selectors, and in
non-semantic mode identity selectors become positional indices. Paths
are rewritten against the document state each operation sees, which
takes the document the patch applies to.
"""

import copy
import json

from .errors import InvalidPatch, PathParseError, Ambiguous, ResolveError, as_apply_error
from .log import debug
from .patch_format import PatchOp, PatchOpKind, validate_patch
from .patching import apply_op
from .paths import Path, Identity, parse_path, serialize_path
from .resolving import locate, find_identity
from .schema_index import ITEMS, as_schema_index
from .utils import scalar_key


__all__ = ["render", "decode", "dumps"]


def _decode_path(raw, name, where):
    if not isinstance(raw, str):
        raise InvalidPatch("%s%s must be a string, got %r." % (where, name, raw))
    try:
        return parse_path(raw)
    except PathParseError as e:
        raise InvalidPatch("%sinvalid %s: %s" % (where, name, e))


def decode_op(raw, index=None):
    "Convert one RFC 6902 operation dict into a PatchOp."
    if isinstance(raw, PatchOp):
        return raw
    where = "" if index is None else "Operation %d: " % index
    if not isinstance(raw, dict):
        raise InvalidPatch("%sexpected an object, got %r." % (where, raw))
    kind = raw.get("op")
    if kind not in PatchOpKind.ALL:
        raise InvalidPatch("%sunknown op %r." % (where, kind))
    if "path" not in raw:
        raise InvalidPatch("%s%s needs a path." % (where, kind))

    e = PatchOp(op=kind)
    if kind in PatchOpKind.WITH_FROM:
        if "from" not in raw:
            raise InvalidPatch("%s%s needs a from path." % (where, kind))
        e["from"] = _decode_path(raw["from"], "from", where)
    e["path"] = _decode_path(raw["path"], "path", where)
    if kind in PatchOpKind.WITH_VALUE:
        if "value" not in raw:
            raise InvalidPatch("%s%s needs a value." % (where, kind))
        e["value"] = raw["value"]
    return e


def decode(patch_document):
    """Decode a patch document into a list of PatchOp.

    Accepts a list of operation dicts, or its JSON text.
    Raises InvalidPatch on malformed input.
    """
    if isinstance(patch_document, (str, bytes)):
        try:
            patch_document = json.loads(patch_document)
        except ValueError as e:
            raise InvalidPatch("Patch is not valid JSON: %s" % e)
    if not isinstance(patch_document, list):
        raise InvalidPatch(
            "Patch must be a list of operations, got %s." % type(patch_document).__name__)
    ops = [decode_op(raw, i) for i, raw in enumerate(patch_document)]
    validate_patch(ops)
    return ops


def _unique_identity(array, index, field):
    "Identity segment for array[index], or None if it has no usable identity."
    item = array[index]
    if not isinstance(item, dict) or scalar_key(item.get(field)) is None:
        return None
    try:
        segment = Identity(field, item[field])
    except (TypeError, ValueError):
        return None
    try:
        find_identity(array, segment)
    except Ambiguous:
        return None
    return segment


def rewrite_path(doc, path, schema=None, semantic=True, keep_last=False):
    """Rewrite a path against doc for rendering.

    The path, except its last segment if keep_last, must resolve in doc.
    """
    if not path or (semantic and schema is None):
        return path
    if keep_last:
        head, tail = path[:-1], path[-1:]
    else:
        head, tail = path, Path()

    positional = locate(doc, head, schema).positional
    segments = []
    location = ()
    current = doc
    for written, step in zip(head, positional):
        if isinstance(current, list):
            segment = step
            if semantic:
                field = schema.lookup(location)
                identity = None
                if field is not None:
                    identity = _unique_identity(current, step.index, field)
                if identity is not None:
                    segment = identity
                elif isinstance(written, Identity):
                    segment = written
            segments.append(segment)
            location = location + (ITEMS,)
            current = current[step.index]
        else:
            segments.append(step)
            location = location + (step.name,)
            current = current[step.name]
    return Path(segments) + tail


def render(ops, schema=None, old=None, semantic=True):
    """Render a patch as a list of RFC 6902 operation dicts.

    Without old, paths are serialized as written. Given the document
    old the patch applies to, paths are rewritten: semantic=True
    addresses elements of identity-keyed arrays by identity selector,
    semantic=False addresses all array elements by index. The last
    segment of add, move and copy targets is kept as written.
    """
    if not all(isinstance(op, PatchOp) for op in ops):
        ops = decode(ops)
    schema = as_schema_index(schema)

    doc = None
    if old is not None:
        doc = copy.deepcopy(old)

    rendered = []
    for i, op in enumerate(ops):
        path = op.path
        from_ = op.get("from")
        if doc is not None:
            try:
                if op.op in (PatchOpKind.REMOVE, PatchOpKind.REPLACE, PatchOpKind.TEST):
                    path = rewrite_path(doc, path, schema, semantic)
                if from_ is not None:
                    from_ = rewrite_path(doc, from_, schema, semantic)
            except ResolveError as e:
                raise as_apply_error(e, i, op) from e
            doc = apply_op(doc, op, schema, op_index=i)
            if op.op in (PatchOpKind.ADD, PatchOpKind.MOVE, PatchOpKind.COPY):
                # Inserting the target leaves its ancestors in place
                path = rewrite_path(doc, path, schema, semantic, keep_last=True)

        r = {"op": op.op}
        if from_ is not None:
            r["from"] = serialize_path(from_)
        r["path"] = serialize_path(path)
        if "value" in op:
            r["value"] = op.value
        rendered.append(r)

    debug("Rendered %d operations", len(rendered))
    return rendered


def dumps(ops, schema=None, old=None, semantic=True, indent=2, **kwargs):
    "Render a patch as JSON text."
    return json.dumps(render(ops, schema=schema, old=old, semantic=semantic),
                      indent=indent, **kwargs)
