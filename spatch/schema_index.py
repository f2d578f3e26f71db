# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Identity keys of arrays, as declared by a JSON Schema.

An array node in a schema may declare which member of its items
identifies them::

    {
      "type": "object",
      "properties": {
        "list": {"type": "array", "indexKey": "id", "items": {...}}
      }
    }

`SchemaIndex` collects these declarations into a mapping from array
location to field name. A location is a tuple of object member names,
with `ITEMS` standing in for "any element of the enclosing array".
"""

from jsonschema.exceptions import SchemaError as JsonSchemaError
from jsonschema.validators import validator_for

from .errors import InvalidIndexKeyDeclaration, InvalidSchemaDocument
from .log import debug
from .paths import Path, Key, Index, Identity, AppendMarker


__all__ = ["SchemaIndex", "ITEMS", "INDEX_KEY_PROP_NAME", "as_schema_index"]


# Name of the schema keyword declaring the identity field of array items
INDEX_KEY_PROP_NAME = "indexKey"

# Keywords whose subschemas we do not follow
_unfollowed_keywords = ("$ref", "allOf", "anyOf", "oneOf", "not", "if", "then", "else")


class _Items(object):
    "Wildcard location component for the elements of an array."

    def __repr__(self):
        return "ITEMS"


ITEMS = _Items()


def normalize_location(location):
    """Turn a Path or sequence into a schema location tuple.

    Index and identity segments step into array elements and
    become ITEMS, keys become their member names. A Path can not tell
    a numeric member name from an array index, so code walking a
    document builds location tuples from the containers it visits.
    """
    if isinstance(location, Path):
        loc = []
        for s in location:
            if isinstance(s, (Index, Identity)):
                loc.append(ITEMS)
            elif isinstance(s, (Key, AppendMarker)):
                loc.append(s.name)
            else:
                raise TypeError("Unexpected path segment %r" % (s,))
        return tuple(loc)
    return tuple(location)


def _declares_array(node):
    t = node.get("type")
    if t == "array":
        return True
    if isinstance(t, list) and "array" in t:
        return True
    return t is None and isinstance(node.get("items"), dict)


class SchemaIndex(object):
    """Read-only mapping from array locations to identity field names."""

    def __init__(self, entries=None):
        self._entries = dict(entries or {})

    @classmethod
    def build(cls, schema, validate=True):
        """Collect the indexKey declarations of a schema document.

        If `validate` is true the schema document is first checked
        against its metaschema. Subschemas behind references or
        combinators are not followed, arrays there get no entry and
        are addressed by position.
        """
        if schema is None:
            return cls()
        if not isinstance(schema, dict):
            raise InvalidSchemaDocument(
                "Schema must be an object, got %s" % type(schema).__name__)
        if validate:
            try:
                validator_for(schema).check_schema(schema)
            except JsonSchemaError as e:
                raise InvalidSchemaDocument("Invalid schema document: %s" % e.message)

        entries = {}
        # Worklist of (location, schema node), avoids recursion on deep schemas
        stack = [((), schema)]
        while stack:
            location, node = stack.pop()
            if not isinstance(node, dict):
                continue

            skipped = [k for k in _unfollowed_keywords if k in node]
            if skipped:
                debug("Not following %s in schema at %r", ", ".join(skipped), location)

            if INDEX_KEY_PROP_NAME in node:
                entries[location] = _checked_index_key(node, location)

            properties = node.get("properties")
            if isinstance(properties, dict):
                for name, subschema in properties.items():
                    stack.append((location + (name,), subschema))

            items = node.get("items")
            if isinstance(items, dict):
                stack.append((location + (ITEMS,), items))

        debug("Built schema index with %d identity-keyed arrays", len(entries))
        return cls(entries)

    def lookup(self, location):
        "Return the identity field declared for the array at location, or None."
        return self._entries.get(normalize_location(location))

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        return bool(self._entries)

    def __iter__(self):
        return iter(self._entries.items())

    def __repr__(self):
        return "SchemaIndex(%r)" % (self._entries,)


def _checked_index_key(node, location):
    field = node[INDEX_KEY_PROP_NAME]
    if not isinstance(field, str) or not field:
        raise InvalidIndexKeyDeclaration(
            "%s must be a non-empty string, got %r" % (INDEX_KEY_PROP_NAME, field),
            _location_str(location))
    if "=" in field:
        raise InvalidIndexKeyDeclaration(
            "%s can not contain '=': %r" % (INDEX_KEY_PROP_NAME, field),
            _location_str(location))
    if "type" in node and not _declares_array(node):
        raise InvalidIndexKeyDeclaration(
            "%s declared on a node of type %r, expected an array" % (
                INDEX_KEY_PROP_NAME, node["type"]),
            _location_str(location))
    return field


def _location_str(location):
    return "/" + "/".join("*" if p is ITEMS else p for p in location)


def as_schema_index(schema):
    """Accept None, a SchemaIndex, or a raw schema document."""
    if schema is None or isinstance(schema, SchemaIndex):
        return schema
    return SchemaIndex.build(schema)
