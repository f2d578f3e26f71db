# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Semantic paths: JSON Pointer (RFC 6901) extended with identity selectors.

A path is written as a sequence of '/'-separated segments::

    /list/[id=item-2]/value

where each segment is an object member name, an array index, the
append marker ``-``, or an identity selector ``[field=value]`` that
picks the one array element whose ``field`` equals ``value``.
"""

import json
import math
import re

from .errors import (
    MissingLeadingSlash, EmptySegment, InvalidEscape,
    MalformedSelector,
)
from .utils import scalar_key


__all__ = [
    "Key", "Index", "Identity", "AppendMarker", "APPEND",
    "Path", "key_segment", "parse_path", "serialize_path", "as_path",
]


r_index = re.compile(r"^(0|[1-9][0-9]*)$")
r_number = re.compile(r"^-?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][-+]?[0-9]+)?$")
r_escape = re.compile(r"~(?![01])")


def escape_token(token):
    "Escape a token for use in a path, '~' -> '~0' and '/' -> '~1'."
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token, text=None, offset=0):
    "Undo escape_token, rejecting any '~' not followed by '0' or '1'."
    m = r_escape.search(token)
    if m is not None:
        raise InvalidEscape(
            "'~' must be followed by '0' or '1'", text, offset + m.start())
    return token.replace("~1", "/").replace("~0", "~")


class Segment(object):
    """Base class of path segments. Segments are immutable values."""
    __slots__ = ()

    def _key(self):
        raise NotImplementedError

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def __setattr__(self, name, value):
        raise AttributeError("path segments are immutable")


class Key(Segment):
    """An object member name."""
    __slots__ = ("name",)

    def __init__(self, name):
        if not isinstance(name, str):
            raise TypeError("Key name must be a string, not %r" % (name,))
        if not name:
            raise EmptySegment("object member names can not be empty", name, 0)
        if name == "-" or r_index.match(name):
            raise ValueError(
                "%r is written as an index or append marker, use key_segment()" % name)
        if name.startswith("["):
            raise MalformedSelector(
                "member names can not start with '['", name, 0)
        object.__setattr__(self, "name", name)

    def _key(self):
        return self.name

    def token(self):
        return escape_token(self.name)

    def __repr__(self):
        return "Key(%r)" % self.name


class Index(Segment):
    """A non-negative array index."""
    __slots__ = ("index",)

    def __init__(self, index):
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError("Index must be an int, not %r" % (index,))
        if index < 0:
            raise ValueError("Index must be non-negative, got %d" % index)
        object.__setattr__(self, "index", index)

    def _key(self):
        return self.index

    @property
    def name(self):
        "The object member name this index denotes when applied to an object."
        return str(self.index)

    def token(self):
        return str(self.index)

    def __repr__(self):
        return "Index(%d)" % self.index


class AppendMarker(Segment):
    """The '-' token: the position past the last array element."""
    __slots__ = ()

    name = "-"

    def _key(self):
        return None

    def token(self):
        return "-"

    def __repr__(self):
        return "APPEND"


APPEND = AppendMarker()


class Identity(Segment):
    """Selects the array element whose `field` equals `value`."""
    __slots__ = ("field", "value")

    def __init__(self, field, value):
        if not isinstance(field, str) or not field:
            raise MalformedSelector(
                "selector field must be a non-empty string, not %r" % (field,))
        if "=" in field:
            raise MalformedSelector("selector field can not contain '='", field)
        if scalar_key(value) is None:
            raise TypeError(
                "selector value must be a string, number or boolean, not %r" % (value,))
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("selector value must be a finite number")
        object.__setattr__(self, "field", field)
        object.__setattr__(self, "value", value)

    def _key(self):
        return (self.field, scalar_key(self.value))

    def matches(self, item):
        "Whether an array element is selected by this segment."
        if not isinstance(item, dict) or self.field not in item:
            return False
        return scalar_key(item[self.field]) == scalar_key(self.value)

    def token(self):
        return "[%s=%s]" % (escape_token(self.field), escape_token(_format_value(self.value)))

    def __repr__(self):
        return "Identity(%r, %r)" % (self.field, self.value)


def key_segment(name):
    """Return the segment addressing object member `name`.

    Member names spelled like an index or '-' are represented by
    `Index` and `APPEND`, which address members when applied to objects.
    """
    if name == "-":
        return APPEND
    if r_index.match(name):
        return Index(int(name))
    return Key(name)


def _segment_from_object(x):
    if isinstance(x, Segment):
        return x
    if isinstance(x, bool):
        raise TypeError("Invalid path segment %r" % (x,))
    if isinstance(x, int):
        return Index(x)
    if isinstance(x, str):
        return key_segment(x)
    raise TypeError("Invalid path segment %r" % (x,))


class Path(tuple):
    """An immutable sequence of segments. The empty path is the document root."""

    def __new__(cls, segments=()):
        return super(Path, cls).__new__(cls, [_segment_from_object(s) for s in segments])

    def child(self, *segments):
        return Path(tuple(self) + segments)

    @property
    def parent(self):
        if not self:
            return None
        return Path(self[:-1])

    @property
    def last(self):
        return self[-1] if self else None

    @property
    def is_root(self):
        return not self

    def is_prefix_of(self, other):
        return len(self) <= len(other) and tuple(other[:len(self)]) == tuple(self)

    def is_proper_prefix_of(self, other):
        return len(self) < len(other) and self.is_prefix_of(other)

    def has_identity(self):
        return any(isinstance(s, Identity) for s in self)

    def __getitem__(self, item):
        r = super(Path, self).__getitem__(item)
        if isinstance(item, slice):
            return Path(r)
        return r

    def __add__(self, other):
        return Path(tuple(self) + tuple(other))

    def __eq__(self, other):
        if isinstance(other, str):
            return False
        return tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return tuple.__hash__(self)

    def __str__(self):
        return serialize_path(self)

    def __repr__(self):
        return "Path(%r)" % serialize_path(self)


def _format_value(value):
    "Format a selector value so that _parse_value reads it back unchanged."
    if isinstance(value, bool):
        return "true" if value else "false"
    if not isinstance(value, str):
        return json.dumps(value)
    if (not value or value.startswith('"') or value in ("true", "false")
            or r_number.match(value)):
        return json.dumps(value)
    return value


def _parse_value(raw, text, offset):
    if raw.startswith('"'):
        try:
            value = json.loads(raw)
        except ValueError:
            raise MalformedSelector("invalid quoted selector value", text, offset)
        if not isinstance(value, str):
            raise MalformedSelector("invalid quoted selector value", text, offset)
        return value
    if raw == "true":
        return True
    if raw == "false":
        return False
    if r_number.match(raw):
        value = json.loads(raw)
        if isinstance(value, float) and not math.isfinite(value):
            raise MalformedSelector("selector number out of range", text, offset)
        return value
    return raw


def _parse_selector(token, text, offset):
    if not token.endswith("]") or len(token) < 2:
        raise MalformedSelector("unterminated '[' selector", text, offset)
    body = token[1:-1]
    if "=" not in body:
        raise MalformedSelector("selector needs the form [field=value]", text, offset)
    raw_field, raw_value = body.split("=", 1)
    if not raw_field:
        raise MalformedSelector("selector is missing a field name", text, offset + 1)
    if not raw_value:
        raise MalformedSelector("selector is missing a value", text, offset + 2 + len(raw_field))
    field = unescape_token(raw_field, text, offset + 1)
    value_offset = offset + 2 + len(raw_field)
    raw_value = unescape_token(raw_value, text, value_offset)
    return Identity(field, _parse_value(raw_value, text, value_offset))


def parse_path(text):
    """Parse the textual form of a path into a `Path`.

    Raises a subclass of PathParseError on malformed input.
    """
    if isinstance(text, Path):
        return text
    if not isinstance(text, str):
        raise TypeError("path must be a string, not %r" % (text,))
    if text == "":
        return Path()
    if not text.startswith("/"):
        raise MissingLeadingSlash("expected a path starting with '/' or empty input", text, 0)

    segments = []
    offset = 1
    for token in text[1:].split("/"):
        if not token:
            raise EmptySegment("empty path segment", text, offset)
        if token.startswith("["):
            segments.append(_parse_selector(token, text, offset))
        elif token == "-":
            segments.append(APPEND)
        elif r_index.match(token):
            segments.append(Index(int(token)))
        else:
            segments.append(key_segment(unescape_token(token, text, offset)))
        offset += len(token) + 1
    return Path(segments)


def serialize_path(path):
    "Serialize a path to its textual form. Inverse of parse_path."
    return "".join("/" + s.token() for s in as_path(path))


def as_path(path):
    "Accept a Path, a path string, or a sequence of segments/keys/indices."
    if isinstance(path, Path):
        return path
    if isinstance(path, str):
        return parse_path(path)
    if path is None:
        return Path()
    return Path(path)
