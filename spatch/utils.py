# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import codecs
import io
import json
import locale
import os
import sys

if os.name == 'nt':
    EXPLICIT_MISSING_FILE = 'nul'
else:
    EXPLICIT_MISSING_FILE = '/dev/null'


def read_json(f, on_null='null'):
    """Read and return a json document from filename

    Parameters:
        f:  The filename to read from, "-" for stdin, or null filename
            ("/dev/null" on *nix, "nul" on Windows).
            Alternatively a file-like object can be passed.
        on_null: What to return when filename null
            "null": return None
            "empty": return empty dict
    """
    if f == EXPLICIT_MISSING_FILE:
        if on_null == 'null':
            return None
        elif on_null == 'empty':
            return {}
        else:
            raise ValueError(
                'Not valid value for `on_null`: %r. Valid values '
                'are "null" or "empty"' % (on_null,))
    if f == '-':
        return json.load(sys.stdin)
    if isinstance(f, str):
        with io.open(f, encoding='utf-8') as fo:
            return json.load(fo)
    return json.load(f)


def is_number(x):
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def json_type_name(x):
    "Name of the JSON type of a value, for messages."
    if x is None:
        return "null"
    if isinstance(x, bool):
        return "boolean"
    if is_number(x):
        return "number"
    if isinstance(x, str):
        return "string"
    if isinstance(x, list):
        return "array"
    if isinstance(x, dict):
        return "object"
    return type(x).__name__


def scalar_key(x):
    """Hashable key of a scalar json value, or None for non-scalars.

    The JSON type is part of the key, so True and 1 never collide
    even though they compare equal in Python.
    """
    if isinstance(x, bool):
        return ("boolean", x)
    if is_number(x):
        return ("number", x)
    if isinstance(x, str):
        return ("string", x)
    return None


def values_equal(a, b):
    """Deep equality of two json values.

    Unlike ==, booleans never equal numbers. Numbers compare by value,
    so 1 and 1.0 are equal as they are the same JSON number.
    """
    stack = [(a, b)]
    while stack:
        a, b = stack.pop()
        if isinstance(a, dict):
            if not isinstance(b, dict) or len(a) != len(b):
                return False
            for k, v in a.items():
                if k not in b:
                    return False
                stack.append((v, b[k]))
        elif isinstance(a, list):
            if not isinstance(b, list) or len(a) != len(b):
                return False
            stack.extend(zip(a, b))
        elif a is None or b is None:
            if a is not b:
                return False
        else:
            ka = scalar_key(a)
            if ka is None or ka != scalar_key(b):
                return False
    return True


def _setup_std_stream_encoding():
    """Setup encoding on stdout/err

    Ensures sys.stdout/err have error-escaping encoders,
    rather than raising errors.
    """
    if os.getenv('PYTHONIOENCODING'):
        # setting PYTHONIOENCODING overrides anything we would do here
        return
    _default_encoding = locale.getpreferredencoding() or 'UTF-8'
    for name in ('stdout', 'stderr'):
        stream = getattr(sys, name)
        raw_stream = getattr(sys, '__%s__' % name)
        if stream is not raw_stream:
            # don't wrap captured or redirected output
            continue
        enc = getattr(stream, 'encoding', None) or _default_encoding
        errors = getattr(stream, 'errors', None) or 'strict'
        # if error-handler is strict, switch to replace
        if errors == 'strict' or errors.startswith('surrogate'):
            bin_stream = stream.buffer
            new_stream = codecs.getwriter(enc)(bin_stream, errors='backslashreplace')
            setattr(sys, name, new_stream)


def setup_std_streams():
    """Setup sys.stdout/err

    - Ensures sys.stdout/err have error-escaping encoders,
      rather than raising errors.
    - enables colorama for ANSI escapes on Windows
    """

    _setup_std_stream_encoding()
    # must enable colorama after setting up encoding,
    # or encoding will undo colorama setup
    if sys.platform.startswith('win'):
        import colorama
        colorama.init()
