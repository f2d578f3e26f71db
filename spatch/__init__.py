# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__, version_info

from .paths import Path, Key, Index, Identity, APPEND, parse_path, serialize_path
from .schema_index import SchemaIndex, ITEMS
from .resolving import resolve, locate
from .diffing import diff, compute_diff, DiffConfig
from .patching import patch, apply_patch
from .patch_format import (
    PatchOp, PatchOpKind, op_add, op_remove, op_replace, op_move, op_copy, op_test,
)
from .rendering import render, decode, dumps
from .errors import (
    SpatchError, PathParseError, ResolveError, NotFound, IndexOutOfRange,
    Ambiguous, TypeMismatch, InvalidUse, SchemaError, DiffError,
    IdentityConflict, NestingTooDeep, InvalidPatch, ApplyError, TargetNotFound,
    TargetIndexOutOfRange, TargetTypeMismatch, TargetAmbiguous, TargetInvalidUse,
    MoveIntoSelf, TestFailed,
)


__all__ = [
    "__version__", "version_info",
    "Path", "Key", "Index", "Identity", "APPEND", "parse_path", "serialize_path",
    "SchemaIndex", "ITEMS",
    "resolve", "locate",
    "diff", "compute_diff", "DiffConfig",
    "patch", "apply_patch",
    "PatchOp", "PatchOpKind",
    "op_add", "op_remove", "op_replace", "op_move", "op_copy", "op_test",
    "render", "decode", "dumps",
    "SpatchError", "PathParseError", "ResolveError", "NotFound", "IndexOutOfRange",
    "Ambiguous", "TypeMismatch", "InvalidUse", "SchemaError", "DiffError",
    "IdentityConflict", "NestingTooDeep", "InvalidPatch", "ApplyError", "TargetNotFound",
    "TargetIndexOutOfRange", "TargetTypeMismatch", "TargetAmbiguous", "TargetInvalidUse",
    "MoveIntoSelf", "TestFailed",
    ]
