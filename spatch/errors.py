# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Exception hierarchy for spatch.

Every failure mode of the library has its own class so that callers can
branch on it with ``except``. All of them derive from `SpatchError`.
"""


class SpatchError(Exception):
    """Base class for all spatch errors."""

    def __init__(self, message, path=None):
        super(SpatchError, self).__init__(message)
        self.message = message
        self.path = path

    def __str__(self):
        if self.path is None:
            return self.message
        return "%s (at %r)" % (self.message, str(self.path))


# Path syntax

class PathParseError(SpatchError, ValueError):
    """The text of a path could not be parsed."""

    def __init__(self, message, text=None, position=None):
        super(PathParseError, self).__init__(message)
        self.text = text
        self.position = position

    def __str__(self):
        if self.text is None:
            return self.message
        return "Invalid path %r at position %s: %s" % (
            self.text, self.position, self.message)


class MissingLeadingSlash(PathParseError):
    pass


class EmptySegment(PathParseError):
    pass


class InvalidEscape(PathParseError):
    pass


class MalformedSelector(PathParseError):
    pass


# Resolving paths against documents

class ResolveError(SpatchError, LookupError):
    """A path could not be resolved against a document."""


class NotFound(ResolveError):
    pass


class IndexOutOfRange(NotFound, IndexError):
    pass


class Ambiguous(ResolveError):
    """An identity selector matched more than one array element."""


class TypeMismatch(ResolveError, TypeError):
    pass


class InvalidUse(ResolveError):
    """A segment was used where it has no meaning, e.g. '-' mid-path."""


# Schemas

class SchemaError(SpatchError, ValueError):
    pass


class InvalidIndexKeyDeclaration(SchemaError):
    pass


class InvalidSchemaDocument(SchemaError):
    pass


# Diffing

class DiffError(SpatchError):
    pass


class IdentityConflict(DiffError):
    """Two elements of an identity-keyed array share an identity value."""

    def __init__(self, message, path=None, field=None, value=None):
        super(IdentityConflict, self).__init__(message, path)
        self.field = field
        self.value = value


class NestingTooDeep(DiffError):
    pass


# Patch documents and patch application

class InvalidPatch(SpatchError, ValueError):
    """A patch document is not well formed."""


class ApplyError(SpatchError):
    """Applying a patch failed. No document is produced."""

    def __init__(self, message, path=None, op_index=None, op=None):
        super(ApplyError, self).__init__(message, path)
        self.op_index = op_index
        self.op = op

    def __str__(self):
        s = super(ApplyError, self).__str__()
        if self.op_index is None:
            return s
        return "operation %d: %s" % (self.op_index, s)


class TargetNotFound(ApplyError, NotFound):
    pass


class TargetIndexOutOfRange(TargetNotFound, IndexOutOfRange):
    pass


class TargetTypeMismatch(ApplyError, TypeMismatch):
    pass


class TargetAmbiguous(ApplyError, Ambiguous):
    pass


class TargetInvalidUse(ApplyError, InvalidUse):
    pass


class MoveIntoSelf(ApplyError):
    pass


class TestFailed(ApplyError, AssertionError):
    # Keep pytest from collecting this class
    __test__ = False


# Maps resolver failures onto their patch application counterparts
_apply_errors = [
    (IndexOutOfRange, TargetIndexOutOfRange),
    (NotFound, TargetNotFound),
    (TypeMismatch, TargetTypeMismatch),
    (Ambiguous, TargetAmbiguous),
    (InvalidUse, TargetInvalidUse),
]


def as_apply_error(err, op_index=None, op=None):
    """Convert a ResolveError raised while applying an op into an ApplyError."""
    if isinstance(err, ApplyError):
        err.op_index = op_index
        err.op = op
        return err
    for resolve_cls, apply_cls in _apply_errors:
        if isinstance(err, resolve_cls):
            return apply_cls(err.message, err.path, op_index=op_index, op=op)
    return ApplyError(str(err), getattr(err, 'path', None), op_index=op_index, op=op)
