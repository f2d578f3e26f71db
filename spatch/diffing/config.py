# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..errors import NestingTooDeep
from ..schema_index import as_schema_index


# Containers nested deeper than this are not diffed
DEFAULT_MAX_DEPTH = 256


class DiffConfig:
    """Schema and limits to pass around while diffing"""

    def __init__(self, *, schema=None, max_depth=DEFAULT_MAX_DEPTH):
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
            raise ValueError("max_depth must be a positive integer, got %r" % (max_depth,))
        self.schema = as_schema_index(schema)
        self.max_depth = max_depth

    def identity_field(self, location):
        "Return the identity field of the array at location, or None for positional arrays."
        if self.schema is None:
            return None
        return self.schema.lookup(location)

    def check_depth(self, path):
        "Raise NestingTooDeep when entering a container at path would exceed max_depth."
        if len(path) >= self.max_depth:
            raise NestingTooDeep(
                "documents nest deeper than %d levels" % self.max_depth, path)

    def __copy__(self):
        return DiffConfig(
            schema=self.schema,
            max_depth=self.max_depth,
        )
