# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .config import DiffConfig, DEFAULT_MAX_DEPTH
from .generic import diff

# Alias
compute_diff = diff

__all__ = ["diff", "compute_diff", "DiffConfig", "DEFAULT_MAX_DEPTH"]
