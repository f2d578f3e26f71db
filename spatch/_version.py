# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

# Read by setup.py with a regex, keep the literal on one line
__version__ = "0.3.0"

version_info = tuple(int(part) for part in __version__.split("."))
