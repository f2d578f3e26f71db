#!/usr/bin/env python
# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.
from setuptools import setup, find_packages
import pathlib
import re

HERE = pathlib.Path(__file__).parent.absolute()

SPATCH_PATH = HERE / "spatch"


def get_version(fpath):
    "Read __version__ from a file without importing the package."
    with open(fpath) as f:
        m = re.search(r'^__version__ = [\'"]([^\'"]+)[\'"]', f.read(), re.M)
    return m.group(1)


VERSION = get_version(SPATCH_PATH / '_version.py')


if __name__ == '__main__':
    setup(
      name='spatch',
      version=VERSION,
      description='Semantic diff and patch of JSON documents, '
                  'with identity selectors for array elements',
      license='BSD',
      packages=find_packages(include=['spatch', 'spatch.*']),
      package_data={'spatch.tests': ['files/*.json']},
      python_requires='>=3.7',
      install_requires=[
          'colorama',
          'jsonschema',
          'jupyter_core',
          'traitlets>=5',
      ],
      extras_require={
          'test': [
              'pytest>=6.0',
              'pytest-cov',
          ],
      },
      entry_points={
          'console_scripts': [
              'spatch = spatch.__main__:main_dispatch',
              'spquery = spatch.queryapp:main',
              'spdiff = spatch.diffapp:main',
              'sppatch = spatch.patchapp:main',
              'spshow = spatch.showapp:main',
          ],
      },
      )
