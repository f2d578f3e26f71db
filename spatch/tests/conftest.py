# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import logging
import os
import shutil

from pytest import fixture, skip

from spatch.schema_index import SchemaIndex
from spatch.utils import read_json


pjoin = os.path.join


def testspath():
    return os.path.abspath(os.path.dirname(__file__))


@fixture
def slow(request):
    if request.config.getoption('--quick', default=False):
        skip('skipping slow test')


@fixture
def reset_log():
    # clear root logger handlers before test and reset afterwards
    handlers = list(logging.getLogger().handlers)
    logging.getLogger().handlers[:] = []
    yield
    logging.getLogger().handlers[:] = handlers


@fixture(scope='session')
def filespath():
    return os.path.join(testspath(), "files")


@fixture
def tempfiles(tmpdir, filespath):
    """Fixture for copying test files into a temporary directory"""
    dest = tmpdir.join('testfiles')
    shutil.copytree(filespath, str(dest))
    return str(dest)


@fixture
def list_base(filespath):
    return read_json(pjoin(filespath, "list-base.json"))


@fixture
def list_changed(filespath):
    return read_json(pjoin(filespath, "list-changed.json"))


@fixture(scope='session')
def list_schema(filespath):
    return SchemaIndex.build(read_json(pjoin(filespath, "list-schema.json")))


@fixture(scope='session')
def catalog_schema(filespath):
    return SchemaIndex.build(read_json(pjoin(filespath, "catalog-schema.json")))


@fixture
def catalog_base(filespath):
    return read_json(pjoin(filespath, "catalog-base.json"))


@fixture
def catalog_changed(filespath):
    return read_json(pjoin(filespath, "catalog-changed.json"))
