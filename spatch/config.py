# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import os

from jupyter_core.paths import jupyter_config_path

from traitlets import Unicode, Enum, Integer, Bool, HasTraits, TraitError, validate
from traitlets.config.loader import JSONFileConfigLoader, ConfigFileNotFound

from .diffing.config import DEFAULT_MAX_DEPTH


CONFIG_BASENAME = 'spatch_config'


class SpatchConfigurable(HasTraits):

    def configured_traits(self, cls):
        traits = cls.class_own_traits(config=True)
        c = {}
        for name, _ in traits.items():
            c[name] = getattr(self, name)
        return c


_config_cache = {}
def config_instance(cls):
    if cls in _config_cache:
        return _config_cache[cls]
    instance = _config_cache[cls] = cls()
    return instance


def _load_config_files(basefilename, path=None):
    """Load config files (json) by filename and path.

    yield each config object in turn.
    """

    if not isinstance(path, list):
        path = [path]
    for path in path[::-1]:
        # path list is in descending priority order, so load files backwards:
        loader = JSONFileConfigLoader(basefilename+'.json', path=path)
        config = None
        try:
            config = loader.load_config()
        except ConfigFileNotFound:
            pass
        if config:
            yield config


def recursive_update(target, new, include_none):
    """Recursively update one dictionary using another.

    None values will delete their keys.
    """
    for k, v in new.items():
        if isinstance(v, dict):
            if k not in target:
                target[k] = {}
            recursive_update(target[k], v, include_none)
            if not include_none and not target[k]:
                # Prune empty subdicts
                del target[k]

        elif not include_none and v is None:
            target.pop(k, None)

        else:
            target[k] = v


def build_config(entrypoint, include_none=False):
    if entrypoint not in entrypoint_configurables:
        raise ValueError('Config for entrypoint name %r is not defined! Accepted values are %r.' % (
            entrypoint, list(entrypoint_configurables.keys())
        ))

    # Get config from disk:
    disk_config = {}
    path = jupyter_config_path()
    path.insert(0, os.getcwd())
    for c in _load_config_files(CONFIG_BASENAME, path=path):
        recursive_update(disk_config, c, include_none)

    config = {}
    configurable = entrypoint_configurables[entrypoint]
    for c in reversed(configurable.mro()):
        if issubclass(c, SpatchConfigurable):
            recursive_update(config, config_instance(c).configured_traits(c), include_none)
            if (c.__name__ in disk_config):
                recursive_update(config, disk_config[c.__name__], include_none)

    return config


def get_defaults_for_argparse(entrypoint):
    return build_config(entrypoint)


class Global(SpatchConfigurable):

    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'INFO',
        help="Set the log level by name.",
    ).tag(config=True)


class _Schema(SpatchConfigurable):

    schema = Unicode(
        None,
        allow_none=True,
        help="JSON Schema file declaring the identity keys (indexKey) of arrays.",
    ).tag(config=True)

    validate_schema = Bool(
        True,
        help="Check the schema file against its metaschema before use.",
    ).tag(config=True)


class _Output(SpatchConfigurable):

    indent = Integer(
        2,
        allow_none=True,
        help="Indentation of JSON output, negative or none for compact output.",
    ).tag(config=True)


class Query(_Schema, _Output):
    pass


class Diff(_Schema, _Output):

    semantic = Bool(
        True,
        help="Address elements of identity-keyed arrays by identity "
             "selectors in the output, rather than by position.",
    ).tag(config=True)

    max_depth = Integer(
        DEFAULT_MAX_DEPTH,
        help="Maximum nesting depth of documents to diff.",
    ).tag(config=True)

    @validate('max_depth')
    def _valid_max_depth(self, proposal):
        if proposal['value'] < 1:
            raise TraitError('max_depth must be positive')
        return proposal['value']


class Patch(_Schema, _Output):
    pass


class Show(SpatchConfigurable):

    color = Bool(
        True,
        help="Use ANSI colors in output.",
    ).tag(config=True)


class SpQuery(Global, Query):
    pass

class SpDiff(Global, Diff):
    pass

class SpPatch(Global, Patch):
    pass

class SpShow(Global, Show):
    pass


entrypoint_configurables = {
    'spquery': SpQuery,
    'spdiff': SpDiff,
    'sppatch': SpPatch,
    'spshow': SpShow,
}
