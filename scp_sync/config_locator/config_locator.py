#!/usr/bin/env python3

"""
    Finds and loads the .scpsync file governing a local path.

    The file is a JSON document placed at the root of a local project:

        {
            "remote_path": "/srv/app",
            "host": "example.org",
            "user": "deploy",
            "ignore": ["\\.log$", "^node_modules/"],
            "verbose": false
        }

    Only "remote_path" and "host" are required.
"""

import json
import os
from dataclasses import dataclass

from schema import And, Optional, Or, Schema, SchemaError

from scp_sync.exceptions import ConfigNotFound, ConfigParseError

CONFIG_FILE_NAME = ".scpsync"

REMOTE_PATH_CFG_KEY = "remote_path"
HOST_CFG_KEY = "host"
USER_CFG_KEY = "user"
IGNORE_CFG_KEY = "ignore"
VERBOSE_CFG_KEY = "verbose"

CFG_FILE_VALIDATION = Schema({
    REMOTE_PATH_CFG_KEY: And(str, len, error="'remote_path' must be a non-empty string"),
    HOST_CFG_KEY: And(str, len, error="'host' must be a non-empty string"),
    Optional(USER_CFG_KEY): Or(None, str),
    Optional(IGNORE_CFG_KEY): object,
    Optional(VERBOSE_CFG_KEY): bool
}, ignore_extra_keys=True)


@dataclass(frozen=True)
class Configuration:
    """
        The settings of one .scpsync file, normalized at load time.
    """

    config_path: str
    base_path: str
    remote_path: str
    host: str
    user: object = None
    ignore_patterns: object = None
    verbose: bool = False

    @property
    def credentials(self):
        ret_val = self.host
        if self.user:
            ret_val = "{}@{}".format(self.user, self.host)
        return ret_val


class ConfigLocator():
    """
        Walks up from a local path to the nearest .scpsync file. Loaded files are kept so that a batch of paths
        from the same project only parses the file once.
    """

    def __init__(self):

        self._cache = {}

    def locate(self, path, config_path=None):
        """
            Returns the Configuration governing the given path.

            :param str path: The local file or directory being synced.
            :param str config_path: Explicit configuration file, skips the upward search.

            :return: The loaded Configuration.
        """

        if config_path is not None:
            return self.load(config_path)

        found = self.find_config_file(path)
        if found is None:
            raise ConfigNotFound(path)

        return self.load(found)

    def find_config_file(self, path):
        """
            Looks for CONFIG_FILE_NAME in the directory of the path (or the path itself when it is a directory) and
            then in every parent directory up to the filesystem root.

            :param str path: The local path to start from.

            :return: The absolute path to the configuration file, or None if there is none.
        """

        ret_val = None

        current_dir = os.path.abspath(path)
        if not os.path.isdir(current_dir):
            current_dir = os.path.dirname(current_dir)

        while True:

            candidate = os.path.join(current_dir, CONFIG_FILE_NAME)
            if os.path.isfile(candidate):
                ret_val = candidate
                break

            parent_dir = os.path.dirname(current_dir)
            if parent_dir == current_dir:
                break
            current_dir = parent_dir

        return ret_val

    def load(self, config_path):
        """
            Parses and validates a configuration file.

            :param str config_path: Path to the configuration file.

            :return: The normalized Configuration.
        """

        config_path = os.path.abspath(config_path)
        if config_path in self._cache:
            return self._cache[config_path]

        try:
            with open(config_path) as config_file:
                cfg_json = json.load(config_file)
        except OSError as e:
            raise ConfigParseError(config_path, "cannot be read ({})".format(e.strerror or e)) from e
        except ValueError as e:
            raise ConfigParseError(config_path, "not valid JSON ({})".format(e)) from e

        try:
            CFG_FILE_VALIDATION.validate(cfg_json)
        except SchemaError as e:
            raise ConfigParseError(config_path, e.code) from e

        remote_path = cfg_json[REMOTE_PATH_CFG_KEY]
        if not remote_path.endswith("/"):
            remote_path += "/"

        ignore_patterns = cfg_json.get(IGNORE_CFG_KEY)
        if isinstance(ignore_patterns, list):
            ignore_patterns = tuple(ignore_patterns)

        configuration = Configuration(
            config_path=config_path,
            base_path=os.path.dirname(config_path),
            remote_path=remote_path,
            host=cfg_json[HOST_CFG_KEY],
            user=cfg_json.get(USER_CFG_KEY),
            ignore_patterns=ignore_patterns,
            verbose=cfg_json.get(VERBOSE_CFG_KEY, False)
        )

        self._cache[config_path] = configuration
        return configuration
