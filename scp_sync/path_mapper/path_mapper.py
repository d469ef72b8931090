#!/usr/bin/env python3

"""
    Maps a local path under a project root to the matching path on the remote host.
"""

import os
import re
from dataclasses import dataclass

from scp_sync.exceptions import PathOutsideBase
from scp_sync.sync_decision.sync_decision import classify

REMOTE_SEP = "/"

_SEPARATOR_RUN = re.compile("/{2,}")


@dataclass(frozen=True)
class SyncTarget:
    """
        A local path resolved against its configuration. local_path is absolute and normalized, every later
        step works on it rather than on the path as it was typed.
    """

    local_path: str
    relative_path: str
    remote_path: str
    configuration: object

    @property
    def kind(self):
        return classify(self.local_path)


def relative_path(base_path, local_path):
    """
        Computes the path of local_path relative to base_path, using "/" as separator.

        :param str base_path: The project root, i.e. the directory holding the .scpsync file.
        :param str local_path: The local path being synced.

        :return: The relative path, "" for the project root itself.
    """

    base = os.path.normpath(os.path.abspath(base_path))
    local = os.path.normpath(os.path.abspath(local_path))

    try:
        inside = os.path.commonpath([base, local]) == base
    except ValueError:
        # Different drives on Windows
        inside = False

    if not inside:
        raise PathOutsideBase(local_path, base_path)

    ret_val = os.path.relpath(local, base)
    if ret_val == os.curdir:
        ret_val = ""

    return ret_val.replace(os.sep, REMOTE_SEP)


def map_remote_path(remote_root, rel_path):
    """
        Joins the remote root and a relative path and collapses every run of separators to a single one.

        :param str remote_root: The "remote_path" of the configuration.
        :param str rel_path: Path relative to the project root.

        :return: The remote path.
    """

    joined = remote_root + REMOTE_SEP + rel_path
    return _SEPARATOR_RUN.sub(REMOTE_SEP, joined)


def map_path(configuration, local_path):
    """
        :return: The (relative path, remote path) pair of a local path under the given configuration.
    """

    rel_path = relative_path(configuration.base_path, local_path)
    return rel_path, map_remote_path(configuration.remote_path, rel_path)


def resolve_target(configuration, local_path):
    """
        :param Configuration configuration: The configuration governing the path.
        :param str local_path: The local path as given, possibly relative or with a trailing separator.

        :return: The SyncTarget of the path.
    """

    normalized = os.path.normpath(os.path.abspath(local_path))
    rel_path, remote_path = map_path(configuration, normalized)
    return SyncTarget(normalized, rel_path, remote_path, configuration)
