#!/usr/bin/env python3

"""
    Classifies a local entry and picks the remote action that mirrors it.
"""

import enum
import os


class EntryKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    ABSENT = "absent"


class SyncAction(enum.Enum):
    UPLOAD = "upload"
    MKDIR = "mkdir"
    DELETE = "delete"
    NONE = "none"


def classify(local_path):
    """
        Looks the path up on the local filesystem. Nothing is cached, the answer reflects the filesystem at call
        time.

        :param str local_path: The local path being synced.

        :return: The EntryKind of the path.
    """

    ret_val = EntryKind.ABSENT

    if os.path.isdir(local_path):
        ret_val = EntryKind.DIRECTORY
    elif os.path.exists(local_path):
        ret_val = EntryKind.FILE

    return ret_val


def decide(kind, brutal):
    """
        Picks the action for an entry kind:

            file                -> upload
            directory           -> mkdir
            absent and brutal   -> delete
            absent              -> none, remote deletion has to be asked for

        :param EntryKind kind: The kind returned by classify().
        :param bool brutal: Whether remote deletion is permitted.

        :return: The SyncAction to perform.
    """

    if kind is EntryKind.FILE:
        ret_val = SyncAction.UPLOAD
    elif kind is EntryKind.DIRECTORY:
        ret_val = SyncAction.MKDIR
    elif brutal:
        ret_val = SyncAction.DELETE
    else:
        ret_val = SyncAction.NONE

    return ret_val
