#!/usr/bin/env python3

"""
    Error kinds raised while resolving and syncing a path.

    ConfigNotFound, PathOutsideBase, TransferError and DeletionRefused only concern the path being handled, the
    batch carries on with the next one. ConfigParseError and IgnorePatternError abort the whole run.
"""


class ScpSyncError(Exception):
    """
        Base class of every error raised by scp_sync.
    """


class ConfigNotFound(ScpSyncError):

    def __init__(self, start_path):
        self.start_path = start_path
        super().__init__("No .scpsync file found above [{}]".format(start_path))


class ConfigParseError(ScpSyncError):

    def __init__(self, config_path, reason):
        self.config_path = config_path
        self.reason = reason
        super().__init__("Could not parse [{}]: {}".format(config_path, reason))


class IgnorePatternError(ScpSyncError):

    def __init__(self, pattern, reason):
        self.pattern = pattern
        self.reason = reason
        super().__init__("Invalid ignore pattern [{!r}]: {}".format(pattern, reason))


class PathOutsideBase(ScpSyncError):

    def __init__(self, local_path, base_path):
        self.local_path = local_path
        self.base_path = base_path
        super().__init__("[{}] is not inside [{}]".format(local_path, base_path))


class TransferError(ScpSyncError):
    """
        Any failure reported by the transport. Only the message tells connection, authentication and permission
        problems apart.
    """


class DeletionRefused(ScpSyncError):

    def __init__(self, local_path):
        self.local_path = local_path
        super().__init__("[{}] does not exist locally, use --brutal to delete it remotely".format(local_path))
