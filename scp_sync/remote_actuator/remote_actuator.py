#!/usr/bin/env python3

"""
    Carries out an upload, mkdir or delete on the remote host and reports how it went.
"""

import shlex
from dataclasses import dataclass

from scp_sync.console import print_action, print_error, verbose_print
from scp_sync.exceptions import TransferError
from scp_sync.sync_decision.sync_decision import SyncAction

ACTION_TAGS = {
    SyncAction.UPLOAD: "sent",
    SyncAction.MKDIR: "created",
    SyncAction.DELETE: "deleted",
}


@dataclass(frozen=True)
class ActionResult:
    action: SyncAction
    succeeded: bool
    message: str = ""
    # The ScpSyncError behind a failure, None on success or for ignored paths.
    error: object = None


class RemoteActuator():
    """
        Runs one action through a transport exposing run_command(command) and copy_file_to_server(local, remote),
        both returning a TransportResult.
    """

    def __init__(self, transport, verbose=False):

        self.transport = transport
        self.verbose = verbose

    def perform(self, configuration, action, local_path, remote_path):
        """
            :param Configuration configuration: The configuration governing the path.
            :param SyncAction action: UPLOAD, MKDIR or DELETE.
            :param str local_path: The local path being synced.
            :param str remote_path: The mapped remote path.

            :return: An ActionResult.
        """

        verbose = self.verbose or configuration.verbose
        credentials = configuration.credentials

        if action is SyncAction.UPLOAD:
            verbose_print("put {} {}:{}".format(local_path, credentials, remote_path), verbose)
            transport_result = self.transport.copy_file_to_server(local_path, remote_path)

        elif action in (SyncAction.MKDIR, SyncAction.DELETE):
            command = self.remote_command(action, remote_path)
            verbose_print("ssh {} {}".format(credentials, command), verbose)
            transport_result = self.transport.run_command(command)

        else:
            raise ValueError("Nothing to perform for action {}".format(action))

        if not transport_result.succeeded:
            error = TransferError("{} of [{}] to [{}] failed: {}".format(
                action.value, local_path, credentials, transport_result.error))
            print_error("Could not {} {}:{}".format(action.value, credentials, remote_path), transport_result.error)
            return ActionResult(action, False, str(error), error)

        print_action(ACTION_TAGS[action], remote_path)
        return ActionResult(action, True, "[{}] {}".format(ACTION_TAGS[action], remote_path))

    @staticmethod
    def remote_command(action, remote_path):

        quoted = shlex.quote(remote_path)
        if action is SyncAction.MKDIR:
            ret_val = "mkdir -p {}".format(quoted)
        else:
            ret_val = "rm -rf {}".format(quoted)
        return ret_val
