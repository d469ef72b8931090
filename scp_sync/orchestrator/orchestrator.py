#!/usr/bin/env python3

"""
    Wires configuration lookup, ignore rules, path mapping, the sync decision and the remote action together for
    each path handed to scp-sync.
"""

from dataclasses import dataclass

from scp_sync.config_locator.config_locator import ConfigLocator
from scp_sync.console import print_error, print_warning, verbose_print
from scp_sync.exceptions import ConfigNotFound, DeletionRefused, PathOutsideBase
from scp_sync.ignore_matcher.ignore_matcher import first_match
from scp_sync.path_mapper.path_mapper import REMOTE_SEP, resolve_target
from scp_sync.remote_actuator.remote_actuator import ActionResult, RemoteActuator
from scp_sync.ssh_agent.ssh_agent import SSHAgent
from scp_sync.sync_decision.sync_decision import EntryKind, SyncAction, decide


@dataclass(frozen=True)
class RunOptions:
    verbose: bool = False
    brutal: bool = False
    config_path: object = None
    get: bool = False


def default_agent_factory(configuration):
    return SSHAgent(configuration.host, configuration.user, verbose=configuration.verbose)


class Orchestrator():
    """
        Syncs paths one after the other. Configurations are loaded once per file and one transport is opened per
        user@host, both reused for the whole batch.
    """

    def __init__(self, options, locator=None, agent_factory=None):

        self.options = options
        self.locator = locator if locator is not None else ConfigLocator()
        self.agent_factory = agent_factory if agent_factory is not None else default_agent_factory

        self._agents = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):

        for agent in self._agents.values():
            agent.close()
        self._agents = {}

    def sync_paths(self, paths):
        """
            :param paths: Iterable of local paths.

            :return: True if every path was synced (or ignored), False otherwise.
        """

        ret_val = True
        for path in paths:
            result = self.sync_path(path)
            ret_val = ret_val and result.succeeded
        return ret_val

    def sync_path(self, path):
        """
            Mirrors a single local path on the remote host.

            ConfigParseError and IgnorePatternError are not handled here and end the run.

            :param str path: The local file or directory that changed.

            :return: An ActionResult.
        """

        if self.options.get:
            msg = "Downloading is not supported, [{}] was left untouched".format(path)
            print_warning(msg)
            return ActionResult(SyncAction.NONE, False, msg)

        try:
            configuration = self.locator.locate(path, self.options.config_path)
            target = resolve_target(configuration, path)
        except (ConfigNotFound, PathOutsideBase) as e:
            print_error(str(e))
            return ActionResult(SyncAction.NONE, False, str(e), e)

        pattern = first_match(target.relative_path, configuration.ignore_patterns)
        if pattern is not None:
            verbose_print("Ignoring [{}], matches [{}]".format(target.relative_path, pattern), self.options.verbose)
            return ActionResult(SyncAction.NONE, True, "ignored")

        kind = target.kind
        action = decide(kind, self.options.brutal)

        if action is SyncAction.NONE:
            refusal = DeletionRefused(target.local_path)
            print_warning(str(refusal))
            return ActionResult(SyncAction.NONE, False, str(refusal), refusal)

        remote_path = target.remote_path
        if kind is EntryKind.DIRECTORY and not remote_path.endswith(REMOTE_SEP):
            remote_path += REMOTE_SEP

        actuator = RemoteActuator(self._transport_for(configuration), verbose=self.options.verbose)
        return actuator.perform(configuration, action, target.local_path, remote_path)

    def _transport_for(self, configuration):

        credentials = configuration.credentials
        if credentials not in self._agents:
            self._agents[credentials] = self.agent_factory(configuration)
        return self._agents[credentials]
