"""Shared fixtures for the scp_sync tests."""

import json
from unittest.mock import Mock

import pytest

from scp_sync.config_locator.config_locator import CONFIG_FILE_NAME
from scp_sync.ssh_agent.ssh_agent import TransportResult


def write_config(directory, **values):
    """Write a .scpsync file into directory and return its path."""
    config_file = directory / CONFIG_FILE_NAME
    config_file.write_text(json.dumps(values))
    return config_file


@pytest.fixture
def project(tmp_path):
    """A project root governed by {"remote_path": "/srv/app", "host": "h"}."""
    root = tmp_path / "proj"
    root.mkdir()
    write_config(root, remote_path="/srv/app", host="h")
    return root


@pytest.fixture
def transport():
    """A transport whose every operation succeeds."""
    fake = Mock()
    fake.run_command.return_value = TransportResult(True)
    fake.copy_file_to_server.return_value = TransportResult(True)
    return fake
