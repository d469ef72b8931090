"""Tests for the paramiko based transport."""

from unittest.mock import MagicMock, patch

import paramiko
import pytest

from scp_sync.ssh_agent.ssh_agent import SSHAgent


def _streams(exit_status=0, err=b""):
    stdout = MagicMock()
    stdout.channel.recv_exit_status.return_value = exit_status
    stderr = MagicMock()
    stderr.read.return_value = err
    return MagicMock(), stdout, stderr


@pytest.fixture
def ssh_client():
    with patch("scp_sync.ssh_agent.ssh_agent.paramiko.SSHClient") as client_class:
        client = client_class.return_value
        client.exec_command.return_value = _streams()
        yield client_class


class TestRunCommand:
    """Tests for running remote commands."""

    def test_success(self, ssh_client):
        agent = SSHAgent("h", "deploy")

        result = agent.run_command("mkdir -p /srv/app/build/")

        assert result.succeeded
        assert result.error == ""
        client = ssh_client.return_value
        client.load_system_host_keys.assert_called_once()
        client.connect.assert_called_once_with(hostname="h", username="deploy")
        client.exec_command.assert_called_once_with("mkdir -p /srv/app/build/")

    def test_non_zero_exit_reports_stderr(self, ssh_client):
        ssh_client.return_value.exec_command.return_value = _streams(1, b"rm: cannot remove '/srv': Permission denied\n")

        result = SSHAgent("h").run_command("rm -rf /srv")

        assert not result.succeeded
        assert result.error == "rm: cannot remove '/srv': Permission denied"

    def test_non_zero_exit_without_stderr(self, ssh_client):
        ssh_client.return_value.exec_command.return_value = _streams(2)

        result = SSHAgent("h").run_command("false")

        assert not result.succeeded
        assert "status 2" in result.error

    def test_connection_failure_is_a_result(self, ssh_client):
        ssh_client.return_value.connect.side_effect = paramiko.AuthenticationException("Authentication failed.")

        result = SSHAgent("h").run_command("true")

        assert not result.succeeded
        assert result.error == "Authentication failed."

    def test_connection_reused(self, ssh_client):
        agent = SSHAgent("h")

        agent.run_command("true")
        agent.run_command("true")

        assert ssh_client.call_count == 1
        assert ssh_client.return_value.connect.call_count == 1

    def test_failed_connection_retried(self, ssh_client):
        """A failed connection is not kept, the next call tries again."""
        ssh_client.return_value.connect.side_effect = [OSError("Connection refused"), None]
        agent = SSHAgent("h")

        assert not agent.run_command("true").succeeded
        assert ssh_client.return_value.close.call_count == 1
        assert agent.run_command("true").succeeded

    def test_failed_clients_are_closed(self, ssh_client):
        """Every client whose connection failed is closed right away."""
        ssh_client.return_value.connect.side_effect = paramiko.AuthenticationException("Authentication failed.")
        agent = SSHAgent("h")

        for _ in range(3):
            assert not agent.run_command("true").succeeded
        agent.close()

        assert ssh_client.call_count == 3
        assert ssh_client.return_value.close.call_count == 3
        assert agent.ssh is None

    def test_stderr_drained_before_exit_status(self, ssh_client):
        """The exit status is only awaited once the output streams were read."""
        stdin, stdout, stderr = _streams(1, b"rm: cannot remove\n" * 1000)

        def exit_status():
            assert stderr.read.called
            assert stdout.read.called
            return 1

        stdout.channel.recv_exit_status.side_effect = exit_status
        ssh_client.return_value.exec_command.return_value = (stdin, stdout, stderr)

        result = SSHAgent("h").run_command("rm -rf /srv")

        assert not result.succeeded
        assert result.error.startswith("rm: cannot remove")


class TestCopyFile:
    """Tests for uploading files over sftp."""

    def test_put(self, ssh_client):
        sftp = ssh_client.return_value.open_sftp.return_value

        result = SSHAgent("h").copy_file_to_server("/proj/a.txt", "/srv/app/a.txt")

        assert result.succeeded
        sftp.put.assert_called_once_with("/proj/a.txt", "/srv/app/a.txt")

    def test_missing_remote_parent(self, ssh_client):
        sftp = ssh_client.return_value.open_sftp.return_value
        sftp.put.side_effect = FileNotFoundError(2, "No such file", "/srv/app/new/a.txt")

        result = SSHAgent("h").copy_file_to_server("/proj/new/a.txt", "/srv/app/new/a.txt")

        assert not result.succeeded
        assert result.error == "No such file: /srv/app/new/a.txt"


class TestClose:

    def test_closes_connections(self, ssh_client):
        agent = SSHAgent("h")
        agent.copy_file_to_server("/proj/a.txt", "/srv/app/a.txt")
        client = ssh_client.return_value

        agent.close()

        client.open_sftp.return_value.close.assert_called_once()
        client.close.assert_called_once()
        assert agent.ssh is None
        assert agent.sftp is None

    def test_close_without_connection(self, ssh_client):
        SSHAgent("h").close()

        ssh_client.assert_not_called()
