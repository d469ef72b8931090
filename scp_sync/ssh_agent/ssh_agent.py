#!/usr/bin/env python3

"""
    This python file holds the ssh_agent used to connect to a host and run commands or copy files over ssh.

    The agent never raises on a transport failure. Every operation returns a TransportResult telling whether it
    worked and, if not, the error text reported by the connection or the remote side.
"""

from dataclasses import dataclass

import paramiko


@dataclass(frozen=True)
class TransportResult:
    succeeded: bool
    error: str = ""


class SSHAgent():
    """
        This is the ssh_agent class. It is used to send commands and files to a given server via ssh. The connection
        is opened on first use and kept until close() is called.
    """
    def __init__(self, host, username=None, verbose=False):

        self.host = host
        self.username = username
        self.verbose = verbose

        self.ssh = None
        self.sftp = None

    def close(self):

        # Closes SFTP connection
        if self.sftp is not None:
            if self.verbose: print("Closing SFTP Connection")
            self.sftp.close()
            self.sftp = None

        # Closes connection with the SSH server
        if self.ssh is not None:
            if self.verbose: print("Closing SSH Connection")
            self.ssh.close()
            self.ssh = None
            if self.verbose: print("Connection to {} closed.".format(self.host))

    def run_command(self, command):
        """
            Runs a command on the server and waits for it to finish.

            :param str command: Command to run.

            :return: A TransportResult, failed when the command exits non-zero or cannot be started.
        """

        try:
            self._ssh_connect()

            stdin, stdout, stderr = self.ssh.exec_command(command)
            # Streams are drained before the exit status is awaited.
            error_output = stderr.read().decode(errors="replace").strip()
            stdout.read()
            exit_status = stdout.channel.recv_exit_status()

        except (paramiko.SSHException, OSError) as e:
            return TransportResult(False, self._describe(e))

        ret_val = TransportResult(True)
        if exit_status != 0:
            ret_val = TransportResult(False, error_output or "'{}' exited with status {}".format(command, exit_status))

        return ret_val

    def copy_file_to_server(self, local_file, server_path):
        """
            This method will use the put() method to copy a file over to the ssh server from the local machine. The
            parent directory of server_path has to exist already.

            :param str local_file: The local path to the file that needs to be copied.
            :param str server_path: The full server path the file is copied to.

            :return: A TransportResult.
        """

        try:
            self._ssh_sftp_connect()
            self.sftp.put(local_file, server_path)

        except (paramiko.SSHException, OSError) as e:
            return TransportResult(False, self._describe(e))

        return TransportResult(True)

    # ////////////////////// Helpers ////////////////////// #

    def _ssh_connect(self):
        """
            This method will connect to the ssh server given its class variables instantiated in the init method.
            Does nothing if already connected.
        """

        if self.ssh is not None:
            return

        if self.verbose: print("SSH Connecting to: Host-{}, Username-{}".format(self.host, self.username))
        client = paramiko.SSHClient()
        client.load_system_host_keys()
        try:
            client.connect(hostname=self.host, username=self.username)
        except Exception:
            client.close()
            raise
        self.ssh = client
        if self.verbose: print("Connected")

    def _ssh_sftp_connect(self):
        """
            This method will use the open_sftp() method to establish an SFTP connection with the ssh server.
        """

        if self.sftp is not None:
            return

        self._ssh_connect()
        if self.verbose: print("SFTP Connecting")
        self.sftp = self.ssh.open_sftp()
        if self.verbose: print("Connected")

    def _describe(self, error):

        ret_val = str(error)
        if isinstance(error, OSError) and error.strerror:
            ret_val = error.strerror
            if error.filename:
                ret_val = "{}: {}".format(ret_val, error.filename)
        return ret_val or error.__class__.__name__
