#!/usr/bin/env python3

"""
    Coloured status lines printed by scp_sync.
"""

import datetime
import sys

from colorama import Fore, Style, just_fix_windows_console

# Width of the bracketed action tag so the remote paths line up.
TAG_WIDTH = len("[created]")


def init_console():
    just_fix_windows_console()


def verbose_print(msg, verbose):
    """
        Prints a timestamped message when verbosity is turned on.

        :param str msg: Message to print.
        :param bool verbose: Whether verbosity is on.
    """

    if verbose:
        current_time = datetime.datetime.now()
        current_timestamp = current_time.strftime("%Y/%m/%d/%H/%M/%S")
        print(f"{current_timestamp}: {msg}")


def print_warning(msg):
    print(f"{Fore.YELLOW}[WARNING] {msg}{Style.RESET_ALL}", file=sys.stderr)


def print_error(msg, detail=None):
    print(f"{Fore.RED}[ERROR] {msg}{Style.RESET_ALL}", file=sys.stderr)
    if detail:
        print(f"  {detail.strip()}", file=sys.stderr)


def print_action(tag, remote_path):
    """
        Prints a successful action, e.g. "[sent]    /srv/app/a.txt".

        :param str tag: One word action tag without brackets.
        :param str remote_path: The remote path the action applied to.
    """

    bracketed = "[{}]".format(tag).ljust(TAG_WIDTH)
    print(f"{Fore.GREEN}{bracketed}{Style.RESET_ALL} {remote_path}")
