#!/usr/bin/env python3

"""
    scp-sync mirrors changed local files and directories on a remote host.

    Each path is matched to the nearest .scpsync file above it, which tells the remote host, the remote root and
    the paths to ignore. Files are uploaded, directories are created and, with --brutal, paths that no longer
    exist locally are deleted on the remote host.

    Paths are given as arguments or, when there are none, read one per line from standard input:

        git diff --name-only | scp-sync -v
"""

import argparse
import sys

from scp_sync.console import init_console, print_error, print_warning
from scp_sync.exceptions import ConfigParseError, IgnorePatternError
from scp_sync.orchestrator.orchestrator import Orchestrator, RunOptions

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_FATAL = 2
EXIT_INTERRUPTED = 130


def build_parser():

    parser = argparse.ArgumentParser(prog="scp-sync", description="Mirror local changes on a remote host over ssh.")

    parser.add_argument('paths', metavar='PATH', nargs='*',
                        help='Local files or directories to sync, read from stdin when omitted')
    parser.add_argument('-v', '--verbose', dest='verbose', action='store_true', default=False,
                        help='Turns on verbosity')
    parser.add_argument('-d', '-b', '--delete', '--brutal', dest='brutal', action='store_true', default=False,
                        help='Delete remote paths that no longer exist locally')
    parser.add_argument('-c', '--config', dest='config_path', action='store', default=None, metavar='PATH',
                        help='Use this configuration file instead of searching for .scpsync')
    parser.add_argument('-g', '--get', dest='get', action='store_true', default=False,
                        help='Download from the remote host instead (not supported yet)')

    return parser


def read_paths(args_paths, stdin):
    """
        Returns the paths given on the command line, or those read from stdin when there are none and stdin is not
        a terminal.
    """

    if args_paths:
        return list(args_paths)

    if stdin is None or stdin.isatty():
        return []

    return [line.rstrip("\r\n") for line in stdin if line.strip()]


def main(argv=None, stdin=None):

    args = build_parser().parse_args(argv)
    init_console()

    paths = read_paths(args.paths, sys.stdin if stdin is None else stdin)
    if not paths:
        print_warning("No path to sync")
        return EXIT_FAILED

    options = RunOptions(verbose=args.verbose, brutal=args.brutal, config_path=args.config_path, get=args.get)

    with Orchestrator(options) as orchestrator:
        try:
            all_synced = orchestrator.sync_paths(paths)
        except (ConfigParseError, IgnorePatternError) as e:
            print_error(str(e))
            return EXIT_FATAL
        except KeyboardInterrupt:
            print_warning("Interrupted")
            return EXIT_INTERRUPTED

    return EXIT_OK if all_synced else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
