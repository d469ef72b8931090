#!/usr/bin/env python3

import re

from scp_sync.exceptions import IgnorePatternError


def first_match(relative_path, ignore_patterns):
    """
        Returns the first ignore pattern found anywhere in the relative path.

        Patterns are tried in the order they are declared and are not anchored, so "\\.log$" matches "src/debug.log"
        and "build" matches "src/build/a.o". Anything other than a list or tuple of patterns ignores nothing.

        :param str relative_path: Path relative to the project root, with "/" separators.
        :param ignore_patterns: The "ignore" value of the configuration.

        :return: The matching pattern, or None.
    """

    ret_val = None

    if isinstance(ignore_patterns, (list, tuple)):

        # Every pattern is compiled before matching so a broken one is reported even after an earlier match.
        compiled_patterns = [(pattern, compile_pattern(pattern)) for pattern in ignore_patterns]

        for pattern, compiled in compiled_patterns:
            if compiled.search(relative_path):
                ret_val = pattern
                break

    return ret_val


def compile_pattern(pattern):

    try:
        return re.compile(pattern)
    except (re.error, TypeError) as e:
        raise IgnorePatternError(pattern, e) from e


def is_ignored(relative_path, ignore_patterns):
    return first_match(relative_path, ignore_patterns) is not None
