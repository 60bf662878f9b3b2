"""Version-number ordering.

Version strings are compared the way PHP's version_compare() does: runs of
digits compare numerically, and the special forms dev < alpha (a) < beta (b)
< RC (rc) < # < pl (p) order pre- and post-releases around plain numbers.
"""

import functools
import re
from typing import Iterable, List

# Prefix-matched, in lookup order.
_SPECIAL_FORMS = [
    ('dev', 0),
    ('alpha', 1),
    ('a', 1),
    ('beta', 2),
    ('b', 2),
    ('RC', 3),
    ('rc', 3),
    ('#', 4),
    ('pl', 5),
    ('p', 5),
]

_UNKNOWN_FORM = -6

_TOKEN_PATTERN = re.compile(r'\d+|[^\d.]+')


def _canonical_parts(version: str) -> List[str]:
    return _TOKEN_PATTERN.findall(re.sub(r'[-_+]', '.', version.strip()))


def _form_order(part: str) -> int:
    for name, order in _SPECIAL_FORMS:
        if part.startswith(name):
            return order
    return _UNKNOWN_FORM


def _compare_parts(left: str, right: str) -> int:
    left_numeric = left.isdigit()
    right_numeric = right.isdigit()
    if left_numeric and right_numeric:
        left_value, right_value = int(left), int(right)
    elif left_numeric:
        left_value, right_value = _form_order('#'), _form_order(right)
    elif right_numeric:
        left_value, right_value = _form_order(left), _form_order('#')
    else:
        left_value, right_value = _form_order(left), _form_order(right)
    return (left_value > right_value) - (left_value < right_value)


def compare_versions(left: str, right: str) -> int:
    """Compare two version strings.

    Args:
        left: First version string
        right: Second version string

    Returns:
        -1 if left sorts before right, 0 if they are equivalent, 1 otherwise

    Example:
        >>> compare_versions("1.9", "1.10")
        -1
        >>> compare_versions("2.0rc1", "2.0")
        -1
    """
    left_parts = _canonical_parts(left)
    right_parts = _canonical_parts(right)

    for left_part, right_part in zip(left_parts, right_parts):
        result = _compare_parts(left_part, right_part)
        if result != 0:
            return result

    if len(left_parts) == len(right_parts):
        return 0
    if len(left_parts) > len(right_parts):
        extra = left_parts[len(right_parts)]
        return 1 if extra.isdigit() else _compare_parts(extra, '#')
    extra = right_parts[len(left_parts)]
    return -1 if extra.isdigit() else _compare_parts('#', extra)


def sort_versions(versions: Iterable[str], reverse: bool = False) -> List[str]:
    """Return version strings sorted oldest first (or newest first if reverse)."""
    return sorted(versions, key=functools.cmp_to_key(compare_versions), reverse=reverse)
