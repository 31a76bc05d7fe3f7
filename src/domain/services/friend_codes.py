"""Friend code parsing and canonicalization.

Each parser returns the canonical form of a code, or ``None`` when the input
is not a valid code of that kind. Digits are grouped in fours; a single ``-``
or space between groups is optional.
"""

from typing import Optional

_SEPARATORS = ("-", " ")
_GROUP_SIZE = 4


def _take_group(rest: str) -> Optional[str]:
    group = rest[:_GROUP_SIZE]
    if len(group) != _GROUP_SIZE or not (group.isascii() and group.isdigit()):
        return None
    return group


def _parse_digit_groups(code: str, count: int, leading_separator: bool = False) -> Optional[list[str]]:
    """Split ``code`` into ``count`` groups of four digits.

    Trailing characters after the last group make the whole code invalid.
    """
    rest = code
    groups: list[str] = []
    for index in range(count):
        if (index > 0 or leading_separator) and rest[:1] in _SEPARATORS:
            rest = rest[1:]
        group = _take_group(rest)
        if group is None:
            return None
        groups.append(group)
        rest = rest[_GROUP_SIZE:]

    if rest:
        return None
    return groups


def parse_pokemon_go_code(code: str) -> Optional[str]:
    """``1234-5678-9012`` -> ``1234 5678 9012``."""
    groups = _parse_digit_groups(code, 3)
    return " ".join(groups) if groups else None


def parse_pokemon_pocket_code(code: str) -> Optional[str]:
    """``1234-5678-9012-3456`` -> ``1234 5678 9012 3456``."""
    groups = _parse_digit_groups(code, 4)
    return " ".join(groups) if groups else None


def parse_switch_code(code: str) -> Optional[str]:
    """``sw 1234 5678 9012`` -> ``SW-1234-5678-9012``.

    The ``SW`` prefix is optional and case-insensitive.
    """
    rest = code.upper()
    if rest.startswith("S"):
        if not rest.startswith("SW"):
            return None
        rest = rest[2:]

    groups = _parse_digit_groups(rest, 3, leading_separator=True)
    if not groups:
        return None
    return "SW-" + "-".join(groups)
