from __future__ import annotations

from functools import cmp_to_key
from pathlib import Path


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _digit_run_end(text: str, start: int) -> int:
    end = start
    while end < len(text) and _is_digit(text[end]):
        end += 1
    return end


def _sign(a: str | int, b: str | int) -> int:
    return (a > b) - (a < b)


def natural_compare(a: str, b: str) -> int:
    """
    Compare two names so that embedded digit runs order by numeric value.

    `doc2` sorts before `doc10`. Digit runs are compared as strings once leading zeros are
    stripped, so arbitrarily long runs never need integer conversion. Names that only differ in
    zero padding (`a01` and `a1`) fall back to plain string order, keeping the ordering total.
    """

    i = j = 0
    while i < len(a) and j < len(b):
        char_a, char_b = a[i], b[j]
        if _is_digit(char_a) and _is_digit(char_b):
            end_a = _digit_run_end(a, i)
            end_b = _digit_run_end(b, j)
            run_a = a[i:end_a].lstrip("0")
            run_b = b[j:end_b].lstrip("0")
            if len(run_a) != len(run_b):
                return _sign(len(run_a), len(run_b))
            if run_a != run_b:
                return _sign(run_a, run_b)
            i, j = end_a, end_b
            continue
        if char_a != char_b:
            return _sign(char_a, char_b)
        i += 1
        j += 1

    remaining = _sign(len(a) - i, len(b) - j)
    if remaining:
        return remaining
    return _sign(a, b)


natural_key = cmp_to_key(natural_compare)


def path_name_key(path: Path):
    """Sort key ordering files and directories by name in natural order."""

    return natural_key(path.name)
