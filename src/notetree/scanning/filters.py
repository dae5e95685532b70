from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import Collection, Iterable

logger = logging.getLogger(__name__)

_WILDCARDS = {"*", ".*"}


def create_valid_extensions(explicit: Iterable[str] | None) -> tuple[str, ...]:
    """
    Normalize configured extensions to dot-prefixed form.

    An empty result means every file is accepted. A lone wildcard (`*` or `.*`) is treated the
    same way as no extensions at all.
    """

    if not explicit:
        return ()
    values = [value.strip() for value in explicit if value and value.strip()]
    if not values or (len(values) == 1 and values[0] in _WILDCARDS):
        return ()
    return tuple(value if value.startswith(".") else f".{value}" for value in values)


def is_extension_valid(path: Path, extensions: Collection[str]) -> bool:
    """True if `extensions` is empty or the file name ends with one of them."""

    if not extensions:
        return True
    name = path.name
    for extension in extensions:
        if name.endswith(extension):
            if name == extension:
                logger.warning(
                    "File %s name exactly matches extension %s so it will not be read.",
                    path,
                    extension,
                )
                return False
            return True
    return False


def is_hidden(path: Path) -> bool:
    if path.name.startswith("."):
        return True
    # Windows keeps hidden as a file attribute rather than a naming convention.
    attributes = getattr(path.lstat(), "st_file_attributes", 0)
    return bool(attributes & getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0))
