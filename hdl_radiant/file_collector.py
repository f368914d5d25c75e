# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

DEFAULT_PATTERNS = ("*.ipx",)
DEFAULT_DEPTH = 5


def collect(
    root: Path | str, patterns: Sequence[str] | str = DEFAULT_PATTERNS, depth: int = DEFAULT_DEPTH
) -> list[Path]:
    """
    Find files in a directory tree, searching recursively to a limited depth.

    The returned paths are ``root`` joined with the file name, meaning that a relative ``root``
    gives relative paths and an absolute (or resolved) ``root`` gives absolute paths.

    The order of the result is: files matching the first pattern, files matching the second
    pattern, etc. for ``root`` itself, followed by the result for each subdirectory.
    Files and subdirectories are listed in the order the file system returns them.
    The result is not sorted, and a file that matches more than one pattern will be
    listed once per pattern.

    A ``root`` that does not exist or can not be read gives an empty result.

    Arguments:
        root: The directory to start searching in.
        patterns: Glob patterns, e.g. ``["*.v", "*.ipx"]``, matched against file names.
            A single string is one pattern.
        depth: How many directory levels below ``root`` to search.
            Zero means that only ``root`` itself is searched.

    Return:
        Paths to the files found.
    """
    root = Path(root)
    patterns = [patterns] if isinstance(patterns, str) else patterns

    try:
        entries = list(root.iterdir())
    except OSError:
        return []

    result = []
    for pattern in patterns:
        result += [
            path for path in entries if _is_match(path.name, pattern) and _is_regular_file(path)
        ]

    if depth > 0:
        for path in entries:
            if not path.name.startswith(".") and _is_directory(path):
                result += collect(root=path, patterns=patterns, depth=depth - 1)

    return result


def rebase(paths: Iterable[Path | str], cut_prefix: Path | str, add_prefix: str = "") -> list[str]:
    """
    Replace the start of each path with another prefix.

    The length of ``cut_prefix`` plus one, to also drop the separator, is removed from the start
    of each path and ``add_prefix`` is prepended.
    Note that there is no check that the path actually starts with ``cut_prefix``.

    Example: ``rebase(["/work/proj/lib/a.v"], "/work/proj", "../")`` gives ``["../lib/a.v"]``.
    """
    cut_length = len(str(cut_prefix)) + 1

    return [add_prefix + str(path)[cut_length:] for path in paths]


def _is_match(name: str, pattern: str) -> bool:
    # Same as Tcl glob, hidden files are only matched by a pattern that asks for them.
    if name.startswith(".") and not pattern.startswith("."):
        return False

    return fnmatchcase(name, pattern)


def _is_regular_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def _is_directory(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False
