# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from loguru import logger
from packaging.version import InvalidVersion, Version

from .errors import VersionMismatchError, VersionStringUnparseableError

if TYPE_CHECKING:
    from .config import RadiantConfig

# Greedy prefix, so that the last version-like token in the path is used.
# E.g. "/opt/2021.1/lscc/radiant/2023.2" gives "2023.2".
VERSION_RE = re.compile(r".*(\d{4}\.\d)")


def extract_tool_version(tool_path: str) -> str:
    """
    Get the tool version from the path to the Radiant installation.
    """
    match = VERSION_RE.match(tool_path)
    if match is None:
        raise VersionStringUnparseableError(tool_path=tool_path)

    return match.group(1)


def check_tool_version(config: RadiantConfig) -> str:
    """
    Check that the Radiant version in use is the one that the projects are maintained for.

    A mismatch is an error, unless ``config.ignore_version_check`` is set, in which case a
    critical warning is printed.
    A tool path that does not contain a version is always an error.

    Return:
        The Radiant version in use.
    """
    tool_version = extract_tool_version(config.tool_path)
    logger.info(f"Radiant version: {tool_version}")

    if _is_same_version(tool_version, config.required_version):
        return tool_version

    if config.ignore_version_check:
        logger.warning(
            f"CRITICAL WARNING: Radiant version mismatch; "
            f"expected {config.required_version}, got {tool_version}."
        )
        return tool_version

    raise VersionMismatchError(expected=config.required_version, got=tool_version)


def _is_same_version(tool_version: str, required_version: str) -> bool:
    try:
        return Version(tool_version) == Version(required_version)
    except InvalidVersion:
        # A required version that is not a valid version number is compared as a plain string.
        return tool_version == required_version.strip()
