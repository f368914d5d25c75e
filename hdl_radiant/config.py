# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# The Radiant version that the projects are maintained for.
DEFAULT_REQUIRED_VERSION = "2023.2"

DEFAULT_TCL_SHELL = "radiantc"

# Radiant does not have a dedicated error for adding a source file that is already part of the
# project. A failing add is classified as a duplicate only if the message matches this.
DEFAULT_DUPLICATE_PATTERN = r"(?i)already"

TOOL_PATH_VARIABLE = "TOOLRTF"
REQUIRED_VERSION_VARIABLE = "REQUIRED_RADIANT_VERSION"
IGNORE_VERSION_CHECK_VARIABLE = "ADI_IGNORE_VERSION_CHECK"
TCL_SHELL_VARIABLE = "RADIANT_TCL_SHELL"


@dataclass(frozen=True)
class RadiantConfig:
    """
    Settings that in a Radiant Tcl flow would be global variables or environment variables.
    Gathered in one place so that operations do not have to look at the process environment.

    Arguments:
        tool_path: Path to the Radiant installation.
            Contains the tool version, e.g. ``/lscc/radiant/2023.2``.
        required_version: The Radiant version that the projects are maintained for.
        ignore_version_check: Down-grade a tool version mismatch from an error to a warning.
        tcl_shell: Executable of the Radiant Tcl shell.
        duplicate_pattern: Regular expression matched against the message of a failing
            source add, to tell an "already added" failure from other failures.
    """

    tool_path: str = ""
    required_version: str = DEFAULT_REQUIRED_VERSION
    ignore_version_check: bool = False
    tcl_shell: str = DEFAULT_TCL_SHELL
    duplicate_pattern: str = DEFAULT_DUPLICATE_PATTERN

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> RadiantConfig:
        environ = os.environ if environ is None else environ

        return cls(
            tool_path=environ.get(TOOL_PATH_VARIABLE, ""),
            required_version=environ.get(REQUIRED_VERSION_VARIABLE, DEFAULT_REQUIRED_VERSION),
            ignore_version_check=_to_bool(environ.get(IGNORE_VERSION_CHECK_VARIABLE, "")),
            tcl_shell=environ.get(TCL_SHELL_VARIABLE, DEFAULT_TCL_SHELL),
        )


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ["1", "true", "yes", "on"]
