# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

"""
Exceptions raised by the hdl-radiant operations.

Every exception carries the process exit code that the command line interface shall use when the
exception ends the program.
Configuration and discovery problems use exit code 2, same as the Tcl project scripts this
package replaces, while failures reported by the tool itself use exit code 1.
"""

from __future__ import annotations


class HdlRadiantError(Exception):
    exit_code = 1


class VersionMismatchError(HdlRadiantError):
    exit_code = 2

    def __init__(self, expected: str, got: str) -> None:
        super().__init__(
            f"Radiant version mismatch; expected {expected}, got {got}.\n"
            "This error can be down-graded to a critical warning by setting the "
            "ADI_IGNORE_VERSION_CHECK environment variable to 1. "
            "Be aware that you will not get support if you use a different tool version."
        )
        self.expected = expected
        self.got = got


class VersionStringUnparseableError(HdlRadiantError):
    exit_code = 2

    def __init__(self, tool_path: str) -> None:
        super().__init__(
            f'Wrong path! Cannot extract Radiant tool version from "{tool_path}". '
            "Expected a path containing a version on the format YYYY.N."
        )
        self.tool_path = tool_path


class ProjectNotFoundError(HdlRadiantError):
    exit_code = 2

    def __init__(self, project_name: str, project_path: object, depth: int) -> None:
        super().__init__(
            f'Project "{project_name}" does not exist. '
            f"No descriptor found within {depth} directory levels of {project_path}."
        )
        self.project_name = project_name


class InvalidUsageModeError(HdlRadiantError):
    exit_code = 2

    def __init__(self, usage: str, valid: tuple[str, ...]) -> None:
        super().__init__(
            f'Wrong parameter for usage option: "{usage}". Expected one of {", ".join(valid)}.'
        )
        self.usage = usage


class DuplicateMemberError(HdlRadiantError):
    """
    Raised by a project store when a source file is already a member of the project.
    Recovered by the reconciler, never propagated to the user as a failure.
    """

    def __init__(self, path: str, message: str = "") -> None:
        super().__init__(message or f"{path} is already a member of the project")
        self.path = path


class ToolCommandError(HdlRadiantError):
    """
    A command executed by the EDA tool failed.
    """

    def __init__(self, command: str, message: str) -> None:
        super().__init__(f"Command failed: {command}\n{message}")
        self.command = command
        self.message = message


class SourceAddError(ToolCommandError):
    """
    Adding a source file failed for another reason than it being added already.
    """


class ProjectClosedError(HdlRadiantError):
    pass
