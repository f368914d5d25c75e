# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Union

from loguru import logger

from . import PROJECT_FILE_SUFFIX
from .devices import resolve_device_settings
from .errors import HdlRadiantError
from .reconciler import find_project_descriptor
from .version_check import check_tool_version

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .config import RadiantConfig
    from .project_store import ProjectHandle, ProjectStore

# A command to run against an open project.
# Either a tool (Tcl) command string, or a function that is given the store and the project.
ProjectCommand = Union[str, Callable[["ProjectStore", "ProjectHandle"], object]]

# The Radiant implementation flow, in order.
FLOW_STEPS = ("Synthesis", "Map", "PAR", "Export")

DEFAULT_SYNTHESIS = "synplify"
DEFAULT_IMPL = "impl_1"


@dataclass(frozen=True)
class CommandOutcome:
    command: ProjectCommand
    result: object = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_commands(
    store: ProjectStore, handle: ProjectHandle, commands: Sequence[ProjectCommand]
) -> list[CommandOutcome]:
    """
    Run commands against an open project, in order.
    A command that fails, for any reason, is reported but does not stop the commands after it.
    """
    outcomes = []

    for command in commands:
        logger.info(f"Executing cmd: {_describe(command)}")

        try:
            if isinstance(command, str):
                result = store.evaluate(handle, command)
            else:
                result = command(store, handle)
        except Exception as exception:
            logger.error(f"Command failed: {_describe(command)}\n{exception}")
            outcomes.append(CommandOutcome(command=command, error=exception))
        else:
            outcomes.append(CommandOutcome(command=command, result=result))

    return outcomes


def create_project(
    store: ProjectStore,
    config: RadiantConfig,
    project_name: str,
    project_path: Path | str | None = None,
    device: str = "",
    performance: str = "",
    board: str = "",
    synthesis: str = DEFAULT_SYNTHESIS,
    impl: str = DEFAULT_IMPL,
    commands: Sequence[ProjectCommand] = (),
) -> list[CommandOutcome]:
    """
    Create a Radiant project, or update the device of the project if it exists already.
    If ``project_name`` contains the suffix of a known board, the device settings of that board
    are used instead of the ``device``, ``performance`` and ``board`` arguments.

    Arguments:
        store: The tool to create the project with.
        config: Tool settings, used for the tool version check.
        project_name: Name of the project.
        project_path: Directory where the project will be placed.
            Default is ``./<project_name>``. Created if it does not exist.
        device: Device part, e.g. ``LFCPNX-100-9LFG672C``.
        performance: Performance grade, e.g. ``9_High-Performance_1.0V``.
        board: Board name. Informational only.
        synthesis: Synthesis tool.
        impl: Name of the implementation.
        commands: Commands to run once the project has been created.

    Return:
        Outcome of each command in ``commands``.
    """
    settings = resolve_device_settings(
        project_name=project_name, device=device, performance=performance, board=board
    )
    project_path = Path(project_name) if project_path is None else Path(project_path)

    logger.info(f"Project name: {project_name}")
    logger.info(f"Device: {settings.device}")
    logger.info(f"Performance: {settings.performance}")
    logger.info(f"Board: {settings.board}")

    check_tool_version(config)

    with store.preserved_working_directory() as original_directory:
        project_directory = project_path
        if not project_directory.is_absolute():
            project_directory = original_directory / project_directory
        project_directory.mkdir(parents=True, exist_ok=True)

        store.change_directory(project_directory)

        descriptor = project_directory / f"{project_name}{PROJECT_FILE_SUFFIX}"
        if descriptor.exists():
            logger.info(f"Opening existing project {descriptor}")
            handle = store.open(Path(descriptor.name))
            try:
                store.set_device_part(handle, settings.device, settings.performance)
            except HdlRadiantError:
                store.close(handle)
                raise
        else:
            logger.info(f"Creating project {descriptor}")
            handle = store.create(
                name=project_name,
                impl=impl,
                device=settings.device,
                performance=settings.performance,
                synthesis=synthesis,
            )

        try:
            outcomes = run_commands(store=store, handle=handle, commands=commands)
            store.save(handle)
        finally:
            store.close(handle)

    return outcomes


def run_project(
    store: ProjectStore,
    project_name: str,
    project_path: Path | str = ".",
    impl: str = DEFAULT_IMPL,
    target: str = FLOW_STEPS[-1],
    commands: Sequence[ProjectCommand] = (),
) -> list[CommandOutcome]:
    """
    Run the implementation flow of a project, from synthesis up to and including ``target``.

    Arguments:
        store: The tool to run the project with.
        project_name: Name of the project.
        project_path: Directory that contains the project file, at most three levels deep.
        impl: Name of the implementation to run.
        target: The last flow step to run. One of ``Synthesis``, ``Map``, ``PAR``, ``Export``.
        commands: Commands to run before the flow is started.

    Return:
        Outcome of each command in ``commands``.
    """
    if target not in FLOW_STEPS:
        raise ValueError(f'Unknown flow step "{target}". Expected one of {", ".join(FLOW_STEPS)}.')

    steps = FLOW_STEPS[: FLOW_STEPS.index(target) + 1]

    with store.preserved_working_directory() as original_directory:
        descriptor = find_project_descriptor(
            project_name=project_name, project_path=original_directory / project_path
        )
        handle = store.open(descriptor)

        try:
            outcomes = run_commands(store=store, handle=handle, commands=commands)

            for step in steps:
                logger.info(f"Running {step} for {project_name} ({impl})")
                store.run_step(handle, step=step, impl=impl)

            store.save(handle)
        finally:
            store.close(handle)

    return outcomes


def run_project_commands(
    store: ProjectStore,
    project_name: str,
    commands: Sequence[ProjectCommand],
    project_path: Path | str = ".",
) -> list[CommandOutcome]:
    """
    Open a project and run a list of commands against it.
    The project is saved and closed afterwards, also when some commands fail.
    """
    with store.preserved_working_directory() as original_directory:
        descriptor = find_project_descriptor(
            project_name=project_name, project_path=original_directory / project_path
        )
        handle = store.open(descriptor)

        try:
            outcomes = run_commands(store=store, handle=handle, commands=commands)
            store.save(handle)
        finally:
            store.close(handle)

    return outcomes


def _describe(command: ProjectCommand) -> str:
    if isinstance(command, str):
        return command

    return getattr(command, "__name__", repr(command))
