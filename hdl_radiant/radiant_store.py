# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from . import PROJECT_FILE_SUFFIX
from .config import DEFAULT_DUPLICATE_PATTERN
from .errors import DuplicateMemberError, SourceAddError
from .project_store import ProjectHandle, ProjectStore
from .tcl import tcl_quote

if TYPE_CHECKING:
    from .tcl import TclSession


class RadiantProjectStore(ProjectStore):
    """
    Project store that drives the Lattice Radiant project Tcl commands (``prj_*``) in a
    running Radiant Tcl shell.
    """

    def __init__(self, session: TclSession, duplicate_pattern: str = DEFAULT_DUPLICATE_PATTERN):
        """
        Arguments:
            session: A session running the Radiant Tcl shell, e.g. ``radiantc``.
            duplicate_pattern: Regular expression that, when found in the message of a failing
                ``prj_add_source``, means that the file is already part of the project.
        """
        self.session = session
        self.duplicate_re = re.compile(duplicate_pattern)

    def open(self, descriptor: Path) -> ProjectHandle:
        self.session.run(f"prj_open {tcl_quote(str(descriptor))}")

        name = Path(descriptor).name
        if name.endswith(PROJECT_FILE_SUFFIX):
            name = name[: -len(PROJECT_FILE_SUFFIX)]

        return ProjectHandle(name=name, descriptor=Path(descriptor))

    def create(
        self, name: str, impl: str, device: str, performance: str, synthesis: str
    ) -> ProjectHandle:
        self.session.run(
            f"prj_create -name {tcl_quote(name)} -impl {tcl_quote(impl)} "
            f"-dev {tcl_quote(device)} -performance {tcl_quote(performance)} "
            f"-synthesis {tcl_quote(synthesis)}"
        )

        descriptor = self.get_working_directory() / f"{name}{PROJECT_FILE_SUFFIX}"
        return ProjectHandle(name=name, descriptor=descriptor)

    def add_source(self, handle: ProjectHandle, path: Path | str) -> None:
        handle.check_open()

        command = f"prj_add_source {tcl_quote(str(path))}"
        result = self.session.evaluate(command)
        if result.ok:
            return

        message = "\n".join(text for text in [result.output, result.result] if text)
        if self.duplicate_re.search(message):
            raise DuplicateMemberError(path=str(path), message=message)

        raise SourceAddError(command=command, message=message)

    def set_device_part(self, handle: ProjectHandle, device: str, performance: str) -> None:
        handle.check_open()
        self.session.run(
            f"prj_set_device -part {tcl_quote(device)} -performance {tcl_quote(performance)}"
        )

    def run_step(self, handle: ProjectHandle, step: str, impl: str) -> None:
        handle.check_open()

        self.session.run(f"prj_run {tcl_quote(step)} -impl {tcl_quote(impl)}")
        logger.debug(f"{step} done for {handle.name}")

    def evaluate(self, handle: ProjectHandle, script: str) -> str:
        handle.check_open()
        return self.session.run(script)

    def save(self, handle: ProjectHandle) -> None:
        handle.check_open()
        self.session.run("prj_save")

    def close(self, handle: ProjectHandle) -> None:
        handle.check_open()
        handle.is_open = False
        self.session.run("prj_close")

    def get_working_directory(self) -> Path:
        return Path(self.session.run("pwd"))

    def change_directory(self, path: Path) -> None:
        self.session.run(f"cd {tcl_quote(str(path))}")
