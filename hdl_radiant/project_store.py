# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import ProjectClosedError

if TYPE_CHECKING:
    from collections.abc import Iterator


class AddOutcome(Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already present"


@dataclass
class ProjectHandle:
    """
    Reference to a project that has been opened or created by a :class:`.ProjectStore`.
    Can not be used anymore once the project has been closed.
    """

    name: str
    descriptor: Path
    is_open: bool = True

    def check_open(self) -> None:
        if not self.is_open:
            raise ProjectClosedError(f"Project {self.name} ({self.descriptor}) has been closed")


class ProjectStore(ABC):
    """
    Interface to an EDA tool that keeps a project with a list of source files.

    The tool has one open project at a time, and opening a project moves the working directory
    of the tool to the directory of the project.
    Relative source file paths are hence resolved relative to the project directory.
    """

    @abstractmethod
    def open(self, descriptor: Path) -> ProjectHandle:
        pass

    @abstractmethod
    def create(
        self, name: str, impl: str, device: str, performance: str, synthesis: str
    ) -> ProjectHandle:
        pass

    @abstractmethod
    def add_source(self, handle: ProjectHandle, path: Path | str) -> None:
        """
        Add a source file to the project.
        Shall raise :class:`.DuplicateMemberError` if the file is already part of the project,
        and :class:`.SourceAddError` for any other failure.
        """

    @abstractmethod
    def set_device_part(self, handle: ProjectHandle, device: str, performance: str) -> None:
        pass

    @abstractmethod
    def run_step(self, handle: ProjectHandle, step: str, impl: str) -> None:
        """
        Run one step of the implementation flow, e.g. synthesis.
        """

    @abstractmethod
    def evaluate(self, handle: ProjectHandle, script: str) -> str:
        """
        Run an arbitrary tool command against the open project.

        Return:
            The return value of the command.
        """

    @abstractmethod
    def save(self, handle: ProjectHandle) -> None:
        pass

    @abstractmethod
    def close(self, handle: ProjectHandle) -> None:
        """
        Close the project. The handle is marked as closed.
        """

    @abstractmethod
    def get_working_directory(self) -> Path:
        pass

    @abstractmethod
    def change_directory(self, path: Path) -> None:
        pass

    @contextmanager
    def preserved_working_directory(self, path: Path | None = None) -> Iterator[Path]:
        """
        Context manager that restores the working directory of the tool when exited,
        no matter how it is exited.
        Optionally moves to ``path`` when entered.

        Return:
            The working directory of the tool before entering.
        """
        original_directory = self.get_working_directory()

        try:
            if path is not None:
                self.change_directory(path)

            yield original_directory
        finally:
            self.change_directory(original_directory)
