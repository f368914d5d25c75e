# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from . import PROJECT_FILE_SUFFIX
from .errors import DuplicateMemberError, InvalidUsageModeError, ProjectNotFoundError
from .file_collector import collect, rebase
from .project_store import AddOutcome

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .project_store import ProjectHandle, ProjectStore

USAGE_MODES = ("auto", "manual")

# The project path shall be a directory that contains the project file at most this deep.
PROJECT_SEARCH_DEPTH = 3

DEFAULT_SEARCH_DEPTH = 6


def find_project_descriptor(
    project_name: str, project_path: Path | str, depth: int = PROJECT_SEARCH_DEPTH
) -> Path:
    """
    Find the project file of a project, searching recursively from ``project_path``.
    If there are several matches, the first one found is used.
    """
    descriptors = collect(
        root=project_path, patterns=[f"*{project_name}{PROJECT_FILE_SUFFIX}"], depth=depth
    )
    if not descriptors:
        raise ProjectNotFoundError(
            project_name=project_name, project_path=project_path, depth=depth
        )

    return descriptors[0]


def reconcile(
    store: ProjectStore, handle: ProjectHandle, file_list: Iterable[Path | str]
) -> list[AddOutcome]:
    """
    Add files to an open project.
    Files that are already part of the project are reported but are not considered an error.

    The project is saved and closed when done.
    If adding a file fails for another reason, the project is closed without saving and the
    exception is propagated.

    Arguments:
        store: The tool that has the project open.
        handle: The open project.
        file_list: Files to add. Relative paths shall be relative to the project directory.

    Return:
        Outcome for each file, in the order of ``file_list``.
    """
    outcomes = []

    try:
        for path in file_list:
            try:
                store.add_source(handle, path)
            except DuplicateMemberError:
                logger.info(f"{path} already added to {handle.name} project!")
                outcomes.append(AddOutcome.ALREADY_PRESENT)
            else:
                logger.info(f"{path} added to {handle.name} project!")
                outcomes.append(AddOutcome.ADDED)

        store.save(handle)
    finally:
        store.close(handle)

    return outcomes


def add_project_files(
    store: ProjectStore,
    project_name: str,
    usage: str = "auto",
    exts: Sequence[str] = ("*.ipx",),
    search_path: Path | str | None = None,
    project_path: Path | str = ".",
    search_depth: int = DEFAULT_SEARCH_DEPTH,
    file_list: Sequence[Path | str] = (),
) -> list[AddOutcome]:
    """
    Add files to a project, either found automatically by file name patterns or from a
    manually given list.

    Arguments:
        store: The tool to add the files with.
        project_name: Name of the project.
        usage: ``"auto"`` to search for files matching ``exts`` in ``search_path``,
            or ``"manual"`` to add the files in ``file_list``.
        exts: File name patterns to search for, e.g. ``["*.v", "*.ipx"]``.
            Used in auto mode only.
        search_path: Directory to search for files in. Default is ``./<project_name>/lib``.
            A relative path is relative to the project directory.
            Used in auto mode only.
        project_path: Directory that contains the project file, at most three levels deep.
        search_depth: How many directory levels below ``search_path`` to search.
        file_list: Files to add, relative to the project directory. Used in manual mode only.

    Return:
        Outcome for each file that was added.
    """
    if usage not in USAGE_MODES:
        raise InvalidUsageModeError(usage=usage, valid=USAGE_MODES)

    search_path = Path(project_name) / "lib" if search_path is None else Path(search_path)

    logger.info(f"Usage: {usage}")
    logger.info(f"Project path: {project_path}")
    logger.info(f"Extensions: {' '.join(exts)}")
    logger.info(f"Search path: {search_path}")
    logger.info(f"Search depth: {search_depth}")

    with store.preserved_working_directory() as original_directory:
        descriptor = find_project_descriptor(
            project_name=project_name, project_path=original_directory / project_path
        )

        logger.info(f"------Adding files to {descriptor} project.------")

        handle = store.open(descriptor)

        try:
            if usage == "auto":
                # The tool is now in the project directory.
                # Relative paths to files shall be relative to that.
                project_directory = store.get_working_directory()
                files = _find_files(
                    project_directory=project_directory,
                    search_path=search_path,
                    exts=exts,
                    search_depth=search_depth,
                )
            else:
                files = list(file_list)
        except Exception:
            store.close(handle)
            raise

        logger.info("------List of files to be added:------")
        for path in files:
            logger.info(str(path))

        return reconcile(store=store, handle=handle, file_list=files)


def _find_files(
    project_directory: Path, search_path: Path, exts: Sequence[str], search_depth: int
) -> list[Path | str]:
    if search_path.is_absolute():
        return list(collect(root=search_path, patterns=exts, depth=search_depth))

    found = collect(root=project_directory / search_path, patterns=exts, depth=search_depth)
    return list(rebase(paths=found, cut_prefix=project_directory))
