# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

import argparse
import dataclasses
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from .about import get_cli_epilog, get_short_slogan
from .config import RadiantConfig
from .errors import HdlRadiantError
from .file_collector import DEFAULT_DEPTH, collect
from .project import (
    DEFAULT_IMPL,
    DEFAULT_SYNTHESIS,
    FLOW_STEPS,
    create_project,
    run_project,
    run_project_commands,
)
from .radiant_store import RadiantProjectStore
from .reconciler import DEFAULT_SEARCH_DEPTH, USAGE_MODES, add_project_files
from .tcl import TclSession

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .project import CommandOutcome
    from .project_store import ProjectStore


def main(argv: list[str] | None = None) -> None:
    args = arguments(argv)
    setup_logging(verbose=args.verbose)

    config = RadiantConfig.from_environment()
    if args.ignore_version_check:
        config = dataclasses.replace(config, ignore_version_check=True)
    if args.tcl_shell is not None:
        config = dataclasses.replace(config, tcl_shell=args.tcl_shell)

    try:
        exit_code = args.function(args=args, config=config)
    except HdlRadiantError as exception:
        logger.error(f"ERROR: {exception}")
        sys.exit(exception.exit_code)

    sys.exit(exit_code)


def arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hdl-radiant",
        description=get_short_slogan(),
        epilog=get_cli_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--tcl-shell",
        help="the Radiant Tcl shell executable (overrides RADIANT_TCL_SHELL)",
    )
    parser.add_argument(
        "--ignore-version-check",
        action="store_true",
        help="down-grade a Radiant version mismatch to a warning",
    )
    parser.add_argument("--verbose", action="store_true", help="print debug information")

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = _add_subparser(subparsers, "create", "create a project, or update an existing one")
    create.add_argument(
        "--ppath", type=Path, help="directory to place the project in (default: ./<project_name>)"
    )
    create.add_argument("--device", default="", help="device part, e.g. LFCPNX-100-9LFG672C")
    create.add_argument(
        "--performance", default="", help="performance grade, e.g. 9_High-Performance_1.0V"
    )
    create.add_argument("--board", default="", help="board name")
    create.add_argument("--synthesis", default=DEFAULT_SYNTHESIS, help="synthesis tool")
    create.add_argument("--impl", default=DEFAULT_IMPL, help="implementation name")
    _add_cmd_argument(create, "Tcl command to run after creating the project")
    create.set_defaults(function=_create)

    files = _add_subparser(subparsers, "files", "add source files to a project")
    files.add_argument(
        "--usage",
        default="auto",
        help=f"'{USAGE_MODES[0]}' to search for files, '{USAGE_MODES[1]}' to use --flist",
    )
    files.add_argument(
        "--exts", nargs="+", default=["*.ipx"], help="file name patterns to search for"
    )
    files.add_argument(
        "--spath",
        type=Path,
        help="search path, relative to the project directory (default: ./<project_name>/lib)",
    )
    files.add_argument(
        "--ppath",
        type=Path,
        default=Path("."),
        help="directory that contains the project file at most 3 levels deep",
    )
    files.add_argument("--sdepth", type=int, default=DEFAULT_SEARCH_DEPTH, help="search depth")
    files.add_argument(
        "--flist",
        nargs="+",
        default=[],
        help="files to add, relative to the project directory",
    )
    files.set_defaults(function=_files)

    run = _add_subparser(subparsers, "run", "run the implementation flow of a project")
    run.add_argument(
        "--ppath",
        type=Path,
        default=Path("."),
        help="directory that contains the project file at most 3 levels deep",
    )
    run.add_argument("--impl", default=DEFAULT_IMPL, help="implementation name")
    run.add_argument(
        "--target", choices=FLOW_STEPS, default=FLOW_STEPS[-1], help="last flow step to run"
    )
    _add_cmd_argument(run, "Tcl command to run before the flow is started")
    run.set_defaults(function=_run)

    run_cmd = _add_subparser(subparsers, "run-cmd", "run Tcl commands against a project")
    run_cmd.add_argument(
        "--ppath",
        type=Path,
        default=Path("."),
        help="directory that contains the project file at most 3 levels deep",
    )
    _add_cmd_argument(run_cmd, "Tcl command to run", required=True)
    run_cmd.set_defaults(function=_run_cmd)

    collect_parser = subparsers.add_parser(
        "collect",
        help="list files found by a recursive search",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    collect_parser.add_argument("path", type=Path, help="directory to search in")
    collect_parser.add_argument(
        "--exts", nargs="+", default=["*.ipx"], help="file name patterns to search for"
    )
    collect_parser.add_argument("--sdepth", type=int, default=DEFAULT_DEPTH, help="search depth")
    collect_parser.set_defaults(function=_collect)

    return parser.parse_args(argv)


def setup_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format="<level>{message}</level>")


@contextmanager
def radiant_store(config: RadiantConfig) -> Iterator[ProjectStore]:
    with TclSession(executable=config.tcl_shell, cwd=Path.cwd()) as session:
        yield RadiantProjectStore(session=session, duplicate_pattern=config.duplicate_pattern)


def _add_subparser(subparsers, name: str, help_text: str) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        name, help=help_text, formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("project_name", help="name of the project")
    return parser


def _add_cmd_argument(
    parser: argparse.ArgumentParser, help_text: str, required: bool = False
) -> None:
    parser.add_argument(
        "--cmd",
        action="append",
        default=[],
        required=required,
        help=f"{help_text} (can be given multiple times)",
    )


def _create(args: argparse.Namespace, config: RadiantConfig) -> int:
    with radiant_store(config) as store:
        outcomes = create_project(
            store=store,
            config=config,
            project_name=args.project_name,
            project_path=args.ppath,
            device=args.device,
            performance=args.performance,
            board=args.board,
            synthesis=args.synthesis,
            impl=args.impl,
            commands=args.cmd,
        )

    return _commands_exit_code(outcomes)


def _files(args: argparse.Namespace, config: RadiantConfig) -> int:
    with radiant_store(config) as store:
        add_project_files(
            store=store,
            project_name=args.project_name,
            usage=args.usage,
            exts=args.exts,
            search_path=args.spath,
            project_path=args.ppath,
            search_depth=args.sdepth,
            file_list=args.flist,
        )

    return 0


def _run(args: argparse.Namespace, config: RadiantConfig) -> int:
    with radiant_store(config) as store:
        outcomes = run_project(
            store=store,
            project_name=args.project_name,
            project_path=args.ppath,
            impl=args.impl,
            target=args.target,
            commands=args.cmd,
        )

    return _commands_exit_code(outcomes)


def _run_cmd(args: argparse.Namespace, config: RadiantConfig) -> int:
    with radiant_store(config) as store:
        outcomes = run_project_commands(
            store=store, project_name=args.project_name, commands=args.cmd, project_path=args.ppath
        )

    return _commands_exit_code(outcomes)


def _collect(args: argparse.Namespace, config: RadiantConfig) -> int:
    for path in collect(root=args.path, patterns=args.exts, depth=args.sdepth):
        print(path)

    return 0


def _commands_exit_code(outcomes: list[CommandOutcome]) -> int:
    failed = [outcome for outcome in outcomes if not outcome.ok]
    if failed:
        logger.error(f"{len(failed)} of {len(outcomes)} commands failed")
        return 1

    return 0
