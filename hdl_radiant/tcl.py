# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

import subprocess
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

from loguru import logger

from .errors import ToolCommandError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

# Tcl return codes that mean the script completed: TCL_OK and TCL_RETURN.
SUCCESS_CODES = (0, 2)

_BACKSLASH_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_SPECIAL_CHARACTERS = set('\\{}[]$"; ')


def tcl_quote(value: str) -> str:
    """
    Quote a string so that Tcl sees it as one word with exactly this value.
    Braces are used when possible since that is the most readable.
    """
    if value == "":
        return "{}"

    if "\\" not in value and "{" not in value and "}" not in value:
        return "{" + value + "}"

    result = ""
    for character in value:
        if character in _BACKSLASH_ESCAPES:
            result += _BACKSLASH_ESCAPES[character]
        elif character in _SPECIAL_CHARACTERS:
            result += "\\" + character
        else:
            result += character

    return result


@dataclass(frozen=True)
class TclResult:
    code: int
    result: str
    output: str

    @property
    def ok(self) -> bool:
        return self.code in SUCCESS_CODES


class TclSession:
    """
    A running Tcl shell, e.g. the Radiant ``radiantc`` console, that commands are fed to one
    at a time.
    The shell keeps its state (open project, working directory, variables) between commands,
    which is what the Radiant project commands need.

    Each command is wrapped in a ``catch`` and followed by marker lines, so that the return
    code and return value can be told apart from whatever the command prints.
    The shell is started on the first command.
    """

    def __init__(
        self,
        executable: str = "tclsh",
        cwd: Path | None = None,
        init_scripts: Sequence[Path] = (),
    ) -> None:
        """
        Arguments:
            executable: The Tcl shell to run.
            cwd: Initial working directory of the shell. Default is the current directory.
            init_scripts: Tcl files that will be sourced when the shell has started.
        """
        self.executable = executable
        self.cwd = cwd
        self.init_scripts = list(init_scripts)

        self._process: subprocess.Popen[str] | None = None

        marker = uuid4().hex
        self._result_marker = f"__hdl_radiant_result_{marker}__"
        self._done_marker = f"__hdl_radiant_done_{marker}__"

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> None:
        if self._process is not None:
            return

        logger.debug(f"Starting Tcl shell {self.executable}")
        self._process = subprocess.Popen(
            [self.executable],
            cwd=self.cwd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
        )

        for script in self.init_scripts:
            self.run(f"source {tcl_quote(str(Path(script).resolve()))}")

    def evaluate(self, script: str) -> TclResult:
        """
        Evaluate a Tcl script in the global scope of the shell.
        A script that fails does not raise an exception, check the code of the result.
        """
        self.start()
        assert self._process is not None
        assert self._process.stdin is not None
        assert self._process.stdout is not None

        logger.debug(f"tcl> {script}")

        code_variable = "__hdl_radiant_code"
        result_variable = "__hdl_radiant_result"
        wrapped = (
            f"set {code_variable} [catch {tcl_quote(script)} {result_variable}]\n"
            f'puts "\\n{self._result_marker}"\n'
            f"puts ${result_variable}\n"
            f'puts "{self._done_marker} ${code_variable}"\n'
            "flush stdout\n"
        )

        try:
            self._process.stdin.write(wrapped)
            self._process.stdin.flush()
        except BrokenPipeError as exception:
            raise ToolCommandError(
                command=script, message=f"Tcl shell {self.executable} is not running"
            ) from exception

        output_lines = []
        result_lines = []
        lines = output_lines

        while True:
            line = self._process.stdout.readline()
            if line == "":
                raise ToolCommandError(
                    command=script,
                    message=f"Tcl shell {self.executable} exited unexpectedly.\n"
                    + "".join(output_lines),
                )

            line = line.rstrip("\n")

            if line == self._result_marker:
                lines = result_lines
            elif line.startswith(self._done_marker):
                code = int(line[len(self._done_marker) :].strip())
                break
            else:
                lines.append(line)

        # The marker line is preceded by a newline, in case the command did not end its output
        # with one. That gives an extra empty line that does not belong to the command output.
        if output_lines and output_lines[-1] == "":
            output_lines.pop()

        result = TclResult(
            code=code, result="\n".join(result_lines), output="\n".join(output_lines)
        )

        for output_line in output_lines:
            logger.debug(output_line)

        return result

    def run(self, script: str) -> str:
        """
        Evaluate a Tcl script and raise an exception if it fails.

        Return:
            The return value of the script.
        """
        result = self.evaluate(script)
        if not result.ok:
            raise ToolCommandError(command=script, message=result.result)

        return result.result

    def close(self) -> None:
        if self._process is None:
            return

        process = self._process
        self._process = None

        logger.debug(f"Stopping Tcl shell {self.executable}")
        if process.stdin is not None:
            # The shell might have exited already.
            with suppress(BrokenPipeError):
                process.stdin.write("exit\n")
                process.stdin.flush()
            with suppress(BrokenPipeError):
                process.stdin.close()

        try:
            process.wait(timeout=30)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()

        if process.stdout is not None:
            process.stdout.close()

    def __enter__(self) -> TclSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
