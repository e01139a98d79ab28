"""Run an external tool and capture what it prints.

stdout and stderr are captured together, in the order the tool wrote
them, so the logged output (and the output attached to a failure) reads
the same as it would in a terminal.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from funcapp_provisioner.core.exceptions import PermanentError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger("funcapp_provisioner.tooling.runner")


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of a successful tool invocation.

    Attributes:
        command: Executable name followed by its arguments.
        returncode: Process exit code (always 0 for a returned result).
        output: Combined stdout and stderr.
    """

    command: tuple[str, ...]
    returncode: int
    output: str

    @property
    def command_line(self) -> str:
        """The command as a shell-quoted string, for logs."""
        return shlex.join(self.command)


class ToolInvocationError(PermanentError):
    """An external tool could not be launched or exited non-zero.

    Attributes:
        command: Executable name followed by its arguments.
        returncode: Exit code, or ``None`` if the process never started.
        output: Combined stdout and stderr (or the launch error).
    """

    default_stage = "run_tool"
    default_code = "TOOL_FAILED"

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        output: str,
        *,
        stage: str = "",
    ) -> None:
        self.command = tuple(command)
        self.returncode = returncode
        self.output = output
        status = "could not be started" if returncode is None else f"exited with {returncode}"
        super().__init__(
            f"{shlex.join(self.command)} failed: {status}\nOutput: {output}",
            stage=stage,
        )


def run_tool(
    executable: str,
    args: Sequence[str],
    *,
    cwd: str | Path | None = None,
    stage: str = "",
) -> ToolResult:
    """Run *executable* with *args* and wait for it to exit.

    The executable is resolved on the search path first so that wrapper
    scripts such as ``az.cmd`` are found on Windows.  The child inherits
    the current environment.

    Args:
        executable: Tool name (``"az"``, ``"func"``).
        args: Arguments passed verbatim, without a shell.
        cwd: Working directory for the child process.
        stage: Provisioning step reported on failure.

    Returns:
        The ``ToolResult`` with the captured output.

    Raises:
        ToolInvocationError: If the tool cannot be started or exits non-zero.
    """
    command = (executable, *args)
    argv = [shutil.which(executable) or executable, *args]
    logger.info("Running tool | command=%s | cwd=%s", shlex.join(command), cwd or os.getcwd())

    try:
        completed = subprocess.run(
            argv,
            cwd=cwd,
            env=os.environ.copy(),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise ToolInvocationError(command, None, str(exc), stage=stage) from exc

    output = completed.stdout or ""
    if completed.returncode != 0:
        raise ToolInvocationError(command, completed.returncode, output, stage=stage)

    logger.info("%s output:\n%s", shlex.join(command), output)
    return ToolResult(command=command, returncode=completed.returncode, output=output)
