"""Process execution utilities for tool adapters."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from dataclasses import dataclass

from ..errors import ExternalToolError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of executing a command."""

    code: int
    stdout: str
    stderr: str
    duration_s: float
    argv: list[str]
    cwd: str | None = None

    @property
    def ok(self) -> bool:
        return self.code == 0


def format_argv(argv: list[str]) -> str:
    return " ".join(map(shlex.quote, argv))


class ProcessRunner:
    """Synchronous process runner.

    ``run`` captures output and is used for probes. ``stream`` lets the child
    inherit stdout/stderr and blocks without a timeout until it exits.
    """

    def __init__(self, timeout_s: float = 30.0) -> None:
        self.timeout_s = timeout_s

    def run(
        self,
        argv: list[str],
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        check: bool = False,
    ) -> CommandResult:
        """Execute a command, capturing its output."""
        cmd = list(argv)
        start = time.time()

        proc_env = os.environ.copy()
        if env:
            proc_env.update(env)

        logger.debug("Running (captured): %s", format_argv(cmd))
        try:
            completed = subprocess.run(
                cmd,
                cwd=cwd,
                env=proc_env,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
                shell=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ExternalToolError(
                f"Command timed out: {format_argv(cmd)}", argv=cmd, cwd=cwd
            ) from exc
        except OSError as exc:
            raise ExternalToolError(
                f"Command not found: {cmd[0]}", argv=cmd, cwd=cwd
            ) from exc

        res = CommandResult(
            code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            duration_s=time.time() - start,
            argv=cmd,
            cwd=cwd,
        )

        if check and res.code != 0:
            raise ExternalToolError(
                f"Command failed ({res.code}): {format_argv(cmd)}\n{res.stderr}",
                argv=cmd,
                code=res.code,
                cwd=cwd,
            )
        return res

    def stream(
        self,
        argv: list[str],
        cwd: str | None = None,
        check: bool = True,
    ) -> CommandResult:
        """Execute a command with stdout/stderr forwarded to ours."""
        cmd = list(argv)
        start = time.time()

        logger.info("Running command: %s", format_argv(cmd), extra={"path": cwd})
        try:
            completed = subprocess.run(cmd, cwd=cwd, shell=False)
        except OSError as exc:
            raise ExternalToolError(
                f"Could not start {cmd[0]}: {exc}", argv=cmd, cwd=cwd
            ) from exc

        res = CommandResult(
            code=completed.returncode,
            stdout="",
            stderr="",
            duration_s=time.time() - start,
            argv=cmd,
            cwd=cwd,
        )
        if check and res.code != 0:
            raise ExternalToolError(
                f"Command failed ({res.code}): {format_argv(cmd)}",
                argv=cmd,
                code=res.code,
                cwd=cwd,
            )
        return res
