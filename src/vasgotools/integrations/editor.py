"""Code editor launcher.

The editor is started through a generated script so that the folder keeps a
one-click way to reopen it. Both the batch and the shell variant are always
written; only the one matching the platform is executed.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path
from typing import Union

from ..errors import FilesystemError
from .process import CommandResult, ProcessRunner

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

OPEN_BATCH_FILE = "open_vscode.bat"
OPEN_SHELL_FILE = "open_vscode.sh"


class EditorLauncher:
    """Writes and executes the open-editor scripts."""

    def __init__(self, runner: ProcessRunner, command: str = "code") -> None:
        self.runner = runner
        self.command = command

    def batch_script(self) -> str:
        return f"{self.command} . | exit 0\n"

    def shell_script(self) -> str:
        return f"#!/bin/bash\n{self.command} . || exit 0\n"

    def write_scripts(self, folder: PathLike) -> list[Path]:
        """Write both scripts into folder, reporting every failed write."""
        folder = Path(folder)
        targets = [
            (folder / OPEN_BATCH_FILE, self.batch_script(), 0o600),
            (folder / OPEN_SHELL_FILE, self.shell_script(), 0o700),
        ]
        written: list[Path] = []
        errors: list[OSError] = []
        for path, content, mode in targets:
            try:
                path.write_text(content, encoding="utf-8")
                os.chmod(path, mode)
                written.append(path)
            except OSError as e:
                errors.append(e)
        if errors:
            raise FilesystemError("Error creating open_vscode file", errors)
        return written

    def execute(self, folder: PathLike) -> CommandResult:
        folder = Path(folder)
        if _is_windows():
            argv = ["cmd", "/C", str(folder / OPEN_BATCH_FILE)]
        else:
            argv = ["bash", str(folder / OPEN_SHELL_FILE)]
        logger.info("Opening %s...", self.command)
        return self.runner.stream(argv, cwd=str(folder))

    def launch(self, folder: PathLike) -> CommandResult:
        self.write_scripts(folder)
        return self.execute(folder)


def _is_windows() -> bool:
    return platform.system().lower() == "windows"
