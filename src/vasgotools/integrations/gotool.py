"""Go toolchain adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

from .process import CommandResult, ProcessRunner

PathLike = Union[str, Path]


class GoAdapter:
    """Runs ``go mod init`` and ``go work init``."""

    def __init__(self, runner: ProcessRunner, binary: str = "go") -> None:
        self.runner = runner
        self.binary = binary

    def mod_init(self, module_path: str, cwd: PathLike) -> CommandResult:
        """Create go.mod for ``module_path`` inside cwd."""
        return self.runner.stream([self.binary, "mod", "init", module_path], cwd=str(cwd))

    def work_init(self, module_dirs: Sequence[str], cwd: PathLike) -> CommandResult:
        """Create go.work in cwd listing ``module_dirs``."""
        return self.runner.stream(
            [self.binary, "work", "init", *module_dirs], cwd=str(cwd)
        )
