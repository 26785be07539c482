"""Version Control System adapters."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from .process import CommandResult, ProcessRunner

PathLike = Union[str, Path]


class GitAdapter:
    """Git version control adapter.

    Every call streams git's output and raises ExternalToolError when git
    cannot be started or exits non-zero.
    """

    def __init__(self, runner: ProcessRunner, binary: str = "git") -> None:
        self.runner = runner
        self.binary = binary

    def init(self, cwd: PathLike) -> CommandResult:
        """Initialize a repository in cwd."""
        return self.runner.stream([self.binary, "init"], cwd=str(cwd))

    def submodule_add(
        self, repo_path: PathLike, rel_path: str, cwd: PathLike
    ) -> CommandResult:
        """Register an existing checkout below cwd as a submodule."""
        return self.runner.stream(
            [self.binary, "submodule", "add", str(repo_path), rel_path], cwd=str(cwd)
        )

    def add(self, files: str = ".", cwd: PathLike = ".") -> CommandResult:
        """Add files to staging."""
        return self.runner.stream([self.binary, "add", files], cwd=str(cwd))

    def commit(self, message: str, cwd: PathLike = ".") -> CommandResult:
        """Create a commit."""
        return self.runner.stream([self.binary, "commit", "-m", message], cwd=str(cwd))
