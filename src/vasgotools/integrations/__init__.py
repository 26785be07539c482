"""Adapters for the external tools driven by vasgotools (go, git, editor)."""

from .editor import EditorLauncher
from .gotool import GoAdapter
from .process import CommandResult, ProcessRunner
from .vcs import GitAdapter

__all__ = [
    "CommandResult",
    "EditorLauncher",
    "GitAdapter",
    "GoAdapter",
    "ProcessRunner",
]
