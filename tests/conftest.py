"""
Shared fixtures for the vasgotools test-suite.

Provides a recording stand-in for ProcessRunner that never starts real
processes, and helpers to lay out workspace trees on disk.
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

import pytest

from vasgotools.errors import ExternalToolError
from vasgotools.integrations.editor import EditorLauncher
from vasgotools.integrations.gotool import GoAdapter
from vasgotools.integrations.process import CommandResult
from vasgotools.integrations.vcs import GitAdapter
from vasgotools.pipeline import Pipeline
from vasgotools.scaffold import ModuleScaffolder
from vasgotools.workspace import WorkspaceAssembler

Hook = Callable[[List[str], Optional[str]], None]


def fake_go_tool(argv: List[str], cwd: Optional[str]) -> None:
    """Mimic the files ``go work init`` and ``go mod init`` leave behind."""
    if len(argv) >= 3 and argv[1:3] == ["work", "init"]:
        uses = "".join(f"\t./{p}\n" for p in argv[3:])
        (Path(cwd) / "go.work").write_text(f"go 1.22\n\nuse (\n{uses})\n", encoding="utf-8")
    elif len(argv) >= 4 and argv[1:3] == ["mod", "init"]:
        (Path(cwd) / "go.mod").write_text(f"module {argv[3]}\n\ngo 1.22\n", encoding="utf-8")


class RecordingRunner:
    """ProcessRunner double that records calls instead of executing them."""

    def __init__(
        self,
        hooks: Iterable[Hook] = (),
        fail_when: Optional[Callable[[List[str]], bool]] = None,
    ):
        self.calls: List[Tuple[List[str], Optional[str]]] = []
        self.hooks = list(hooks)
        self.fail_when = fail_when

    def _record(self, argv, cwd) -> CommandResult:
        argv = list(argv)
        self.calls.append((argv, cwd))
        if self.fail_when is not None and self.fail_when(argv):
            raise ExternalToolError(
                f"Command failed (1): {' '.join(argv)}", argv=argv, code=1, cwd=cwd
            )
        for hook in self.hooks:
            hook(argv, cwd)
        return CommandResult(code=0, stdout="", stderr="", duration_s=0.0, argv=argv, cwd=cwd)

    def run(self, argv, cwd=None, env=None, check=False) -> CommandResult:
        return self._record(argv, cwd)

    def stream(self, argv, cwd=None, check=True) -> CommandResult:
        return self._record(argv, cwd)

    @property
    def argvs(self) -> List[List[str]]:
        return [argv for argv, _ in self.calls]


@pytest.fixture
def runner():
    return RecordingRunner(hooks=[fake_go_tool])


@pytest.fixture
def assembler(runner):
    return WorkspaceAssembler(GoAdapter(runner), GitAdapter(runner))


@pytest.fixture
def pipeline(runner, assembler, monkeypatch):
    monkeypatch.setattr("vasgotools.integrations.editor._is_windows", lambda: False)
    return Pipeline(
        assembler=assembler,
        scaffolder=ModuleScaffolder(GoAdapter(runner)),
        git=GitAdapter(runner),
        editor=EditorLauncher(runner),
    )


@pytest.fixture
def make_tree(tmp_path):
    """Create files (or directories, with a trailing slash) below tmp_path."""

    def _make(*paths: str) -> Path:
        for rel in paths:
            target = tmp_path / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text("", encoding="utf-8")
        return tmp_path

    return _make
