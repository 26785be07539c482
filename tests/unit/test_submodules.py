"""Tests for registering nested git checkouts as submodules."""

import pytest

from vasgotools.errors import ExternalToolError, FilesystemError
from vasgotools.integrations.gotool import GoAdapter
from vasgotools.integrations.vcs import GitAdapter
from vasgotools import workspace
from vasgotools.workspace import SubmoduleError, WorkspaceAssembler

from ..conftest import RecordingRunner


def _assembler(runner):
    return WorkspaceAssembler(GoAdapter(runner), GitAdapter(runner))


def test_root_checkout_is_never_registered(make_tree):
    root = make_tree(".git/HEAD", "ext/lib1/.git/HEAD", "ext/lib1/go.mod", "app1/go.mod")
    runner = RecordingRunner()

    report = _assembler(runner).register_sub_repositories(root)

    resolved = root.resolve()
    assert report.registered == ["ext/lib1"]
    assert report.count == 1
    assert runner.calls == [
        (
            ["git", "submodule", "add", str(resolved / "ext" / "lib1"), "ext/lib1"],
            str(resolved),
        )
    ]


def test_find_sub_repositories_ignores_git_files(assembler, make_tree):
    # Worktrees and existing submodules use a .git *file*
    root = make_tree("a/.git", "b/.git/config")

    assert assembler.find_sub_repositories(root) == ["b"]


def test_no_nested_checkouts_registers_nothing(make_tree):
    root = make_tree(".git/HEAD", "app1/go.mod")
    runner = RecordingRunner()

    report = _assembler(runner).register_sub_repositories(root)

    assert report.registered == []
    assert runner.calls == []


def test_first_failure_aborts_remaining_registrations(make_tree):
    root = make_tree("a/.git/HEAD", "b/.git/HEAD")
    runner = RecordingRunner(fail_when=lambda argv: argv[-1] == "a")

    with pytest.raises(ExternalToolError) as exc_info:
        _assembler(runner).register_sub_repositories(root)

    assert "error adding submodule a" in str(exc_info.value)
    assert [argv[-1] for argv in runner.argvs] == ["a"]


def test_keep_going_attempts_all_and_reports_failures(make_tree):
    root = make_tree("a/.git/HEAD", "b/.git/HEAD", "c/.git/HEAD")
    runner = RecordingRunner(fail_when=lambda argv: argv[-1] in ("a", "c"))

    with pytest.raises(SubmoduleError) as exc_info:
        _assembler(runner).register_sub_repositories(root, keep_going=True)

    report = exc_info.value.report
    assert [argv[-1] for argv in runner.argvs] == ["a", "b", "c"]
    assert report.registered == ["b"]
    assert [rel for rel, _ in report.failed] == ["a", "c"]
    assert "2 submodule(s) could not be added: a, c" in str(exc_info.value)


def test_keep_going_without_failures_returns_report(make_tree):
    root = make_tree("a/.git/HEAD", "b/.git/HEAD")
    runner = RecordingRunner()

    report = _assembler(runner).register_sub_repositories(root, keep_going=True)

    assert report.registered == ["a", "b"]
    assert report.failed == []


def test_register_requires_git_adapter(tmp_path):
    with pytest.raises(ValueError):
        WorkspaceAssembler(GoAdapter(RecordingRunner())).register_sub_repositories(tmp_path)


class _UnstatableEntry:
    name = ".git"

    def __init__(self, path):
        self.path = path

    def is_dir(self, follow_symlinks=True):
        raise PermissionError(13, "Permission denied", self.path)


def test_stat_failure_is_a_filesystem_error(assembler, tmp_path, monkeypatch):
    entry = _UnstatableEntry(str(tmp_path / "lib" / ".git"))
    monkeypatch.setattr(workspace, "walk", lambda root: iter([entry]))

    with pytest.raises(FilesystemError) as exc_info:
        assembler.find_sub_repositories(tmp_path)
    assert "Permission denied" in str(exc_info.value)
