#!/usr/bin/env python3
"""
Workspace Assembler

Finds every Go module (a directory holding ``go.mod``) below a root folder,
regenerates the ``go.work`` descriptor for them via ``go work init`` and
registers nested git checkouts as submodules of the root repository.

Walk order is lexical at every directory level, matching ``filepath.Walk``,
so the module list passed to the go tool is stable across platforms.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .errors import ExternalToolError, FilesystemError
from .integrations.gotool import GoAdapter
from .integrations.vcs import GitAdapter

logger = logging.getLogger(__name__)

MODULE_MANIFEST = "go.mod"
WORKSPACE_FILE = "go.work"
WORKSPACE_SUM_FILE = "go.work.sum"
VCS_DIR = ".git"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ModuleReference:
    """Directory of a go.mod file, relative to the workspace root."""

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass
class AssembleResult:
    """Outcome of a go.work regeneration."""

    references: List[ModuleReference]
    descriptor: Path
    removed: List[Path] = field(default_factory=list)
    created: bool = False

    @property
    def nothing_to_assemble(self) -> bool:
        return not self.references


@dataclass
class SubmoduleReport:
    """Registered submodules and, with keep-going, the ones that failed."""

    registered: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.registered)


class SubmoduleError(ExternalToolError):
    """Aggregate failure of a keep-going submodule registration."""

    def __init__(self, message: str, report: SubmoduleReport):
        super().__init__(message)
        self.report = report


def walk(root: PathLike) -> Iterator[os.DirEntry]:
    """Yield every entry below root, depth first, names in lexical order.

    Any error while listing or stat-ing an entry is raised as FilesystemError.
    Symlinked directories are reported but not followed.
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
        for entry in entries:
            yield entry
            if entry.is_dir(follow_symlinks=False):
                yield from walk(entry.path)
    except OSError as e:
        raise FilesystemError(f"Error walking the directory {root}", [e]) from e


def _relative(root: Path, directory: str) -> str:
    rel = Path(directory).relative_to(root)
    return str(PurePosixPath(*rel.parts)) if rel.parts else "."


class WorkspaceAssembler:
    """Discovers Go modules and wires them into a go.work workspace."""

    def __init__(self, go: GoAdapter, git: Optional[GitAdapter] = None) -> None:
        self.go = go
        self.git = git

    def discover(self, root: PathLike) -> List[ModuleReference]:
        """Return the folder of every go.mod below root, relative to root."""
        root_path = Path(root)
        references: List[ModuleReference] = []
        for entry in walk(root_path):
            try:
                is_manifest = entry.name == MODULE_MANIFEST and entry.is_file()
            except OSError as e:
                raise FilesystemError(f"Cannot stat {entry.path}", [e]) from e
            if is_manifest:
                ref = ModuleReference(_relative(root_path, os.path.dirname(entry.path)))
                logger.debug("Found module %s", ref)
                references.append(ref)
        return references

    def remove_descriptor(self, root: PathLike) -> List[Path]:
        """Delete go.work and go.work.sum if present. Returns what was removed."""
        removed = []
        for name in (WORKSPACE_FILE, WORKSPACE_SUM_FILE):
            target = Path(root) / name
            if not target.exists():
                continue
            logger.info("%s file already exists at %s => deleting", name, target)
            try:
                target.unlink()
            except OSError as e:
                raise FilesystemError(f"Error deleting {name} file", [e]) from e
            removed.append(target)
        return removed

    def assemble(
        self, root: PathLike, references: Sequence[ModuleReference]
    ) -> AssembleResult:
        """Regenerate go.work at root from scratch for the given modules.

        Raises ExternalToolError if ``go work init`` fails; an empty reference
        list is not an error and leaves root without a descriptor.
        """
        root_path = Path(root)
        result = AssembleResult(
            references=list(references), descriptor=root_path / WORKSPACE_FILE
        )
        result.removed = self.remove_descriptor(root_path)

        if not references:
            logger.info("No subfolders with go.mod found. No go.work file created.")
            return result

        self.go.work_init([ref.path for ref in references], cwd=root_path)
        result.created = True
        logger.info("go.work file created successfully.")
        return result

    def find_sub_repositories(self, root: PathLike) -> List[str]:
        """Relative paths of git checkouts strictly below root."""
        root_path = Path(root)
        found = []
        for entry in walk(root_path):
            if entry.name != VCS_DIR:
                continue
            try:
                is_checkout = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise FilesystemError(f"Cannot stat {entry.path}", [e]) from e
            if not is_checkout:
                continue
            rel = _relative(root_path, os.path.dirname(entry.path))
            if rel == ".":
                continue
            found.append(rel)
        return found

    def register_sub_repositories(
        self, root: PathLike, keep_going: bool = False
    ) -> SubmoduleReport:
        """Add every nested checkout below root as a git submodule.

        The first failure aborts the remaining registrations unless
        ``keep_going`` is set, in which case all are attempted and a single
        ExternalToolError summarising the failures is raised at the end.
        """
        if self.git is None:
            raise ValueError("register_sub_repositories needs a GitAdapter")

        root_path = Path(root).resolve()
        report = SubmoduleReport()
        for rel in self.find_sub_repositories(root_path):
            repo_path = root_path / rel
            logger.info("Adding submodule: %s", rel)
            try:
                self.git.submodule_add(repo_path, rel, cwd=root_path)
            except ExternalToolError as e:
                if not keep_going:
                    raise ExternalToolError(
                        f"error adding submodule {rel}: {e}",
                        argv=e.argv,
                        code=e.code,
                        cwd=e.cwd,
                    ) from e
                logger.error("error adding submodule %s: %s", rel, e)
                report.failed.append((rel, str(e)))
                continue
            report.registered.append(rel)

        if report.failed:
            names = ", ".join(rel for rel, _ in report.failed)
            raise SubmoduleError(
                f"{len(report.failed)} submodule(s) could not be added: {names}", report
            )
        return report
