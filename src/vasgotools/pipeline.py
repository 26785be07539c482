#!/usr/bin/env python3
"""
Command Pipelines

Runs the ``work``, ``app`` and ``lib`` commands as a fixed sequence of stages.
A failing stage ends the run with the error recorded in the result; stages that
already completed are left as they are.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from .errors import VasGoToolsError
from .integrations.editor import EditorLauncher
from .integrations.vcs import GitAdapter
from .scaffold import ModuleScaffolder
from .workspace import AssembleResult, SubmoduleReport, WorkspaceAssembler

logger = logging.getLogger(__name__)

T = TypeVar("T")

INITIAL_COMMIT_MESSAGE = "init"


class Stage(Enum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    NO_MODULES_FOUND = "no_modules_found"
    ASSEMBLING = "assembling"
    SCAFFOLDING = "scaffolding"
    VCS_INIT = "vcs_init"
    SUB_REPO_REGISTRATION = "sub_repo_registration"
    VCS_COMMIT = "vcs_commit"
    EDITOR_LAUNCH = "editor_launch"
    DONE = "done"


# Step names used in failure messages
STAGE_LABELS = {
    Stage.DISCOVERING: "module discovery",
    Stage.NO_MODULES_FOUND: "go.work cleanup",
    Stage.ASSEMBLING: "go.work generation",
    Stage.SCAFFOLDING: "module creation",
    Stage.VCS_INIT: "git repository initialization",
    Stage.SUB_REPO_REGISTRATION: "git submodule registration",
    Stage.VCS_COMMIT: "initial commit",
    Stage.EDITOR_LAUNCH: "editor launch",
}


@dataclass
class PipelineResult:
    """Outcome of one command invocation."""

    stage: Stage = Stage.IDLE
    completed: List[Stage] = field(default_factory=list)
    failed_stage: Optional[Stage] = None
    error: Optional[VasGoToolsError] = None
    assemble: Optional[AssembleResult] = None
    submodules: Optional[SubmoduleReport] = None
    folder: Optional[Path] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is None:
            return ""
        label = STAGE_LABELS.get(self.failed_stage, "command")
        return f"Error during {label}: {self.error}"


class _StageFailed(Exception):
    pass


@dataclass
class PipelineOptions:
    no_git: bool = False
    no_code: bool = False
    keep_going: bool = False


class Pipeline:
    """Drives the stage sequence for one invocation."""

    def __init__(
        self,
        assembler: WorkspaceAssembler,
        scaffolder: ModuleScaffolder,
        git: GitAdapter,
        editor: EditorLauncher,
    ) -> None:
        self.assembler = assembler
        self.scaffolder = scaffolder
        self.git = git
        self.editor = editor

    def _enter(self, result: PipelineResult, stage: Stage, fn: Callable[[], T]) -> T:
        result.stage = stage
        logger.debug("Entering stage %s", stage.value, extra={"step": stage.value})
        try:
            value = fn()
        except VasGoToolsError as e:
            result.failed_stage = stage
            result.error = e
            result.stage = Stage.DONE
            logger.error(result.message, extra={"step": stage.value})
            raise _StageFailed() from e
        result.completed.append(stage)
        return value

    def _init_repository(
        self, result: PipelineResult, folder: Path, submodules: bool, keep_going: bool
    ) -> None:
        self._enter(result, Stage.VCS_INIT, lambda: self.git.init(folder))
        logger.info("Git repository initialized successfully.")
        if submodules:
            result.submodules = self._enter(
                result,
                Stage.SUB_REPO_REGISTRATION,
                lambda: self.assembler.register_sub_repositories(
                    folder, keep_going=keep_going
                ),
            )

        def commit() -> None:
            self.git.add(".", cwd=folder)
            self.git.commit(INITIAL_COMMIT_MESSAGE, cwd=folder)

        self._enter(result, Stage.VCS_COMMIT, commit)
        logger.info("All files added and initial commit created.")

    def _launch_editor(self, result: PipelineResult, folder: Path) -> None:
        self._enter(result, Stage.EDITOR_LAUNCH, lambda: self.editor.launch(folder))
        logger.info("Editor opened successfully.")

    def run_workspace(self, root: Path, options: PipelineOptions) -> PipelineResult:
        """discover -> assemble -> git init/submodules/commit -> editor."""
        result = PipelineResult(folder=root)
        try:
            refs = self._enter(
                result, Stage.DISCOVERING, lambda: self.assembler.discover(root)
            )
            if refs:
                logger.info(
                    "Subfolders containing go.mod: %s", ", ".join(r.path for r in refs)
                )
            stage = Stage.ASSEMBLING if refs else Stage.NO_MODULES_FOUND
            result.assemble = self._enter(
                result, stage, lambda: self.assembler.assemble(root, refs)
            )

            if options.no_git:
                logger.info("Git repository initialization skipped.")
            else:
                self._init_repository(result, root, True, options.keep_going)

            if options.no_code:
                logger.info("Creation and execution of open_vscode file skipped.")
            else:
                self._launch_editor(result, root)
        except _StageFailed:
            return result

        result.stage = Stage.DONE
        return result

    def run_module(
        self,
        parent: Path,
        name: str,
        module_prefix: str,
        library: bool,
        no_main: bool,
        options: PipelineOptions,
    ) -> PipelineResult:
        """scaffold -> editor -> git init/commit."""
        result = PipelineResult()
        try:
            result.folder = self._enter(
                result,
                Stage.SCAFFOLDING,
                lambda: self.scaffolder.scaffold(
                    parent, name, module_prefix, library=library, no_main=no_main
                ),
            )

            if options.no_code:
                logger.info("Creation and execution of open_vscode file skipped.")
            else:
                self._launch_editor(result, result.folder)

            if options.no_git:
                logger.info("Git repository initialization skipped.")
            else:
                self._init_repository(result, result.folder, False, False)
        except _StageFailed:
            return result

        result.stage = Stage.DONE
        return result
