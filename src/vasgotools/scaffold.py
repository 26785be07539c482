"""Creation of new Go application and library folders."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from . import templates
from .errors import FilesystemError
from .integrations.gotool import GoAdapter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

FOLDER_MODE = 0o750
FILE_MODE = 0o600
SCRIPT_MODE = 0o700

# (template name, target file name, mode)
SCRIPT_FILES: Tuple[Tuple[str, str, int], ...] = (
    (templates.BUILD_BAT, "build.bat", FILE_MODE),
    (templates.BUILD_SH, "build.sh", SCRIPT_MODE),
    (templates.CROSS_BUILD_BAT, "cross-build.bat", FILE_MODE),
    (templates.CROSS_BUILD_SH, "cross-build.sh", SCRIPT_MODE),
    (templates.GOLANGCI_WIN_YML, "golangci_win.yml", FILE_MODE),
    (templates.GOLANGCI_YML, "golangci.yml", FILE_MODE),
)
LICENSE_FILE = (templates.LICENSE, "LICENSE", FILE_MODE)
MAIN_FILE = (templates.MAIN_GO, "main.go", FILE_MODE)


def write_file(path: Path, content: str, mode: int) -> None:
    path.write_text(content, encoding="utf-8")
    os.chmod(path, mode)


def write_templates(
    folder: PathLike, files: Sequence[Tuple[str, str, int]], step: str
) -> List[Path]:
    """Write every file; all are attempted before failures are reported together."""
    folder = Path(folder)
    written: List[Path] = []
    errors: List[OSError] = []
    for template_name, filename, mode in files:
        target = folder / filename
        try:
            write_file(target, templates.get_template(template_name), mode)
        except OSError as e:
            errors.append(e)
            continue
        written.append(target)
    if errors:
        raise FilesystemError(f"Error creating {step}", errors)
    return written


class ModuleScaffolder:
    """Creates the folder, go.mod and boilerplate of a new Go module."""

    def __init__(self, go: GoAdapter) -> None:
        self.go = go

    def create_folder(self, parent: PathLike, name: str) -> Path:
        folder = Path(parent) / name
        try:
            folder.mkdir(mode=FOLDER_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError("Error creating folder", [e]) from e
        return folder

    def write_scripts(self, folder: PathLike) -> List[Path]:
        written = write_templates(folder, SCRIPT_FILES, "analyze scripts")
        logger.info("Analyze scripts and configuration files created successfully.")
        return written

    def write_license(self, folder: PathLike) -> Path:
        (path,) = write_templates(folder, [LICENSE_FILE], "LICENSE")
        logger.info("LICENSE file created successfully.")
        return path

    def write_main(self, folder: PathLike) -> Path:
        (path,) = write_templates(folder, [MAIN_FILE], "main.go")
        logger.info("main.go created successfully.")
        return path

    def scaffold(
        self,
        parent: PathLike,
        name: str,
        module_prefix: str = "",
        library: bool = False,
        no_main: bool = False,
    ) -> Path:
        """Create ``parent/name`` as the Go module ``module_prefix + name``.

        Libraries never get a main.go.
        """
        folder = self.create_folder(parent, name)
        self.go.mod_init(module_prefix + name, cwd=folder)
        self.write_scripts(folder)
        self.write_license(folder)
        if library or no_main:
            logger.info("Creation of main.go skipped.")
        else:
            self.write_main(folder)
        return folder
