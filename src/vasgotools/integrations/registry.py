from __future__ import annotations

import re
import shutil
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..config import ToolsConfig
from ..errors import ExternalToolError
from .process import ProcessRunner


@dataclass
class ToolProbe:
    name: str
    path: Optional[str]
    version: Optional[str]
    ok: bool
    details: Optional[str] = None


def _extract_version(output: str) -> Optional[str]:
    m = re.search(r"\b(v?\d+\.\d+(?:\.\d+)?[^\s]*)", output)
    return m.group(1) if m else None


def probe_binary(
    runner: ProcessRunner, name: str, binary: str, args: List[str]
) -> ToolProbe:
    resolved = shutil.which(binary)
    try:
        res = runner.run([binary] + args)
    except ExternalToolError as e:
        return ToolProbe(name=name, path=resolved, version=None, ok=False, details=str(e))
    version = _extract_version(res.stdout or res.stderr)
    return ToolProbe(
        name=name,
        path=resolved or binary,
        version=version,
        ok=res.code == 0,
        details=(res.stderr.strip() or None) if res.code != 0 else None,
    )


def detect_all(runner: ProcessRunner, config: ToolsConfig) -> Dict[str, ToolProbe]:
    """Probe every external tool the scaffolder shells out to."""
    return {
        "go": probe_binary(runner, "go", config.go_path, ["version"]),
        "git": probe_binary(runner, "git", config.git_path, ["--version"]),
        "editor": probe_binary(runner, "editor", config.editor_command, ["--version"]),
    }
