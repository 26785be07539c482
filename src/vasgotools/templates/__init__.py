"""Read-only bundle of the boilerplate files written into new modules.

The texts are loaded from package data on first use and cached for the rest
of the process; callers get the same immutable mapping every time.
"""

from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Mapping

BUILD_BAT = "build.bat"
BUILD_SH = "build.sh"
CROSS_BUILD_BAT = "cross-build.bat"
CROSS_BUILD_SH = "cross-build.sh"
GOLANGCI_WIN_YML = "golangci_win.yml"
GOLANGCI_YML = "golangci.yml"
LICENSE = "LICENSE"
MAIN_GO = "main.go.template"

TEMPLATE_NAMES = (
    BUILD_BAT,
    BUILD_SH,
    CROSS_BUILD_BAT,
    CROSS_BUILD_SH,
    GOLANGCI_WIN_YML,
    GOLANGCI_YML,
    LICENSE,
    MAIN_GO,
)


@lru_cache(maxsize=None)
def load_templates() -> Mapping[str, str]:
    root = resources.files(__name__)
    return MappingProxyType(
        {name: root.joinpath(name).read_text(encoding="utf-8") for name in TEMPLATE_NAMES}
    )


def get_template(name: str) -> str:
    try:
        return load_templates()[name]
    except KeyError:
        raise KeyError(f"Unknown template: {name}") from None
