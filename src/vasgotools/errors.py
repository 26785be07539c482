"""Exception hierarchy for vasgotools."""

from __future__ import annotations

from typing import Optional, Sequence


class VasGoToolsError(Exception):
    """Base exception for all scaffolding failures."""

    pass


class FilesystemError(VasGoToolsError):
    """Raised when walking, reading, writing or deleting files fails.

    When several independent writes fail, ``errors`` holds every underlying
    exception and the message lists all of them.
    """

    def __init__(self, message: str, errors: Optional[Sequence[BaseException]] = None):
        self.errors = list(errors or [])
        if self.errors:
            details = "; ".join(str(e) for e in self.errors)
            message = f"{message}: {details}"
        super().__init__(message)


class ExternalToolError(VasGoToolsError):
    """Raised when an external process cannot be spawned or exits non-zero."""

    def __init__(
        self,
        message: str,
        argv: Optional[Sequence[str]] = None,
        code: Optional[int] = None,
        cwd: Optional[str] = None,
    ):
        super().__init__(message)
        self.argv = list(argv or [])
        self.code = code
        self.cwd = cwd


class ArgumentError(VasGoToolsError):
    """Raised on missing or unknown command-line arguments."""

    pass


class ConfigurationError(VasGoToolsError):
    """Raised when the configuration file is invalid."""

    pass
