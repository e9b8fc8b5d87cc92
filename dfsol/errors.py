"""Exceptions raised by df-sol.

Everything the CLI should turn into a non-zero exit derives from
:class:`DfSolError`.  Installer and git failures have no exception here;
they are reported as warnings and never abort a scaffold.
"""

from __future__ import annotations

from pathlib import Path


class DfSolError(Exception):
    """Base class for fatal df-sol errors."""


class InvalidIdentifierError(DfSolError):
    """Raised when a workspace name cannot be used as a Rust identifier."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(
            f"Workspace name {name!r} must be a valid Rust identifier ({reason}). "
            "It may not be a Rust reserved word, start with a digit, or include "
            "certain disallowed characters. See "
            "https://doc.rust-lang.org/reference/identifiers.html for more detail."
        )


class WorkspaceExistsError(DfSolError):
    """Raised when the workspace directory exists and ``--force`` was not given."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Directory {str(path)!r} already exists. Use --force to initialize anyway."
        )


class MaterializeError(DfSolError):
    """Raised when a rendered file cannot be written to disk."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause.strerror or cause}")


class ExternalToolError(DfSolError):
    """Raised when a required external tool (npm, anchor) cannot provide a value."""

    def __init__(self, tool: str, message: str) -> None:
        self.tool = tool
        super().__init__(f"{tool}: {message}")


class KeypairError(DfSolError):
    """Raised when a cached program keypair exists but cannot be used."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Program keypair {path} is unusable: {message}")
