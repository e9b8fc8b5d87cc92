"""External tools df-sol shells out to.

License lookup and framework version probing are exposed as small provider
objects so the workspace initializer can be handed fakes in tests and the
template catalog never runs a subprocess itself.  Dependency installation,
``git init`` and generator commands are best-effort: they warn on failure
and never raise.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Protocol

from .errors import ExternalToolError
from .utils import print_warning, run_command

_SEMVER_PATTERN = re.compile(r"(\d+\.\d+\.\d+)")


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


class LicenseProvider(Protocol):
    async def get_license(self) -> str: ...


class VersionProvider(Protocol):
    async def get_version(self) -> str: ...


class StaticLicenseProvider:
    """Returns a fixed license string (``--license`` or tests)."""

    def __init__(self, license: str) -> None:
        self.license = license

    async def get_license(self) -> str:
        return self.license


class NpmLicenseProvider:
    """Asks npm for the license ``npm init`` would use."""

    async def get_license(self) -> str:
        code, stdout, stderr = await run_command(["npm", "config", "get", "init-license"])
        if code != 0:
            raise ExternalToolError("npm", f"failed to get npm init license: {stderr}")
        return stdout.strip()


class StaticVersionProvider:
    """Returns a fixed framework version."""

    def __init__(self, version: str) -> None:
        self.version = version

    async def get_version(self) -> str:
        return self.version


class AnchorVersionProvider:
    """Probes the installed ``anchor`` CLI (``anchor-cli 0.30.0``)."""

    async def get_version(self) -> str:
        code, stdout, stderr = await run_command(["anchor", "--version"])
        if code != 0:
            raise ExternalToolError("anchor", f"failed to get anchor version: {stderr}")
        return parse_version(stdout)


def parse_version(output: str) -> str:
    """Extract the first ``X.Y.Z`` from a ``--version`` banner."""
    match = _SEMVER_PATTERN.search(output)
    if match is None:
        raise ExternalToolError("anchor", f"failed to parse anchor version from {output!r}")
    return match.group(1)


# ---------------------------------------------------------------------------
# Best-effort collaborators
# ---------------------------------------------------------------------------


async def install_node_modules(root: Path, timeout: Optional[float] = None) -> bool:
    """Install JavaScript dependencies with yarn, falling back to npm.

    Returns ``True`` if either installer succeeded.
    """
    code, _, stderr = await run_command(
        ["yarn", "install"], cwd=root, timeout=timeout, capture=False
    )
    if code == 0:
        return True

    print_warning("Failed yarn install will attempt to npm install")
    code, _, stderr = await run_command(
        ["npm", "install"], cwd=root, timeout=timeout, capture=False
    )
    if code == 0:
        return True

    print_warning(f"npm install failed{': ' + stderr if stderr else ''}")
    return False


async def init_git(root: Path) -> bool:
    """Run ``git init`` in *root*; returns ``False`` (with a warning) on failure."""
    code, _, stderr = await run_command(["git", "init"], cwd=root, capture=False)
    if code != 0:
        print_warning(
            "Failed to automatically initialize a new git repository"
            + (f": {stderr}" if stderr else "")
        )
        return False
    return True


async def run_pre_commands(root: Path, commands: list[list[str]]) -> None:
    """Run generator commands (e.g. ``cargo new``) inside *root*.

    Failures only warn: the files these commands would create are written
    afterwards with overwrite semantics regardless.
    """
    for cmd in commands:
        code, _, stderr = await run_command(cmd, cwd=root)
        if code != 0:
            print_warning(f"{' '.join(cmd)} failed: {stderr or f'exit code {code}'}")
