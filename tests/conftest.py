"""Shared pytest fixtures for the df-sol test suite.

Provides reusable fixtures for:
- Normalized project names and render parameters
- Fake license/version providers
- A patched ``run_command`` so no test spawns npm, yarn, git or cargo
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from dfsol.config import Config
from dfsol.naming import ProjectName, normalize
from dfsol.scaffolder.models import Language, RenderParams
from dfsol.toolchain import StaticLicenseProvider, StaticVersionProvider

# A real base58 Ed25519 public key; any 32-byte key works for rendering.
SAMPLE_PROGRAM_ID = "Fg6PaFpoGXkYsidMpWTK6W2BeZ7FEfcYkg476zPFsLnS"


# ---------------------------------------------------------------------------
# Names & parameters
# ---------------------------------------------------------------------------

@pytest.fixture
def project() -> ProjectName:
    """The ``my-app`` workspace name, normalized."""
    return normalize("my-app")


@pytest.fixture
def render_params() -> RenderParams:
    """TypeScript render parameters with fixed, deterministic values."""
    return RenderParams(
        anchor_version="0.30.0",
        license="MIT",
        program_id=SAMPLE_PROGRAM_ID,
        wallet="~/.config/solana/id.json",
        language=Language.TYPESCRIPT,
    )


@pytest.fixture
def js_render_params(render_params: RenderParams) -> RenderParams:
    return render_params.model_copy(update={"language": Language.JAVASCRIPT})


# ---------------------------------------------------------------------------
# Providers & configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def license_provider() -> StaticLicenseProvider:
    return StaticLicenseProvider("MIT")


@pytest.fixture
def version_provider() -> StaticVersionProvider:
    return StaticVersionProvider("0.30.0")


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """A config that scaffolds into the test's temporary directory."""
    return Config(output_dir=tmp_path)


# ---------------------------------------------------------------------------
# Subprocess isolation
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_run_command():
    """Patch ``run_command`` in the toolchain module.

    Every command succeeds with empty output unless the test changes
    ``mock.side_effect`` / ``mock.return_value``.

    Usage::

        def test_install(mock_run_command):
            mock_run_command.return_value = (1, "", "boom")
    """
    mock = AsyncMock(return_value=(0, "", ""))
    with patch("dfsol.toolchain.run_command", mock):
        yield mock


def commands_run(mock: AsyncMock) -> list[list[str]]:
    """Return the argv of every call recorded on a patched ``run_command``."""
    calls: list[list[str]] = []
    for call in mock.call_args_list:
        args: Any = call.args[0] if call.args else call.kwargs["cmd"]
        calls.append(list(args))
    return calls
