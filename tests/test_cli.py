"""Unit tests for the command line interface (dfsol.cli).

Tests cover:
- argument parsing defaults and flags for ``init``
- layering of CLI flags over environment configuration
- exit status 1 with a red error line on fatal errors
- end-to-end ``main`` with installers patched out
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from dfsol.cli import build_parser, config_from_args, main, options_from_args
from dfsol.scaffolder.models import Language, ProgramTemplate, TestTemplate

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("DFSOL_OUTPUT_DIR", "DFSOL_LICENSE", "DFSOL_ANCHOR_VERSION",
                "DFSOL_PROBE_ANCHOR_VERSION", "DFSOL_WALLET", "DFSOL_INSTALL_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["init", "my-app"])
        options = options_from_args(args)

        assert options.name == "my-app"
        assert options.language is Language.TYPESCRIPT
        assert options.program_template is ProgramTemplate.BASIC
        assert options.test_template is TestTemplate.MOCHA
        assert not (options.no_install or options.no_git or options.force)

    def test_all_flags(self):
        args = build_parser().parse_args([
            "init", "my-app", "-j", "--no-install", "--no-git", "-t", "mint-token",
            "--test-template", "rust", "--force",
        ])
        options = options_from_args(args)

        assert options.language is Language.JAVASCRIPT
        assert options.program_template is ProgramTemplate.MINT_TOKEN
        assert options.test_template is TestTemplate.RUST
        assert options.no_install and options.no_git and options.force

    def test_unknown_template_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["init", "my-app", "-t", "nft"])
        assert exc_info.value.code == 2

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "dfsol" in capsys.readouterr().out


class TestConfigFromArgs:
    def test_flags_override_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DFSOL_LICENSE", "ISC")
        monkeypatch.setenv("DFSOL_ANCHOR_VERSION", "0.28.0")
        args = build_parser().parse_args([
            "init", "x", "-o", str(tmp_path), "--license", "MIT", "--anchor-version", "0.29.0",
        ])

        config = config_from_args(args)

        assert config.output_dir == tmp_path
        assert config.license == "MIT"
        assert config.anchor_version == "0.29.0"
        assert config.probe_anchor_version is False

    def test_environment_used_without_flags(self, monkeypatch):
        monkeypatch.setenv("DFSOL_LICENSE", "ISC")
        config = config_from_args(build_parser().parse_args(["init", "x", "--probe-anchor-version"]))

        assert config.license == "ISC"
        assert config.probe_anchor_version is True


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    def test_invalid_name_exits_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["init", "fn", "-o", str(tmp_path), "--license", "MIT"])

        assert exc_info.value.code == 1
        assert "valid Rust identifier" in " ".join(capsys.readouterr().out.split())
        assert list(tmp_path.iterdir()) == []

    def test_existing_directory_exits_1(self, tmp_path, capsys):
        (tmp_path / "my-app").mkdir()
        with pytest.raises(SystemExit) as exc_info:
            main(["init", "my-app", "-o", str(tmp_path), "--license", "MIT"])

        assert exc_info.value.code == 1
        assert "already exists" in " ".join(capsys.readouterr().out.split())

    def test_force_over_regular_file_exits_1(self, tmp_path, capsys):
        (tmp_path / "my-app").write_text("not a directory")
        with pytest.raises(SystemExit) as exc_info:
            main(["init", "my-app", "--force", "-o", str(tmp_path), "--license", "MIT"])

        assert exc_info.value.code == 1
        out = " ".join(capsys.readouterr().out.split())
        assert "Error:" in out
        assert "Failed to write" in out
        assert (tmp_path / "my-app").read_text() == "not a directory"

    def test_scaffolds_workspace(self, tmp_path):
        with patch("dfsol.scaffolder.generator.install_node_modules", new_callable=AsyncMock) as install, \
             patch("dfsol.scaffolder.generator.init_git", new_callable=AsyncMock) as git:
            main(["init", "my-app", "-o", str(tmp_path), "--license", "MIT", "-t", "counter"])

        root = Path(tmp_path) / "my-app"
        assert "pub fn increment" in (root / "programs/my-app/src/lib.rs").read_text()
        install.assert_awaited_once()
        git.assert_awaited_once()
