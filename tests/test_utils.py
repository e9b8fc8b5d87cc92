"""Unit tests for utility functions (dfsol.utils).

Tests cover:
- run_command (success, failure, missing program, timeout, cwd, env, capture=False)
- Rich output helpers (print_summary_table, print_success, etc.)
"""

from __future__ import annotations

import sys

import pytest

from dfsol.utils import (
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.asyncio
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "print('hello')"]
        )
        assert returncode == 0
        assert stdout == "hello"
        assert stderr == ""

    @pytest.mark.asyncio
    async def test_failing_command(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "bad"

    @pytest.mark.asyncio
    async def test_missing_program(self):
        returncode, stdout, stderr = await run_command(["dfsol-no-such-program-xyz"])
        assert returncode == 127
        assert stdout == ""
        assert "dfsol-no-such-program-xyz" in stderr

    @pytest.mark.asyncio
    async def test_timeout(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.2
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.asyncio
    async def test_cwd(self, tmp_path):
        _, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert stdout == str(tmp_path.resolve())

    @pytest.mark.asyncio
    async def test_env_is_merged(self):
        _, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['DFSOL_TEST_VAR'])"],
            env={"DFSOL_TEST_VAR": "42"},
        )
        assert stdout == "42"

    @pytest.mark.asyncio
    async def test_capture_false_returns_empty_output(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "print('inherited')"], capture=False
        )
        assert returncode == 0
        assert stdout == ""
        assert stderr == ""


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    def test_print_summary_table(self):
        print_summary_table({"Workspace": "/tmp/my-app", "Language": "typescript"}, title="df-sol")

    def test_print_success(self):
        print_success("my-app initialized")

    def test_print_error(self):
        print_error("Error: Directory 'my-app' already exists")

    def test_print_warning(self):
        print_warning("Failed to automatically initialize a new git repository")
