"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


@pytest.fixture
def progress_path(tmp_path):
    return tmp_path / "progress.json"


@pytest.fixture
def cli(progress_path):
    """
    Run a CLI command and return exit code, stdout, stderr.

    Progress goes to a temp file and no API key is configured, so the
    mentor commands never reach the network.
    """
    base_env = {
        **os.environ,
        "PATHFINDER_PROGRESS_FILE": str(progress_path),
        "PATHFINDER_GEMINI_API_KEY": "",
        "COLUMNS": "200",
    }

    def run_cli_command(
        command: list[str],
        stdin: str | None = None,
        env: dict[str, str] | None = None,
        timeout: int = 30,
    ) -> tuple[int, str, str]:
        result = subprocess.run(
            [sys.executable, "-m", "pathfinder.cli.main", *command],
            cwd=PROJECT_ROOT,
            env={**base_env, **(env or {})},
            input=stdin,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return result.returncode, result.stdout, result.stderr

    return run_cli_command


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self, cli):
        code, stdout, stderr = cli(["--help"])

        assert code == 0, f"Help failed: {stderr}"
        assert "pathfinder" in stdout.lower()
        assert "Commands" in stdout

    @pytest.mark.parametrize("command", ["roadmap", "toggle", "stage", "guide", "scenario", "reset"])
    def test_command_help(self, cli, command):
        code, stdout, stderr = cli([command, "--help"])

        assert code == 0, f"{command} help failed: {stderr}"


class TestCLIConfig:
    """Test settings handling at startup."""

    def test_lowercase_log_level(self, cli):
        code, stdout, stderr = cli(["roadmap"], env={"PATHFINDER_LOG_LEVEL": "info"})

        assert code == 0, f"Roadmap failed: {stderr}"
        assert "Phase 1" in stdout

    def test_invalid_log_level(self, cli):
        code, stdout, stderr = cli(["roadmap"], env={"PATHFINDER_LOG_LEVEL": "loud"})

        assert code == 1
        assert "Invalid configuration" in stdout
        assert "Traceback" not in stderr


class TestCLIProgress:
    """Test roadmap, skills and toggle."""

    def test_roadmap_fresh(self, cli):
        code, stdout, stderr = cli(["roadmap"])

        assert code == 0, f"Roadmap failed: {stderr}"
        assert "Phase 1" in stdout
        assert "locked" in stdout

    def test_skills(self, cli):
        code, stdout, stderr = cli(["skills"])

        assert code == 0, f"Skills failed: {stderr}"
        assert "linux" in stdout
        assert "Foundations" in stdout

    def test_toggle_persists(self, cli, progress_path):
        code, stdout, stderr = cli(["toggle", "linux", "git"])

        assert code == 0, f"Toggle failed: {stderr}"
        assert json.loads(progress_path.read_text()) == {"git": True, "linux": True}
        assert "50%" in stdout

    def test_toggle_twice_unchecks(self, cli, progress_path):
        cli(["toggle", "linux"])
        code, _, _ = cli(["toggle", "linux"])

        assert code == 0
        assert json.loads(progress_path.read_text()) == {}

    def test_toggle_unknown_skill(self, cli, progress_path):
        code, stdout, _ = cli(["toggle", "cobol"])

        assert code == 1
        assert "Unknown skill" in stdout
        assert not progress_path.exists()

    def test_corrupt_progress_starts_empty(self, cli, progress_path):
        progress_path.write_text("{broken")

        code, stdout, stderr = cli(["roadmap"])

        assert code == 0, f"Roadmap failed: {stderr}"
        assert "0%" in stdout


class TestCLIStages:
    """Test stage and capstone views."""

    def test_first_stage_open(self, cli):
        code, stdout, stderr = cli(["stage", "1"])

        assert code == 0, f"Stage failed: {stderr}"
        assert "Monolith Server" in stdout
        assert "--extras" in stdout

    def test_stage_extras(self, cli):
        code, stdout, stderr = cli(["stage", "1", "--extras"])

        assert code == 0, f"Stage extras failed: {stderr}"
        assert "Cheat Sheet" in stdout

    def test_second_stage_locked(self, cli):
        code, stdout, _ = cli(["stage", "1-bonus"])

        assert code == 1
        assert "Phase 1" in stdout

    def test_stage_unlocks_after_predecessor(self, cli):
        cli(["toggle", "linux", "networking", "git", "webservers"])

        code, stdout, stderr = cli(["stage", "1-bonus"])

        assert code == 0, f"Stage failed: {stderr}"
        assert "Cloud PBX" in stdout

    def test_unknown_stage(self, cli):
        code, stdout, _ = cli(["stage", "99"])

        assert code == 1
        assert "Unknown stage" in stdout

    def test_capstone_locked(self, cli):
        code, stdout, stderr = cli(["capstone"])

        assert code == 0, f"Capstone failed: {stderr}"
        assert "Complete all previous phases" in stdout

    def test_capstone_unlocked_by_last_stage(self, cli):
        cli(["toggle", "ansible", "jenkins", "terraform", "k8s_admin"])

        code, stdout, stderr = cli(["capstone"])

        assert code == 0, f"Capstone failed: {stderr}"
        assert "Cloud-Native" in stdout


class TestCLIReset:
    """Test reset confirmation."""

    def test_reset_yes(self, cli, progress_path):
        cli(["toggle", "linux"])

        code, stdout, stderr = cli(["reset", "--yes"])

        assert code == 0, f"Reset failed: {stderr}"
        assert "Progress reset" in stdout
        assert json.loads(progress_path.read_text()) == {}

    def test_reset_declined(self, cli, progress_path):
        cli(["toggle", "linux"])

        code, stdout, _ = cli(["reset"], stdin="n\n")

        assert code == 0
        assert "Reset cancelled" in stdout
        assert json.loads(progress_path.read_text()) == {"linux": True}


class TestCLIMentor:
    """Mentor commands without an API key."""

    def test_guide_without_key(self, cli):
        code, stdout, stderr = cli(["guide", "1", "1"])

        assert code == 0, f"Guide failed: {stderr}"
        assert "Failed to contact the AI Mentor." in stdout

    def test_scenario_without_key(self, cli):
        code, stdout, stderr = cli(["scenario", "1"])

        assert code == 0, f"Scenario failed: {stderr}"
        assert "Failed to generate scenario." in stdout

    def test_guide_bad_task_number(self, cli):
        code, stdout, _ = cli(["guide", "1", "9"])

        assert code == 1
        assert "task(s)" in stdout

    def test_guide_locked_stage(self, cli):
        code, _, _ = cli(["guide", "2", "1"])

        assert code == 1
