"""Test doubles for gitscript."""

import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from gitscript.git_basic import CommandResult, GitBasicInterface


class FakeRunner:
    """Runner replaying scripted exit codes in order; 0 once the script runs out."""

    def __init__(
        self, exit_codes: Optional[List[int]] = None, stdout: Optional[Dict[str, str]] = None
    ):
        self.exit_codes = list(exit_codes or [])
        self.stdout = stdout or {}
        self.commands: List[str] = []

    def run(self, command_text: str) -> CommandResult:
        self.commands.append(command_text)
        exit_code = self.exit_codes.pop(0) if self.exit_codes else 0
        return CommandResult(
            exit_code=exit_code,
            stdout=self.stdout.get(command_text, ""),
            stderr="" if exit_code == 0 else f"error: {command_text} failed",
            command_text=command_text,
        )


class FakeRepoMixin:
    """Provides ``make_git`` backed by a temporary directory that looks like a repository."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.repo_path = Path(self._tmp.name)
        (self.repo_path / ".git").mkdir()

    def tearDown(self):
        self._tmp.cleanup()

    def make_git(self, runner: FakeRunner) -> GitBasicInterface:
        return GitBasicInterface(repo_path=self.repo_path, runner=runner)
