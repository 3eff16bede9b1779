"""Core git operations: the command catalog and the shell executor."""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Protocol, Union

from rich.console import Console

DEFAULT_REMOTE = "origin"

# Symbolic name -> literal command text. Entries ending in a space take an argument.
COMMANDS: Mapping[str, str] = MappingProxyType(
    {
        "log": "git log",
        "tag": "git tag",
        "fetch": "git fetch",
        "pull": "git pull",
        "status": "git status",
        "branch": "git branch",
        "branchAll": "git branch -a",
        "currentBranch": "git rev-parse --abbrev-ref HEAD",
        "currentId": "git rev-parse HEAD",
        "lastTag": "git describe --tags `git rev-list --tags --max-count=1`",
        "currentTag": "git describe --tags --abbrev=0",
        "describeTag": "git describe --tags",
        "checkout": "git checkout ",
        "trackRemote": "git branch --track ",
        "revert": "git revert",
        "resetHard": "git reset --hard ",
    }
)


class GitError(Exception):
    """Custom exception for git operation errors."""

    pass


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one shell invocation, tagged with the command text that produced it."""

    exit_code: int
    stdout: str
    stderr: str
    command_text: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def build_command(name: str, argument: Optional[str] = None) -> str:
    """Build the command text for a catalog entry, appending the optional argument."""
    return COMMANDS[name] + (argument or "")


def run_command(command_text: str, cwd: Optional[Path] = None) -> CommandResult:
    """
    Execute command text in a shell and capture its result.

    A non-zero exit code is returned as data. Only a failure to spawn the
    shell itself raises GitError. Output that is not valid UTF-8 is decoded
    with replacement characters.
    """
    try:
        result = subprocess.run(
            command_text,
            shell=True,
            cwd=cwd,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        raise GitError(f"Could not run command: {command_text}\nError: {e}") from e

    return CommandResult(
        exit_code=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        command_text=command_text,
    )


class CommandRunner(Protocol):
    """Anything able to run a command text and report a CommandResult."""

    def run(self, command_text: str) -> CommandResult:
        """Run command text to completion."""


class ShellRunner:
    """Default runner: blocking shell execution inside a working directory."""

    def __init__(self, cwd: Optional[Path] = None):
        self.cwd = cwd

    def run(self, command_text: str) -> CommandResult:
        return run_command(command_text, cwd=self.cwd)


def qualify_remote_branch(branch: str, remote_branch: Optional[str] = None) -> str:
    """Return the ref a new local branch should track, e.g. ``origin/<branch>``."""
    ref = remote_branch or branch
    if "/" in ref:
        return ref
    return f"{DEFAULT_REMOTE}/{ref}"


class GitBasicInterface:
    """
    Single-shot git operations bound to one working tree.

    Every operation builds its text from COMMANDS and hands it to the runner.
    Mutating operations return a CommandResult; read-only queries return the
    trimmed stdout and raise GitError when git fails.
    """

    def __init__(
        self,
        repo_path: Optional[Union[Path, str]] = None,
        console: Optional[Console] = None,
        runner: Optional[CommandRunner] = None,
    ):
        """Initialize GitBasicInterface with repository path, console and runner."""
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()
        self.console = console or Console()

        # Check if it's a git repository
        if not (self.repo_path / ".git").exists():
            raise GitError(f"Not a git repository: {self.repo_path}")

        self.runner = runner or ShellRunner(self.repo_path)

    def git_cmd(self, name: str, argument: Optional[str] = None) -> CommandResult:
        """Run any catalog command by name."""
        return self.runner.run(build_command(name, argument))

    # Single-shot operations
    def fetch(self) -> CommandResult:
        return self.git_cmd("fetch")

    def pull(self) -> CommandResult:
        return self.git_cmd("pull")

    def checkout(self, branch: str) -> CommandResult:
        """Switch to branch and update the working tree."""
        return self.git_cmd("checkout", branch)

    def track_remote(self, branch: str, remote_branch: Optional[str] = None) -> CommandResult:
        """Create local branch tracking a remote branch (``origin/<branch>`` by default)."""
        ref = qualify_remote_branch(branch, remote_branch)
        return self.git_cmd("trackRemote", f"{branch} {ref}")

    def revert(self) -> CommandResult:
        return self.git_cmd("revert")

    def reset_hard(self, branch_id: str) -> CommandResult:
        """Hard reset the checked-out branch to branch_id."""
        return self.git_cmd("resetHard", branch_id)

    def status(self) -> CommandResult:
        return self.git_cmd("status")

    def log(self) -> CommandResult:
        return self.git_cmd("log")

    def tag(self) -> CommandResult:
        return self.git_cmd("tag")

    def branch(self) -> CommandResult:
        return self.git_cmd("branch")

    def branch_all(self) -> CommandResult:
        return self.git_cmd("branchAll")

    # Read-only queries
    def query(self, name: str) -> str:
        """Run a catalog query and return its trimmed stdout."""
        result = self.git_cmd(name)
        if not result.ok:
            raise GitError(f"Git command failed: {result.command_text}\nError: {result.stderr}")
        return result.stdout.strip()

    def current(self) -> str:
        """Get the name of the current branch."""
        return self.query("currentBranch")

    def current_id(self) -> str:
        """Get the commit SHA of HEAD."""
        return self.query("currentId")

    def current_tag(self) -> str:
        """
        Get the name of the tag the current branch is based on.

        When several tags point at the same commit git picks the earliest
        created one, e.g. 1.1.0 over 1.1.1 and 1.1.2.
        """
        return self.query("currentTag")

    def describe_tag(self) -> str:
        """Get ``git describe --tags`` for HEAD (same tie-break as current_tag)."""
        return self.query("describeTag")

    def last_tag(self) -> str:
        """Get the most recently created tag across all branches."""
        return self.query("lastTag")
