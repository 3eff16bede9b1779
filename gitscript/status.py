"""Working tree cleanliness, read from the hints in ``git status`` output."""

import re
from enum import Enum
from typing import Optional

from rich.console import Console

from .git_basic import GitBasicInterface

# Matches hint lines such as:
#   (use "git add <file>..." to update what will be committed)
#   (use "git push" to publish your local commits)
# The hint text varies with git's version and locale; porcelain output would not.
HINT_PATTERN = re.compile(r"""^\s*\(use\s+["']git\s+(add|push)""", re.MULTILINE | re.IGNORECASE)


class RepoStatus(Enum):
    """Cleanliness of a working tree, with the message shown to the user."""

    CLEAN = ""
    UNCOMMITTED = "Still has uncommitted changes! Commit them first!"
    UNPUSHED = "Still has unpushed local commits! Push them first!"

    @property
    def message(self) -> str:
        return self.value


def classify_status(status_text: str) -> RepoStatus:
    """
    Classify ``git status`` text as clean, uncommitted or unpushed.

    A ``git add`` hint anywhere wins over a ``git push`` hint.
    """
    hints = {hint.lower() for hint in HINT_PATTERN.findall(status_text)}
    if "add" in hints:
        return RepoStatus.UNCOMMITTED
    if "push" in hints:
        return RepoStatus.UNPUSHED
    return RepoStatus.CLEAN


def read_status(git: GitBasicInterface) -> RepoStatus:
    """
    Run ``git status`` and classify its output.

    Raises:
        GitError: If git status exits non-zero
    """
    return classify_status(git.query("status"))


def get_changed_msg(git: GitBasicInterface, console: Optional[Console] = None) -> str:
    """
    Get the message describing pending changes on the current branch.

    Returns:
        The message, or an empty string when everything is committed and pushed

    Raises:
        GitError: If git status exits non-zero
    """
    msg = read_status(git).message
    if msg:
        (console or git.console).print(f"[yellow]{msg}[/yellow]")
    return msg


def is_ready(git: GitBasicInterface) -> bool:
    """Check that all changes are committed and pushed."""
    return read_status(git) is RepoStatus.CLEAN
