"""gitscript - scripting shortcuts over the git command line."""

from .git_basic import (
    COMMANDS,
    CommandResult,
    GitBasicInterface,
    GitError,
    build_command,
    run_command,
)
from .status import RepoStatus, classify_status, get_changed_msg, is_ready, read_status
from .workflow import WorkflowRecord, revert_update, update

__version__ = "0.1.0"

__all__ = [
    "COMMANDS",
    "CommandResult",
    "GitBasicInterface",
    "GitError",
    "RepoStatus",
    "WorkflowRecord",
    "build_command",
    "classify_status",
    "get_changed_msg",
    "is_ready",
    "read_status",
    "revert_update",
    "run_command",
    "update",
]
