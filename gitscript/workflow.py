"""Multi-step git workflows that stop at the first failing step."""

from typing import Any, Dict, List, Optional

from .git_basic import CommandResult, GitBasicInterface


class WorkflowRecord:
    """
    Log of a multi-step workflow.

    ``records`` holds one CommandResult per attempted step, in execution
    order. The top-level fields mirror the last step pushed, so
    ``record.exit_code`` tells the caller whether the workflow succeeded.
    """

    def __init__(self) -> None:
        self.exit_code = 0
        self.stdout = ""
        self.stderr = ""
        self.command_text = ""
        self.records: List[CommandResult] = []

    def push(self, result: CommandResult) -> CommandResult:
        """Record a step, overwriting the last observed fields."""
        self.exit_code = result.exit_code
        self.stdout = result.stdout
        self.stderr = result.stderr
        self.command_text = result.command_text
        self.records.append(result)
        return result

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "exit_code": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "command_text": self.command_text,
            "records": [
                {
                    "exit_code": step.exit_code,
                    "stdout": step.stdout,
                    "stderr": step.stderr,
                    "command_text": step.command_text,
                }
                for step in self.records
            ],
        }


def _fetch_and_checkout(
    git: GitBasicInterface, record: WorkflowRecord, branch: str, remote_branch: Optional[str]
) -> bool:
    """
    Fetch, then check out branch, creating it from its remote if needed.

    Returns:
        True when branch is checked out, False if a step failed
    """
    if not record.push(git.fetch()).ok:
        return False

    if record.push(git.checkout(branch)).ok:
        return True

    # Branch is not local yet: track the remote one and retry the checkout once
    if not record.push(git.track_remote(branch, remote_branch)).ok:
        return False
    return record.push(git.checkout(branch)).ok


def update(
    git: GitBasicInterface, branch: str, remote_branch: Optional[str] = None
) -> WorkflowRecord:
    """Check out branch (tracking remote_branch if it does not exist locally) and pull."""
    record = WorkflowRecord()
    if _fetch_and_checkout(git, record, branch, remote_branch):
        record.push(git.pull())
    return record


def revert_update(git: GitBasicInterface, branch: str, branch_id: str) -> WorkflowRecord:
    """Check out branch and hard reset it to branch_id, a commit on that branch."""
    record = WorkflowRecord()
    if _fetch_and_checkout(git, record, branch, None):
        record.push(git.reset_hard(branch_id))
    return record
