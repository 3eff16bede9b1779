"""Test the update and revert_update workflows."""

import unittest

from fakes import FakeRepoMixin, FakeRunner

from gitscript.git_basic import CommandResult
from gitscript.workflow import WorkflowRecord, revert_update, update


class TestWorkflowRecord(unittest.TestCase):
    """Test the step log kept by workflows."""

    def test_new_record_is_empty(self):
        """Test a new record has no steps."""
        record = WorkflowRecord()
        self.assertEqual(record.records, [])
        self.assertEqual(record.exit_code, 0)
        self.assertEqual(record.command_text, "")

    def test_top_level_fields_follow_last_step(self):
        """Test top-level fields mirror the last pushed step."""
        record = WorkflowRecord()
        record.push(CommandResult(0, "ok", "", "git fetch"))
        record.push(CommandResult(1, "", "boom", "git checkout x"))

        self.assertEqual(len(record.records), 2)
        self.assertEqual(record.exit_code, 1)
        self.assertEqual(record.stderr, "boom")
        self.assertEqual(record.command_text, "git checkout x")
        self.assertFalse(record.ok)
        self.assertEqual(record.records[0].command_text, "git fetch")

    def test_to_dict(self):
        """Test the record converts to a dictionary."""
        record = WorkflowRecord()
        record.push(CommandResult(0, "out", "", "git pull"))
        data = record.to_dict()
        self.assertEqual(data["exit_code"], 0)
        self.assertEqual(data["records"][0]["stdout"], "out")


class TestUpdate(FakeRepoMixin, unittest.TestCase):
    """Test the fetch/checkout/track/pull sequence."""

    def test_fetch_failure_stops_immediately(self):
        """Test a failed fetch ends the workflow after one step."""
        runner = FakeRunner([128])
        record = update(self.make_git(runner), "main", "origin/main")

        self.assertEqual(len(record.records), 1)
        self.assertEqual(record.exit_code, 128)
        self.assertEqual(runner.commands, ["git fetch"])

    def test_existing_branch(self):
        """Test an existing branch is fetched, checked out and pulled."""
        runner = FakeRunner([0, 0, 0])
        record = update(self.make_git(runner), "main")

        self.assertEqual(runner.commands, ["git fetch", "git checkout main", "git pull"])
        self.assertEqual(len(record.records), 3)
        self.assertTrue(record.ok)

    def test_missing_branch_is_tracked_then_checked_out(self):
        """Test a missing branch is tracked and checked out again before the pull."""
        runner = FakeRunner([0, 1, 0, 0, 0])
        record = update(self.make_git(runner), "feature-x", "origin/feature-x")

        self.assertEqual(len(record.records), 5)
        self.assertEqual(record.exit_code, 0)
        self.assertEqual(
            runner.commands,
            [
                "git fetch",
                "git checkout feature-x",
                "git branch --track feature-x origin/feature-x",
                "git checkout feature-x",
                "git pull",
            ],
        )

    def test_remote_branch_without_remote_is_qualified(self):
        """Test a remote branch without a remote gets origin/ prepended."""
        runner = FakeRunner([0, 1, 0, 0, 0])
        update(self.make_git(runner), "feature-x", "feature-y")
        self.assertIn("git branch --track feature-x origin/feature-y", runner.commands)

    def test_track_failure(self):
        """Test a failed track ends the workflow."""
        runner = FakeRunner([0, 1, 128])
        record = update(self.make_git(runner), "nope")

        self.assertEqual(len(record.records), 3)
        self.assertEqual(record.exit_code, 128)
        self.assertEqual(record.command_text, "git branch --track nope origin/nope")

    def test_checkout_retry_failure(self):
        """Test a failed checkout retry ends the workflow."""
        runner = FakeRunner([0, 1, 0, 1])
        record = update(self.make_git(runner), "feature-x")

        self.assertEqual(len(record.records), 4)
        self.assertEqual(record.exit_code, 1)
        self.assertEqual(record.command_text, "git checkout feature-x")

    def test_pull_failure_is_recorded(self):
        """Test a failed pull is the last recorded step."""
        runner = FakeRunner([0, 0, 1])
        record = update(self.make_git(runner), "main")

        self.assertEqual(len(record.records), 3)
        self.assertEqual(record.exit_code, 1)
        self.assertEqual(record.command_text, "git pull")


class TestRevertUpdate(FakeRepoMixin, unittest.TestCase):
    """Test the fetch/checkout/reset sequence."""

    def test_existing_branch(self):
        """Test an existing branch is fetched, checked out and reset."""
        runner = FakeRunner([0, 0, 0])
        record = revert_update(self.make_git(runner), "release", "2148430b")

        self.assertEqual(len(record.records), 3)
        self.assertTrue(record.ok)
        self.assertIn("2148430b", record.records[-1].command_text)
        self.assertEqual(record.command_text, "git reset --hard 2148430b")

    def test_missing_branch_tracks_origin(self):
        """Test a missing branch tracks origin/<branch> before the reset."""
        runner = FakeRunner([0, 1, 0, 0, 0])
        record = revert_update(self.make_git(runner), "release", "2148430b")

        self.assertEqual(len(record.records), 5)
        self.assertEqual(runner.commands[2], "git branch --track release origin/release")
        self.assertEqual(runner.commands[-1], "git reset --hard 2148430b")

    def test_reset_failure(self):
        """Test a failed reset is the last recorded step."""
        runner = FakeRunner([0, 0, 128])
        record = revert_update(self.make_git(runner), "release", "deadbeef")

        self.assertEqual(len(record.records), 3)
        self.assertEqual(record.exit_code, 128)

    def test_fetch_failure(self):
        """Test a failed fetch ends the revert after one step."""
        runner = FakeRunner([1])
        record = revert_update(self.make_git(runner), "release", "deadbeef")
        self.assertEqual(len(record.records), 1)
        self.assertEqual(runner.commands, ["git fetch"])


if __name__ == "__main__":
    unittest.main()
