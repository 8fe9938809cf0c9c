import os
import tempfile
import unittest
from unittest import mock

from config import GlobalConfig
from context import RunContext
from exceptions import ExecutableNotFoundError
from models import MarkerConfig
from runners.base import RUNNER_REGISTRY, CommandRunner, register_runner
from runners.dry_run import DryRunRunner, git_subcommand
from runners.factory import get_runner
from runners.recording import RecordingRunner
from runners.subprocess_runner import SubprocessRunner


def make_context(dry_run=False, runner_id="subprocess") -> RunContext:
    return RunContext(
        repo_path=tempfile.gettempdir(),
        marker=MarkerConfig(),
        insert_mode="append",
        base_branch="main",
        remote="origin",
        dummy_message="dummy commit",
        dry_run=dry_run,
        no_editor=False,
        global_config=GlobalConfig(),
        runner_id=runner_id,
    )


class TestRegistry(unittest.TestCase):

    def test_builtin_runners_registered(self):
        get_runner(make_context())
        for runner_id in ("subprocess", "dry-run", "recording"):
            self.assertIn(runner_id, RUNNER_REGISTRY)

    def test_duplicate_registration_rejected(self):
        with self.assertRaises(ValueError):

            @register_runner("subprocess")
            class Duplicate(CommandRunner):
                def run(self, program, args, capture=True, env=None):
                    pass

    def test_factory(self):
        self.assertIsInstance(get_runner(make_context()), SubprocessRunner)
        self.assertIsInstance(get_runner(make_context(dry_run=True)), DryRunRunner)
        self.assertIsInstance(get_runner(make_context(runner_id="recording")), RecordingRunner)
        with self.assertRaises(ValueError):
            get_runner(make_context(runner_id="nope"))


class TestGitSubcommand(unittest.TestCase):

    def test_skips_config_options(self):
        self.assertEqual(git_subcommand(["-c", "log.ShowSignature=false", "log", "--cherry"]), "log")
        self.assertEqual(git_subcommand(["push", "--set-upstream"]), "push")
        self.assertIsNone(git_subcommand([]))


class TestSubprocessRunner(unittest.TestCase):

    def test_missing_executable(self):
        runner = SubprocessRunner()
        with mock.patch("runners.subprocess_runner.shutil.which", return_value=None):
            with self.assertRaises(ExecutableNotFoundError):
                runner.run("git", ["status"])

    def test_captured_run(self):
        completed = mock.Mock(returncode=0, stdout="refs/heads/x\n", stderr="")
        runner = SubprocessRunner(cwd="/repo")
        with mock.patch("runners.subprocess_runner.shutil.which", return_value="/usr/bin/git"), \
                mock.patch("runners.subprocess_runner.subprocess.run", return_value=completed) as run:
            result = runner.run("git", ["symbolic-ref", "--quiet", "HEAD"])

        self.assertTrue(result.ok)
        self.assertEqual(result.stdout, "refs/heads/x\n")
        args, kwargs = run.call_args
        self.assertEqual(args[0], ["/usr/bin/git", "symbolic-ref", "--quiet", "HEAD"])
        self.assertEqual(kwargs["cwd"], "/repo")
        self.assertTrue(kwargs["capture_output"])
        self.assertIsNone(kwargs["env"])

    def test_inherited_run_with_env(self):
        completed = mock.Mock(returncode=1)
        runner = SubprocessRunner(cwd="/repo")
        with mock.patch("runners.subprocess_runner.shutil.which", return_value="/usr/bin/git"), \
                mock.patch("runners.subprocess_runner.subprocess.run", return_value=completed) as run:
            result = runner.run("git", ["rebase"], capture=False, env={"GIT_SEQUENCE_EDITOR": "true"})

        self.assertFalse(result.ok)
        _, kwargs = run.call_args
        self.assertNotIn("capture_output", kwargs)
        self.assertEqual(kwargs["env"]["GIT_SEQUENCE_EDITOR"], "true")
        self.assertEqual(kwargs["env"].get("PATH"), os.environ.get("PATH"))


class TestDryRunRunner(unittest.TestCase):

    def test_mutating_commands_are_skipped(self):
        runner = DryRunRunner(cwd="/repo")
        with mock.patch("runners.subprocess_runner.shutil.which", return_value="/usr/bin/git"), \
                mock.patch("runners.subprocess_runner.subprocess.run") as run:
            result = runner.run("git", ["push", "--set-upstream", "origin", "x"], capture=False)

        self.assertTrue(result.ok)
        run.assert_not_called()
        self.assertEqual(runner.skipped, [["git", "push", "--set-upstream", "origin", "x"]])

    def test_read_only_commands_are_executed(self):
        completed = mock.Mock(returncode=0, stdout="abc,dummy commit", stderr="")
        runner = DryRunRunner(cwd="/repo")
        with mock.patch("runners.subprocess_runner.shutil.which", return_value="/usr/bin/git"), \
                mock.patch("runners.subprocess_runner.subprocess.run", return_value=completed) as run:
            result = runner.run("git", ["-c", "log.ShowSignature=false", "log"])

        run.assert_called_once()
        self.assertEqual(result.stdout, "abc,dummy commit")
        self.assertEqual(runner.skipped, [])


class TestRecordingRunner(unittest.TestCase):

    def test_responses_are_consumed_in_order_and_last_repeats(self):
        runner = RecordingRunner().respond("log", stdout="first").respond("log", stdout="second")
        outputs = [runner.run("git", ["log"]).stdout for _ in range(3)]
        self.assertEqual(outputs, ["first", "second", "second"])

    def test_unscripted_command_succeeds(self):
        runner = RecordingRunner()
        result = runner.run("git", ["add", "README.md"])
        self.assertTrue(result.ok)
        self.assertEqual(runner.subcommands(), ["add"])


if __name__ == "__main__":
    unittest.main()
