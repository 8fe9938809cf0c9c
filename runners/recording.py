from dataclasses import dataclass
from typing import Dict, List, Optional

from models import CommandResult
from .base import CommandRunner, register_runner
from .dry_run import git_subcommand


@dataclass
class RecordedCall:
    program: str
    args: List[str]
    capture: bool
    env: Optional[Dict[str, str]]

    @property
    def subcommand(self) -> Optional[str]:
        return git_subcommand(self.args)


@register_runner("recording")
class RecordingRunner(CommandRunner):
    """
    不执行任何命令，只按顺序记录调用，并返回预先设置的结果。
    同一个子命令设置了多个结果时按顺序消费，最后一个会一直重复。
    """

    def __init__(self, cwd: Optional[str] = None):
        self.cwd = cwd
        self.calls: List[RecordedCall] = []
        self._responses: Dict[str, List[CommandResult]] = {}

    def respond(
        self, subcommand: str, stdout: str = "", stderr: str = "", returncode: int = 0
    ) -> "RecordingRunner":
        """为某个 git 子命令追加一个预设结果"""
        self._responses.setdefault(subcommand, []).append(
            CommandResult(
                program="git",
                args=[subcommand],
                returncode=returncode,
                stdout=stdout,
                stderr=stderr,
            )
        )
        return self

    def run(
        self,
        program: str,
        args: List[str],
        capture: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> CommandResult:
        call = RecordedCall(program=program, args=list(args), capture=capture, env=env)
        self.calls.append(call)

        queue = self._responses.get(call.subcommand or "")
        if not queue:
            return CommandResult(program=program, args=list(args))
        scripted = queue.pop(0) if len(queue) > 1 else queue[0]
        return CommandResult(
            program=program,
            args=list(args),
            returncode=scripted.returncode,
            stdout=scripted.stdout,
            stderr=scripted.stderr,
        )

    def subcommands(self) -> List[Optional[str]]:
        return [call.subcommand for call in self.calls]
