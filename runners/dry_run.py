import logging
from typing import Dict, List, Optional

from models import CommandResult
from .base import register_runner
from .subprocess_runner import SubprocessRunner

logger = logging.getLogger(__name__)

# 只读的 git 子命令照常执行，其余的只打印
READ_ONLY_SUBCOMMANDS = ("log", "symbolic-ref", "rev-parse", "status")


def git_subcommand(args: List[str]) -> Optional[str]:
    """跳过 `-c key=value` 全局参数，返回 git 子命令名"""
    skip_next = False
    for arg in args:
        if skip_next:
            skip_next = False
            continue
        if arg == "-c":
            skip_next = True
            continue
        if arg.startswith("-"):
            continue
        return arg
    return None


@register_runner("dry-run")
class DryRunRunner(SubprocessRunner):
    """
    预演模式：读取类命令真实执行，会修改仓库或远端的命令只记录不执行。
    """

    def __init__(self, cwd: Optional[str] = None):
        super().__init__(cwd)
        self.skipped: List[List[str]] = []

    def run(
        self,
        program: str,
        args: List[str],
        capture: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> CommandResult:
        if git_subcommand(args) in READ_ONLY_SUBCOMMANDS:
            return super().run(program, args, capture=capture, env=env)

        self.resolve(program)
        self.skipped.append([program] + list(args))
        logger.info(f"🧪 [dry-run] 跳过: {program} {' '.join(args)}")
        return CommandResult(program=program, args=list(args))
