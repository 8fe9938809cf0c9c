import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional

from exceptions import ExecutableNotFoundError
from models import CommandResult
from .base import CommandRunner, register_runner

logger = logging.getLogger(__name__)


@register_runner("subprocess")
class SubprocessRunner(CommandRunner):
    """
    通过 subprocess 在仓库目录下执行真实命令。
    没有超时：交互式的 rebase 会一直阻塞到编辑器退出。
    """

    def __init__(self, cwd: Optional[str] = None):
        self.cwd = cwd
        self._resolved: Dict[str, str] = {}

    def resolve(self, program: str) -> str:
        """在 PATH 中查找可执行文件 (只查一次)"""
        if program not in self._resolved:
            path = shutil.which(program)
            if not path:
                raise ExecutableNotFoundError(program)
            self._resolved[program] = path
        return self._resolved[program]

    def run(
        self,
        program: str,
        args: List[str],
        capture: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> CommandResult:
        executable = self.resolve(program)
        child_env = None
        if env:
            child_env = dict(os.environ)
            child_env.update(env)

        logger.debug(f"在 {self.cwd or os.getcwd()} 中执行命令: {program} {' '.join(args)}")
        if capture:
            completed = subprocess.run(
                [executable] + list(args),
                capture_output=True,
                text=True,
                encoding="utf-8",
                cwd=self.cwd,
                env=child_env,
            )
            return CommandResult(
                program=program,
                args=list(args),
                returncode=completed.returncode,
                stdout=completed.stdout or "",
                stderr=completed.stderr or "",
            )

        # 继承 stdout/stderr，用户可以直接看到 git 的输出和编辑器
        completed = subprocess.run(
            [executable] + list(args), cwd=self.cwd, env=child_env
        )
        return CommandResult(
            program=program, args=list(args), returncode=completed.returncode
        )
