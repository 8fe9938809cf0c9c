# exceptions.py
"""
异常体系
所有流程阶段的失败都以这些类型向上传递，由 Orchestrator 决定终止还是继续。
"""
from typing import List, Optional


class DummyFixupError(Exception):
    """所有业务异常的基类"""


class GitNotFoundError(DummyFixupError):
    """PATH 中找不到 git 可执行文件"""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "unable to find git executable in PATH, please install git before retrying"
        )


class GitCommandError(DummyFixupError):
    """
    git 命令返回非零退出码。
    stderr 原样保留，不做翻译。
    """

    def __init__(self, program: str, args: List[str], returncode: int, stderr: str = ""):
        self.program = program
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr or ""
        command = " ".join([program] + self.args_list)
        message = f"命令 '{command}' 执行失败 (exit {returncode})"
        if self.stderr.strip():
            message += f": {self.stderr.strip()}"
        super().__init__(message)


class DetachedHeadError(DummyFixupError):
    """HEAD 不指向任何分支 (symbolic-ref 无输出或失败)"""

    def __init__(self, stderr: str = ""):
        self.stderr = stderr or ""
        message = "无法解析当前分支 (HEAD 处于 detached 状态?)"
        if self.stderr.strip():
            message += f" git: {self.stderr.strip()}"
        super().__init__(message)


class NoCommitsFoundError(DummyFixupError):
    def __init__(self, base_ref: str, head_ref: str):
        self.base_ref = base_ref
        self.head_ref = head_ref
        super().__init__(
            f"could not find any commits between {base_ref} and {head_ref}"
        )


class MissingSentinelError(DummyFixupError):
    """fixup 需要一个目标提交，但 dummy commit 的 hash 为空"""

    def __init__(self, message: str = "dummy commit"):
        self.message = message
        super().__init__(f"未找到 '{message}' 提交，无法执行 commit --fixup")


class ProtectedBranchError(DummyFixupError):
    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"当前分支 '{branch}' 是受保护分支，拒绝在其上改写历史")


class MarkerFileError(DummyFixupError):
    """标记文件无法读写"""

    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        super().__init__(f"无法打开文件 {file_path}: {reason}")


class ExecutableNotFoundError(DummyFixupError):
    def __init__(self, program: str):
        self.program = program
        super().__init__(f"unable to find {program} executable in PATH")
