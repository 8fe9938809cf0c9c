# models.py
from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass(frozen=True)
class Commit:
    """git log 中的一条提交记录 (<hash>,<title>)"""

    hash: str
    title: str


@dataclass(frozen=True)
class MarkerConfig:
    """
    HTML 注释标记的配置。
    prefix 用于定位标记，on/off 两个字面量表示两种状态。
    """

    file_path: str = "README.md"
    prefix: bytes = b"\n<!-- dummy commit: "
    on_literal: bytes = b"\n<!-- dummy commit: on -->\n"
    off_literal: bytes = b"\n<!-- dummy commit: off -->\n"


@dataclass
class CommandResult:
    """一次外部命令调用的结果"""

    program: str
    args: List[str]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass
class StepResult:
    """
    流程中单个阶段的结果：要么是成功值，要么是一个类型化的失败。
    """

    name: str
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
