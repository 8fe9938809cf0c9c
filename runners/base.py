"""
命令执行器的抽象基类 + 注册表
屏蔽底层是真实子进程、dry-run 还是测试用的录制器。
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from models import CommandResult

# 全局注册表，存储 "runner_id" -> Runner Class 的映射
RUNNER_REGISTRY: Dict[str, Type["CommandRunner"]] = {}


def register_runner(runner_id: str):
    """
    类装饰器：将 CommandRunner 实现类注册到全局注册表中。

    使用示例:
        @register_runner("subprocess")
        class SubprocessRunner(CommandRunner):
            ...
    """

    def decorator(cls):
        if runner_id in RUNNER_REGISTRY:
            raise ValueError(
                f"Runner id '{runner_id}' 已经被注册过 ({RUNNER_REGISTRY[runner_id].__name__})"
            )
        cls.runner_id = runner_id
        RUNNER_REGISTRY[runner_id] = cls
        return cls

    return decorator


class CommandRunner(ABC):
    """外部命令执行接口"""

    runner_id: str = "base"

    @abstractmethod
    def run(
        self,
        program: str,
        args: List[str],
        capture: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> CommandResult:
        """
        执行 program + args。

        :param capture: True 时捕获 stdout/stderr；False 时继承当前进程的标准流
        :param env: 在当前环境变量之上追加/覆盖的变量
        :return: CommandResult (非零退出码不会抛异常，由调用方判断)
        """
        pass
