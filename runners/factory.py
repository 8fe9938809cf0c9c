import logging
from context import RunContext
from .base import CommandRunner, RUNNER_REGISTRY

# 导入实现模块以触发注册
from . import subprocess_runner  # noqa: F401
from . import dry_run  # noqa: F401
from . import recording  # noqa: F401

logger = logging.getLogger(__name__)


def get_runner(context: RunContext) -> CommandRunner:
    """
    命令执行器工厂
    --dry-run 优先于配置里的 runner id。
    """
    runner_id = "dry-run" if context.dry_run else context.runner_id
    runner_cls = RUNNER_REGISTRY.get(runner_id)
    if runner_cls is None:
        raise ValueError(
            f"未知的命令执行器 '{runner_id}'，可选: {', '.join(sorted(RUNNER_REGISTRY))}"
        )
    logger.info(f"🔌 [Factory] 初始化命令执行器: {runner_id}")
    return runner_cls(context.repo_path)
