# orchestrator.py
"""
业务流程编排器
toggle 标记 -> 当前分支 -> 分支上的提交 -> 查找/创建 dummy commit
-> fixup -> autosquash rebase -> force-with-lease push

每个阶段都返回 StepResult，由编排器决定失败后终止还是继续。
"""
import dataclasses
import logging
from typing import Callable, List, Optional

from context import RunContext
from exceptions import (
    DummyFixupError,
    MissingSentinelError,
    NoCommitsFoundError,
    ProtectedBranchError,
)
from models import Commit, StepResult
from runners.base import CommandRunner
from runners.factory import get_runner
import git_utils
import marker

logger = logging.getLogger(__name__)

# dry-run 时新建的 dummy commit 并不存在，用 HEAD 代替它的 hash
DRY_RUN_DUMMY_REF = "HEAD"


class FixupOrchestrator:
    """
    负责执行 dummy commit 工作流的核心业务逻辑。
    """

    def __init__(self, context: RunContext, runner: Optional[CommandRunner] = None):
        self.context = context
        self.runner = runner or get_runner(context)
        self.steps: List[StepResult] = []

        self.branch: str = ""
        self.commits: List[Commit] = []
        self.dummy_hash: str = ""

    # ------------------------------------------------------------------
    # 阶段执行
    # ------------------------------------------------------------------
    def _step(self, name: str, func: Callable, *args, **kwargs) -> StepResult:
        """执行一个阶段，业务异常转为 StepResult.error"""
        try:
            result = StepResult(name=name, value=func(*args, **kwargs))
        except DummyFixupError as e:
            result = StepResult(name=name, error=e)
        self.steps.append(result)
        return result

    def _halt(self, result: StepResult) -> bool:
        logger.error(f"❌ [{result.name}] {result.error}")
        logger.error("   流程已终止。")
        return False

    @property
    def failed_step(self) -> Optional[StepResult]:
        return next((step for step in self.steps if not step.ok), None)

    # ------------------------------------------------------------------
    # 各阶段
    # ------------------------------------------------------------------
    def guard_branch(self) -> str:
        branch = git_utils.get_current_branch(self.runner)
        if branch == self.context.base_branch:
            raise ProtectedBranchError(branch)
        return branch

    def toggle_marker(self) -> int:
        marker_config = dataclasses.replace(
            self.context.marker, file_path=self.context.marker_path
        )
        return marker.toggle_marker(
            marker_config, self.context.insert_mode, dry_run=self.context.dry_run
        )

    def list_commits(self) -> List[Commit]:
        return git_utils.get_commits(
            self.runner, self.context.base_branch, self.branch
        )

    def create_dummy_commit(self) -> str:
        """提交并推送一个 dummy commit，返回它的 hash"""
        git_utils.git_add(self.runner, self.context.marker.file_path)
        git_utils.git_commit(self.runner, self.context.dummy_message)
        git_utils.git_push(self.runner, self.context.remote, self.branch)

        if self.context.dry_run:
            return DRY_RUN_DUMMY_REF

        # 重新读取分支上的提交，新的 dummy commit 会出现在其中
        self.commits = self.list_commits()
        return git_utils.find_dummy_commit_hash(self.commits, self.context.dummy_message)

    def fixup(self) -> str:
        if not self.dummy_hash:
            raise MissingSentinelError(self.context.dummy_message)
        git_utils.git_add(self.runner, self.context.marker.file_path)
        git_utils.git_fixup(self.runner, self.dummy_hash)
        return self.dummy_hash

    def rebase(self) -> str:
        count = git_utils.number_of_commits(self.commits)
        git_utils.git_rebase(self.runner, count, no_editor=self.context.no_editor)
        return count

    def force_push(self) -> str:
        git_utils.git_push(self.runner, self.context.remote, self.branch, force=True)
        return self.branch

    # ------------------------------------------------------------------
    # 主流程
    # ------------------------------------------------------------------
    def run(self) -> bool:
        """
        执行完整流程。
        :return: 所有阶段都成功时返回 True
        """
        # --- 1. 受保护分支检查 ---
        result = self._step("guard", self.guard_branch)
        if not result.ok:
            return self._halt(result)
        self.branch = result.value
        logger.info(f"🌿 当前分支: {self.branch}")

        # --- 2. 切换标记 ---
        result = self._step("mark", self.toggle_marker)
        if not result.ok:
            return self._halt(result)
        logger.info(
            f"✅ file: {result.value} bytes written to {self.context.marker.file_path}"
        )

        # --- 3. 分支上的提交 ---
        result = self._step("list-commits", self.list_commits)
        if result.ok:
            self.commits = result.value
        elif isinstance(result.error, NoCommitsFoundError):
            # 新分支上还没有任何提交，继续创建 dummy commit
            logger.warning(f"⚠️ {result.error}")
            self.commits = []
        else:
            return self._halt(result)

        # --- 4. 查找 dummy commit ---
        self.dummy_hash = git_utils.find_dummy_commit_hash(
            self.commits, self.context.dummy_message
        )
        if self.dummy_hash:
            logger.info(f"🔎 dummy commit found {self.dummy_hash}")
        else:
            logger.info("no dummy commit present in the current branch")
            logger.info("adding dummy commit to current branch")
            result = self._step("create-dummy", self.create_dummy_commit)
            if not result.ok:
                return self._halt(result)
            self.dummy_hash = result.value

        # --- 5. fixup ---
        result = self._step("fixup", self.fixup)
        if not result.ok:
            return self._halt(result)

        # --- 6. rebase ---
        result = self._step("rebase", self.rebase)
        if not result.ok:
            return self._halt(result)

        # --- 7. force push ---
        result = self._step("force-push", self.force_push)
        if not result.ok:
            return self._halt(result)

        logger.info(f"✅ dummy commit 已更新并推送到 {self.context.remote}/{self.branch}")
        return True
