# git_utils.py
import logging
from typing import Dict, List, Optional

from exceptions import (
    DetachedHeadError,
    ExecutableNotFoundError,
    GitCommandError,
    GitNotFoundError,
    NoCommitsFoundError,
)
from models import Commit, CommandResult
from runners.base import CommandRunner

logger = logging.getLogger(__name__)

GIT = "git"
BRANCH_REF_PREFIX = "refs/heads/"
DEFAULT_DUMMY_MESSAGE = "dummy commit"


def run_git_command(
    runner: CommandRunner,
    args: List[str],
    context: str = "执行Git命令",
    capture: bool = True,
    env: Optional[Dict[str, str]] = None,
) -> CommandResult:
    """
    统一的 Git 命令执行函数
    - 找不到 git 时抛出 GitNotFoundError
    - 非零退出码时抛出 GitCommandError (stderr 原样保留)
    """
    try:
        result = runner.run(GIT, args, capture=capture, env=env)
    except ExecutableNotFoundError as e:
        raise GitNotFoundError() from e

    if not result.ok:
        logger.error(f"{context}失败: {result.stderr.strip()}")
        raise GitCommandError(GIT, args, result.returncode, result.stderr)
    if capture:
        logger.debug(f"{context}成功，输出 {len(result.stdout.splitlines())} 行")
    return result


def output_lines(output: str) -> List[str]:
    """按行切分输出 (去掉末尾换行)"""
    if output.endswith("\n"):
        output = output[:-1]
    return output.split("\n")


def first_line(output: str) -> str:
    return output.split("\n", 1)[0]


def branch_short_name(output: str) -> str:
    """symbolic-ref 输出 -> 分支短名"""
    branch = first_line(output)
    if branch.startswith(BRANCH_REF_PREFIX):
        branch = branch[len(BRANCH_REF_PREFIX):]
    return branch


def parse_commit_log(log_output: str) -> List[Commit]:
    """
    解析 `--pretty=format:%H,%s` 的输出。
    每行按第一个逗号切分；没有逗号的行直接跳过。顺序保持 git 的输出顺序。
    """
    commits = []
    if not log_output:
        return commits
    for line in output_lines(log_output):
        parts = line.split(",", 1)
        if len(parts) != 2:
            continue
        commits.append(Commit(hash=parts[0], title=parts[1]))
    return commits


def get_commits(runner: CommandRunner, base_ref: str, head_ref: str) -> List[Commit]:
    """获取 head_ref 中有、base_ref 中没有的提交"""
    result = run_git_command(
        runner,
        [
            "-c",
            "log.ShowSignature=false",
            "log",
            "--pretty=format:%H,%s",
            "--cherry",
            f"{base_ref}...{head_ref}",
        ],
        f"获取 {base_ref}...{head_ref} 的提交",
    )
    commits = parse_commit_log(result.stdout)
    if not commits:
        raise NoCommitsFoundError(base_ref, head_ref)
    logger.info(f"成功解析 {len(commits)} 个提交")
    return commits


def find_dummy_commit_hash(
    commits: List[Commit], message: str = DEFAULT_DUMMY_MESSAGE
) -> str:
    """第一个标题包含 message 的提交的 hash，没有则返回空字符串"""
    for commit in commits:
        if message in commit.title:
            return commit.hash
    return ""


def number_of_commits(commits: List[Commit]) -> str:
    # +1: 接下来的 fixup 还会再新增一个 "fixup!" 提交
    return str(len(commits) + 1)


def get_current_branch(runner: CommandRunner) -> str:
    """读取当前检出的分支名"""
    try:
        result = run_git_command(
            runner, ["symbolic-ref", "--quiet", "HEAD"], "读取当前分支"
        )
    except GitCommandError as e:
        raise DetachedHeadError(e.stderr) from e

    branch = branch_short_name(result.stdout).strip()
    if not branch:
        raise DetachedHeadError(result.stderr)
    return branch


def git_add(runner: CommandRunner, file_path: str) -> CommandResult:
    logger.info(f"git: adding {file_path} file")
    return run_git_command(runner, ["add", file_path], f"git add {file_path}")


def git_commit(runner: CommandRunner, message: str) -> CommandResult:
    logger.info("git: committing file")
    return run_git_command(
        runner, ["commit", "-m", message], "git commit", capture=False
    )


def git_fixup(runner: CommandRunner, commit_hash: str) -> CommandResult:
    logger.info(f"git: running commit --fixup on commit {commit_hash}")
    return run_git_command(
        runner, ["commit", "--fixup", commit_hash], "git commit --fixup", capture=False
    )


def git_rebase(
    runner: CommandRunner, number_of_commits: str, no_editor: bool = False
) -> CommandResult:
    """
    交互式 autosquash rebase，会打开编辑器 (保存退出即可完成 rebase)。
    no_editor=True 时通过 GIT_SEQUENCE_EDITOR 直接接受 todo 列表。
    """
    env = {"GIT_SEQUENCE_EDITOR": "true"} if no_editor else None
    logger.info(f"git: running rebase -i --autosquash on {number_of_commits} commits")
    return run_git_command(
        runner,
        ["rebase", "--interactive", "--autosquash", f"HEAD~{number_of_commits}"],
        "git rebase",
        capture=False,
        env=env,
    )


def git_push(
    runner: CommandRunner, remote: str, ref: str, force: bool = False
) -> CommandResult:
    args = ["push", "--set-upstream"]
    if force:
        args.append("--force-with-lease")
    args += [remote, ref]
    logger.info(f"git: pushing to {remote} {ref}" + (" (force-with-lease)" if force else ""))
    return run_git_command(runner, args, "git push", capture=False)
