# cli.py
"""
命令行界面 (Interface) 层
负责解析参数、合并配置 (CLI > 仓库配置 > 全局配置) 并组装 RunContext。
"""
import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

import config_manager
from config import GlobalConfig
from context import RunContext
from models import MarkerConfig
from orchestrator import FixupOrchestrator
import utils

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """
    负责所有 argparse 的定义。
    """
    parser = argparse.ArgumentParser(
        prog="git-dummy-fixup",
        description="切换 README 中的 dummy commit 标记，fixup 到 dummy commit 并 force-with-lease 推送",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--configure",
        action="store_true",
        help="运行交互式配置向导，把默认值保存到 <repo>/.git 下。",
    )
    parser.add_argument(
        "-r",
        "--repo-path",
        type=str,
        default=".",
        help="Git 仓库的根目录路径。\n(默认: 当前目录)",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        default=None,
        help="存放标记的文件 (相对仓库根目录)。\n(默认: README.md)",
    )
    parser.add_argument(
        "-b",
        "--base",
        type=str,
        default=None,
        help="受保护的基础分支，提交范围为 <base>...<当前分支>。\n(默认: main)",
    )
    parser.add_argument(
        "--remote",
        type=str,
        default=None,
        help="推送的远端。\n(默认: origin)",
    )
    parser.add_argument(
        "-m",
        "--message",
        type=str,
        default=None,
        help="dummy commit 的提交信息 (同时用于查找)。\n(默认: 'dummy commit')",
    )
    parser.add_argument(
        "--insert-mode",
        type=str,
        choices=list(GlobalConfig.INSERT_MODES),
        default=None,
        help="文件中没有标记时的插入方式。\n"
        "'append': 追加到文件末尾\n"
        "'overwrite-last-byte': 从最后一个字节处写入 (旧行为)",
    )

    # --- 标志 (Flags) ---
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="只执行只读的 git 命令，不修改文件、不提交、不推送",
    )
    parser.add_argument(
        "--no-editor",
        action="store_true",
        help="rebase 时不打开编辑器，直接接受 autosquash 的 todo 列表",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="输出 DEBUG 级别日志"
    )

    return parser


def _pick(cli_value: Optional[str], project_config: Dict[str, Any], key: str, default: str) -> str:
    return cli_value or project_config.get(key) or default


def build_context(
    args: argparse.Namespace, global_config: GlobalConfig
) -> RunContext:
    """合并三层配置，实例化 RunContext"""
    repo_path = os.path.abspath(args.repo_path)
    project_config = config_manager.load_project_config(repo_path, global_config)

    insert_mode = _pick(
        args.insert_mode, project_config, "insert_mode", global_config.INSERT_MODE
    )
    if not global_config.is_valid_insert_mode(insert_mode):
        raise ValueError(
            f"无效的插入模式 '{insert_mode}'，可选: {', '.join(global_config.INSERT_MODES)}"
        )

    marker_config = MarkerConfig(
        file_path=_pick(args.file, project_config, "file", global_config.MARKER_FILE),
        prefix=global_config.MARKER_PREFIX,
        on_literal=global_config.MARKER_ON,
        off_literal=global_config.MARKER_OFF,
    )

    return RunContext(
        repo_path=repo_path,
        marker=marker_config,
        insert_mode=insert_mode,
        base_branch=_pick(
            args.base, project_config, "base_branch", global_config.BASE_BRANCH
        ),
        remote=_pick(args.remote, project_config, "remote", global_config.REMOTE),
        dummy_message=_pick(
            args.message,
            project_config,
            "message",
            global_config.DUMMY_COMMIT_MESSAGE,
        ),
        dry_run=args.dry_run,
        no_editor=args.no_editor,
        global_config=global_config,
        runner_id=global_config.DEFAULT_RUNNER,
    )


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    主入口点，返回进程退出码。
    """
    # 1. 解析 Args
    parser = setup_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        utils.setup_logging(verbose=True)

    # 2. 加载 GlobalConfig
    global_config = GlobalConfig()

    # 3. 特殊模式：--configure
    if args.configure:
        ok = config_manager.run_interactive_config_wizard(args.repo_path, global_config)
        return 0 if ok else 1

    # 4. 组装 RunContext
    try:
        run_context = build_context(args, global_config)
    except ValueError as e:
        logger.error(f"❌ 实例化 RunContext 失败: {e}")
        return 1

    logger.info("=" * 50)
    logger.info("🚀 dummy-fixup 启动...")
    logger.info(f"   [目标仓库]: {run_context.repo_path}")
    logger.info(f"   [标记文件]: {run_context.marker.file_path}")
    logger.info(f"   [基础分支]: {run_context.base_branch}")
    logger.info(f"   [远端]: {run_context.remote}")
    if run_context.dry_run:
        logger.info("   [模式]: dry-run")
    logger.info("=" * 50)

    # 5. 运行 Orchestrator
    try:
        orchestrator = FixupOrchestrator(run_context)
    except ValueError as e:
        logger.error(f"❌ 初始化失败: {e}")
        return 1
    return 0 if orchestrator.run() else 1


def main():
    """console script 入口"""
    utils.setup_logging()
    sys.exit(run_cli())
