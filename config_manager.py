# config_manager.py
"""
配置管理器
- 负责处理仓库级默认配置 (<repo>/.git/dummy_fixup.json)
- 包含一个交互式向导 (run_interactive_config_wizard)
"""

import os
import json
import logging
from typing import Dict, Any

from config import GlobalConfig

logger = logging.getLogger(__name__)

# 向导里可编辑的键 -> 提示
CONFIG_KEYS = {
    "base_branch": "受保护的基础分支",
    "remote": "推送的远端",
    "file": "标记文件 (相对仓库根目录)",
    "message": "dummy commit 的提交信息",
    "insert_mode": "标记缺失时的插入模式 (append, overwrite-last-byte)",
}


def get_project_config_path(repo_path: str, global_config: GlobalConfig) -> str:
    """配置文件放在 .git 目录下，不会污染工作区"""
    return os.path.join(
        os.path.abspath(repo_path), ".git", global_config.PROJECT_CONFIG_FILE
    )


def load_project_config(repo_path: str, global_config: GlobalConfig) -> Dict[str, Any]:
    """加载仓库级配置文件，不存在或损坏时返回空字典"""
    config_path = get_project_config_path(repo_path, global_config)
    if not os.path.exists(config_path):
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"❌ 加载项目配置 {config_path} 失败: {e}")
        return {}
    if not isinstance(data, dict):
        logger.error(f"❌ 项目配置 {config_path} 格式错误 (应为 JSON 对象)")
        return {}
    return data


def save_project_config(
    repo_path: str, global_config: GlobalConfig, config_data: Dict[str, Any]
) -> bool:
    """保存仓库级配置文件"""
    config_path = get_project_config_path(repo_path, global_config)
    try:
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config_data, f, indent=4, ensure_ascii=False)
    except OSError as e:
        logger.error(f"❌ 保存项目配置 {config_path} 失败: {e}")
        return False
    return True


def _input_with_default(prompt: str, default: str) -> str:
    """辅助函数：获取带默认值的用户输入"""
    return input(f"{prompt} [{default}]: ") or default


def _global_default(key: str, global_config: GlobalConfig) -> str:
    return {
        "base_branch": global_config.BASE_BRANCH,
        "remote": global_config.REMOTE,
        "file": global_config.MARKER_FILE,
        "message": global_config.DUMMY_COMMIT_MESSAGE,
        "insert_mode": global_config.INSERT_MODE,
    }[key]


def run_interactive_config_wizard(repo_path: str, global_config: GlobalConfig) -> bool:
    """
    运行交互式配置向导
    """
    logger.info("--- 🚀 欢迎使用 dummy-fixup 配置向导 ---")
    repo_path_abs = os.path.abspath(repo_path)
    if not os.path.isdir(os.path.join(repo_path_abs, ".git")):
        logger.error(f"❌ 路径 {repo_path_abs} 不是一个 Git 仓库的根目录。")
        return False

    logger.info(f"  [目标仓库]: {repo_path_abs}")
    current_config = load_project_config(repo_path_abs, global_config)

    print("\n--- 仓库默认值配置 ---")
    print("  (提示：保留默认值或直接按 Enter 键跳过)")
    config_data = {}
    for key, prompt in CONFIG_KEYS.items():
        default = current_config.get(key) or _global_default(key, global_config)
        config_data[key] = _input_with_default(f"  {prompt}", str(default))

    if not global_config.is_valid_insert_mode(config_data["insert_mode"]):
        logger.warning(
            f"⚠️ 插入模式 '{config_data['insert_mode']}' 无效，已改为 'append'"
        )
        config_data["insert_mode"] = "append"

    if not save_project_config(repo_path_abs, global_config, config_data):
        return False
    logger.info(
        f"✅ 项目配置已保存至 {get_project_config_path(repo_path_abs, global_config)}"
    )
    print("\n--- ✅ 配置完成！ ---")
    return True
