# context.py
"""
运行时配置的数据模型
"""
import os
from dataclasses import dataclass
from config import GlobalConfig
from models import MarkerConfig


@dataclass
class RunContext:
    """
    封装一次运行所需的所有配置和状态。
    这是从 CLI 传递到 Orchestrator 的唯一对象。
    """

    # --- 核心路径 ---
    repo_path: str

    # --- 标记文件 ---
    marker: MarkerConfig
    insert_mode: str

    # --- Git 参数 ---
    base_branch: str
    remote: str
    dummy_message: str

    # --- 标志 ---
    dry_run: bool
    no_editor: bool

    # --- 全局配置 ---
    global_config: GlobalConfig

    # --- 执行器 ID ---
    runner_id: str = "subprocess"

    @property
    def marker_path(self) -> str:
        """标记文件的绝对路径 (相对路径按仓库根目录解析)"""
        if os.path.isabs(self.marker.file_path):
            return self.marker.file_path
        return os.path.join(self.repo_path, self.marker.file_path)
