# config.py
"""
全局配置
默认值可以通过 .env 文件或环境变量覆盖。
"""
import os
from dotenv import load_dotenv


# --- 脚本基础路径 ---
SCRIPT_BASE_PATH = os.path.abspath(os.path.dirname(__file__))
env_path = os.path.join(SCRIPT_BASE_PATH, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
else:
    # 从 CWD 向上查找 .env
    load_dotenv()


class GlobalConfig:
    """
    dummy-fixup 的全局应用配置。
    """

    # --- 路径配置 ---
    SCRIPT_BASE_PATH: str = SCRIPT_BASE_PATH
    PROJECT_CONFIG_FILE: str = "dummy_fixup.json"

    # --- Git 默认参数 ---
    GIT_EXECUTABLE: str = "git"
    BASE_BRANCH: str = os.getenv("DUMMY_FIXUP_BASE_BRANCH", "main")
    REMOTE: str = os.getenv("DUMMY_FIXUP_REMOTE", "origin")
    DUMMY_COMMIT_MESSAGE: str = os.getenv("DUMMY_FIXUP_MESSAGE", "dummy commit")
    BRANCH_REF_PREFIX: str = "refs/heads/"
    LOG_PRETTY_FORMAT: str = "%H,%s"

    # --- 标记文件 ---
    MARKER_FILE: str = os.getenv("DUMMY_FIXUP_FILE", "README.md")
    MARKER_PREFIX: bytes = b"\n<!-- dummy commit: "
    MARKER_ON: bytes = b"\n<!-- dummy commit: on -->\n"
    MARKER_OFF: bytes = b"\n<!-- dummy commit: off -->\n"

    # append: 标记缺失时追加到文件末尾
    # overwrite-last-byte: 旧行为，从 len(file)-1 处写入 (覆盖最后一个字节)
    INSERT_MODES = ("append", "overwrite-last-byte")
    INSERT_MODE: str = os.getenv("DUMMY_FIXUP_INSERT_MODE", "append").lower()

    # --- 命令执行器 ("subprocess" | "dry-run") ---
    DEFAULT_RUNNER: str = os.getenv("DUMMY_FIXUP_RUNNER", "subprocess").lower()

    def is_valid_insert_mode(self, mode: str) -> bool:
        return mode in self.INSERT_MODES
