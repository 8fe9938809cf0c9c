# marker.py
"""
README 中 dummy commit 标记的开关
标记是一个 HTML 注释，在 "on" 和 "off" 两种字面量之间切换；不存在时插入 "on"。
"""
import logging
from typing import Tuple

from exceptions import MarkerFileError
from models import MarkerConfig

logger = logging.getLogger(__name__)

INSERT_APPEND = "append"
INSERT_OVERWRITE_LAST_BYTE = "overwrite-last-byte"


def marker_index(data: bytes, marker: MarkerConfig) -> int:
    """标记前缀的位置，不存在时返回 -1"""
    return data.find(marker.prefix)


def is_marker_on(data: bytes, marker: MarkerConfig) -> bool:
    return marker.on_literal in data


def _marker_span_end(data: bytes, index: int, marker: MarkerConfig) -> int:
    """既不是 on 也不是 off 的残缺标记：一直替换到 '-->' (含其后的一个换行)"""
    close = data.find(b"-->", index + len(marker.prefix))
    if close == -1:
        return index + len(marker.prefix)
    end = close + len(b"-->")
    if data[end:end + 1] == b"\n":
        end += 1
    return end


def toggled_content(
    data: bytes, marker: MarkerConfig, insert_mode: str = INSERT_APPEND
) -> Tuple[bytes, bytes]:
    """
    计算切换后的文件内容。

    :return: (新内容, 写入的字面量)
    """
    index = marker_index(data, marker)

    if index == -1:
        literal = marker.on_literal
        if insert_mode == INSERT_OVERWRITE_LAST_BYTE:
            # 旧行为：从最后一个字节处开始写，会覆盖掉它
            position = max(len(data) - 1, 0)
            return data[:position] + literal + data[position + len(literal):], literal
        if insert_mode != INSERT_APPEND:
            raise ValueError(f"未知的插入模式: {insert_mode}")
        return data + literal, literal

    if data.startswith(marker.on_literal, index):
        literal, end = marker.off_literal, index + len(marker.on_literal)
    elif data.startswith(marker.off_literal, index):
        literal, end = marker.on_literal, index + len(marker.off_literal)
    else:
        literal, end = marker.on_literal, _marker_span_end(data, index, marker)

    return data[:index] + literal + data[end:], literal


def toggle_marker(
    marker: MarkerConfig, insert_mode: str = INSERT_APPEND, dry_run: bool = False
) -> int:
    """
    切换文件中的标记并写回。

    :return: 写入的字节数 (即写入的字面量长度)
    :raises MarkerFileError: 文件无法以读写方式打开
    """
    try:
        with open(marker.file_path, "r+b") as f:
            data = f.read()
            new_data, literal = toggled_content(data, marker, insert_mode)
            if not dry_run:
                f.seek(0)
                f.write(new_data)
                f.truncate()
    except OSError as e:
        raise MarkerFileError(marker.file_path, e.strerror or str(e)) from e

    state = "on" if literal == marker.on_literal else "off"
    if dry_run:
        logger.info(f"🧪 [dry-run] 标记将切换为 {state}，未写入 {marker.file_path}")
    else:
        logger.debug(f"标记已切换为 {state}")
    return len(literal)
