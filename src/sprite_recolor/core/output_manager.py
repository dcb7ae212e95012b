"""输出路径推导、同批次重名处理与文件写入模块。"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import count
from pathlib import Path
from typing import Optional, Set

from sprite_recolor.core.config import OutputConfig
from sprite_recolor.core.exceptions import InvalidConfigurationError, SpriteRecolorError
from sprite_recolor.utils.colors import Rgba

LOGGER = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".png"
CONFLICT_STRATEGIES = {"rename", "overwrite", "error"}


class ImageWriteError(SpriteRecolorError):
    """输出目录创建或文件写入失败。"""


@dataclass(slots=True)
class DestinationDecision:
    """封装输出文件决策。"""

    destination: Optional[Path]
    action: str
    note: Optional[str] = None


def output_filename(source_path: Path, target: Rgba) -> str:
    """``<不含扩展名的文件名>_<RRGGBBAA>.png``。"""

    return f"{source_path.stem}_{target.to_hex()}{OUTPUT_SUFFIX}"


class OutputManager:
    """负责输出目录、同批次重名策略与字节写入。

    重名只针对同一次批处理内已分配的路径；磁盘上早先运行留下的同名文件直接覆盖。
    """

    def __init__(self, config: OutputConfig) -> None:
        if config.conflict_strategy not in CONFLICT_STRATEGIES:
            raise InvalidConfigurationError(f"未知的冲突策略: {config.conflict_strategy}")
        if not config.subdir_name or Path(config.subdir_name).name != config.subdir_name:
            raise InvalidConfigurationError(f"输出子目录名不合法: {config.subdir_name!r}")
        self.config = config
        self._reserved: Set[Path] = set()

    def output_dir_for(self, source_path: Path) -> Path:
        return source_path.parent / self.config.subdir_name

    def decide_destination(self, source_path: Path, target: Rgba) -> DestinationDecision:
        """根据冲突策略确定输出路径，并在本批次内登记。"""

        destination = self.output_dir_for(source_path) / output_filename(source_path, target)
        key = destination.resolve()

        if key not in self._reserved:
            self._reserved.add(key)
            return DestinationDecision(destination=destination, action="write")

        strategy = self.config.conflict_strategy
        existing_msg = f"本批次已生成同名输出: {destination.name}"

        if strategy == "overwrite":
            return DestinationDecision(destination=destination, action="overwrite", note=existing_msg)
        if strategy == "error":
            return DestinationDecision(destination=None, action="error", note=existing_msg)

        new_destination = self._generate_renamed_path(destination)
        self._reserved.add(new_destination.resolve())
        return DestinationDecision(
            destination=new_destination,
            action="rename",
            note=f"{existing_msg} -> 重命名为 {new_destination.name}",
        )

    def ensure_directory(self, directory: Path) -> None:
        """创建输出目录；目录已存在时不报错。"""

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ImageWriteError(f"无法创建输出目录: {directory} ({exc})") from exc

    def write_bytes(self, data: bytes, destination: Path) -> None:
        """写入编码后的字节，已存在的文件会被覆盖。"""

        try:
            destination.write_bytes(data)
        except OSError as exc:
            raise ImageWriteError(f"写入文件失败: {destination} ({exc})") from exc
        LOGGER.debug("已写入 %d 字节到 %s", len(data), destination)

    def _generate_renamed_path(self, destination: Path) -> Path:
        """在 rename 策略下生成本批次内未占用的文件名。"""

        stem = destination.stem
        suffix = destination.suffix

        for idx in count(1):
            candidate = destination.with_name(f"{stem}_{idx}{suffix}")
            if candidate.resolve() not in self._reserved:
                return candidate

        # 理论上不会执行到此处
        return destination
