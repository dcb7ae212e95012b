"""处理任务的配置模型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from sprite_recolor.utils.colors import Rgba

ConflictStrategy = str  # rename | overwrite | error

DEFAULT_INCLUDE_PATTERNS = (
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.bmp",
    "*.gif",
    "*.tga",
    "*.tif",
    "*.tiff",
    "*.psd",
    "*.webp",
)


@dataclass(slots=True)
class OutputConfig:
    """输出子目录与同批次重名策略配置。"""

    subdir_name: str = "Output"
    conflict_strategy: ConflictStrategy = "rename"


@dataclass(slots=True)
class JobConfig:
    """单次批处理任务的配置集合。"""

    sources: Sequence[Path]
    target: Rgba
    output: OutputConfig = field(default_factory=OutputConfig)
    allow_recursive: bool = True
    include_patterns: Sequence[str] = field(default_factory=lambda: DEFAULT_INCLUDE_PATTERNS)
    exclude_patterns: Sequence[str] = field(default_factory=tuple)
    report_path: Optional[Path] = None
