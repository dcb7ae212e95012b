"""文件扫描与筛选逻辑。"""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Iterator, Sequence

from sprite_recolor.core.config import DEFAULT_INCLUDE_PATTERNS, JobConfig
from sprite_recolor.core.models import BatchItem


def _iter_directory_files(path: Path, recursive: bool, skip_dir_name: str) -> Iterator[Path]:
    """遍历目录下的所有文件，跳过输出子目录。"""

    iterator = path.rglob("*") if recursive else path.glob("*")
    for candidate in iterator:
        if not candidate.is_file():
            continue
        relative_parts = candidate.relative_to(path).parts[:-1]
        if skip_dir_name in relative_parts:
            continue
        yield candidate


def _matches_any(name: str, patterns: Sequence[str]) -> bool:
    lowered = name.lower()
    return any(fnmatch(lowered, pattern.lower()) for pattern in patterns)


def collect_batch_items(config: JobConfig) -> list[BatchItem]:
    """根据配置展开输入路径，返回本次批处理的选择列表。

    显式给出的文件总会被选中（非图片或缺失文件会在处理时产生警告）；目录只收集匹配
    include 模式的文件，且不会重新收集输出子目录中的结果。
    """

    collected: list[BatchItem] = []
    collected_paths: set[Path] = set()

    include_patterns = config.include_patterns or DEFAULT_INCLUDE_PATTERNS
    exclude_patterns = config.exclude_patterns or ()
    skip_dir_name = config.output.subdir_name

    for source in config.sources:
        resolved = source.resolve()

        if not resolved.is_dir():
            # 不存在的路径也保留，处理阶段会记为警告而不是悄悄丢弃。
            if resolved not in collected_paths:
                collected_paths.add(resolved)
                collected.append(BatchItem(source_path=resolved))
            continue

        for candidate in _iter_directory_files(resolved, config.allow_recursive, skip_dir_name):
            if candidate in collected_paths:
                continue

            name = candidate.name
            if not _matches_any(name, include_patterns):
                continue
            if exclude_patterns and _matches_any(name, exclude_patterns):
                continue

            collected_paths.add(candidate)
            collected.append(BatchItem(source_path=candidate))

    collected.sort(key=lambda x: str(x.source_path).lower())
    return collected
