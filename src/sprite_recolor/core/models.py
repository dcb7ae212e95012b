"""核心数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(slots=True)
class BatchItem:
    """一次选择中的单个输入图片。"""

    source_path: Path

    @property
    def ref(self) -> str:
        return str(self.source_path)


@dataclass(slots=True)
class ItemOutcome:
    """记录单个文件的处理结果（用于汇总/报告）。"""

    source_path: Path
    status: str
    output_path: Optional[Path] = None
    message: Optional[str] = None

    @property
    def level(self) -> str:
        if self.status.startswith("processed"):
            return "info"
        if self.status.startswith("skip"):
            return "warning"
        return "error"


@dataclass(slots=True)
class LogEntry:
    """带级别的日志行，级别为 info / warning / error。"""

    level: str
    message: str


@dataclass(slots=True)
class BatchResult:
    """一次批处理的计数与逐项日志。"""

    total: int
    succeeded: list[ItemOutcome] = field(default_factory=list)
    skipped: list[ItemOutcome] = field(default_factory=list)
    failed: list[ItemOutcome] = field(default_factory=list)
    log: list[LogEntry] = field(default_factory=list)
    cancelled: bool = False

    @property
    def processed_count(self) -> int:
        return len(self.succeeded)

    @property
    def warning_count(self) -> int:
        return len(self.skipped)

    @property
    def error_count(self) -> int:
        return len(self.failed)

    @property
    def all_succeeded(self) -> bool:
        return self.processed_count == self.total

    @property
    def summary(self) -> str:
        return (
            f"Processed: {self.processed_count} of {self.total}\n"
            f"Warnings: {self.warning_count}\n"
            f"Errors: {self.error_count}"
        )

    @property
    def display_message(self) -> str:
        """全部成功时返回简短提示，否则返回详细计数。"""

        if self.all_succeeded:
            return f"Successfully processed {self.processed_count} images."
        return self.summary

    def record(self, outcome: ItemOutcome) -> None:
        """按状态归档结果。"""

        if outcome.level == "info":
            self.succeeded.append(outcome)
        elif outcome.level == "warning":
            self.skipped.append(outcome)
        else:
            self.failed.append(outcome)

    def all_outcomes(self) -> list[ItemOutcome]:
        """返回所有结果记录，方便生成报告。"""

        return [*self.succeeded, *self.skipped, *self.failed]
