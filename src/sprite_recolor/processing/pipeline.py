"""处理流水线：逐项着色、编码、写出并汇总计数。"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from sprite_recolor.core.config import JobConfig, OutputConfig
from sprite_recolor.core.exceptions import EmptySelectionError
from sprite_recolor.core.models import BatchItem, BatchResult, ItemOutcome, LogEntry
from sprite_recolor.core.output_manager import OutputManager
from sprite_recolor.core.progress import ProgressUpdate
from sprite_recolor.core.report import write_csv_report
from sprite_recolor.core.scanner import collect_batch_items
from sprite_recolor.processing.worker import run_item
from sprite_recolor.utils.colors import Rgba

LOGGER = logging.getLogger(__name__)

_LEVELS = {"info": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}

ProgressCallback = Optional[Callable[[ProgressUpdate], None]]
CancelCheck = Optional[Callable[[], bool]]


def process_batch(
    items: Sequence[BatchItem],
    target: Rgba,
    output_config: Optional[OutputConfig] = None,
    progress_callback: ProgressCallback = None,
    should_cancel: CancelCheck = None,
) -> BatchResult:
    """批量处理入口：按顺序处理每个条目，单项失败不会中断整个批次。

    空选择抛出 ``EmptySelectionError``，而不是返回计数全为 0 的结果。
    ``should_cancel`` 只在条目之间检查。
    """

    total = len(items)
    if total == 0:
        raise EmptySelectionError("No images selected. Please select one or more sprites.")

    output_manager = OutputManager(output_config or OutputConfig())
    result = BatchResult(total=total)
    LOGGER.info("开始处理 %d 个条目，目标颜色 #%s", total, target.to_hex())

    for index, item in enumerate(items):
        if should_cancel is not None and should_cancel():
            result.cancelled = True
            _log(result, "warning", f"cancelled after {index} of {total} items")
            break

        _emit_progress(
            progress_callback,
            completed=index,
            total=total,
            message=f"Processing sprite {index + 1} of {total}...",
        )

        try:
            outcome = run_item(item, target, output_manager)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("条目处理异常：%s", exc)
            outcome = ItemOutcome(
                source_path=item.source_path,
                status="error-worker",
                message=f"unexpected error: {item.ref} ({exc})",
            )
        _record_outcome(result, outcome)

    attempted = len(result.all_outcomes())
    _emit_progress(progress_callback, completed=attempted, total=total, message="Done")

    LOGGER.info("处理结束：\n%s", result.summary)
    return result


def run_job(
    config: JobConfig,
    progress_callback: ProgressCallback = None,
    should_cancel: CancelCheck = None,
) -> BatchResult:
    """扫描输入路径后执行批处理，按需写出 CSV 报告。"""

    LOGGER.info("开始扫描输入路径")
    items = collect_batch_items(config)
    LOGGER.info("发现 %d 个候选文件", len(items))

    result = process_batch(
        items,
        config.target,
        output_config=config.output,
        progress_callback=progress_callback,
        should_cancel=should_cancel,
    )

    if config.report_path is not None:
        _write_report(config, result)
    return result


def _record_outcome(result: BatchResult, outcome: ItemOutcome) -> None:
    result.record(outcome)
    if outcome.message:
        _log(result, outcome.level, outcome.message)


def _log(result: BatchResult, level: str, message: str) -> None:
    result.log.append(LogEntry(level=level, message=message))
    LOGGER.log(_LEVELS[level], message)


def _emit_progress(
    callback: ProgressCallback,
    completed: int,
    total: int,
    message: Optional[str] = None,
) -> None:
    if not callback:
        return
    callback(ProgressUpdate(total=total, completed=completed, message=message))


def _write_report(config: JobConfig, result: BatchResult) -> None:
    assert config.report_path is not None
    try:
        write_csv_report(result.all_outcomes(), config.report_path)
    except OSError as exc:
        LOGGER.error("写入报告失败：%s", exc)
