"""命令行入口。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from sprite_recolor.core.config import DEFAULT_INCLUDE_PATTERNS, JobConfig, OutputConfig
from sprite_recolor.core.exceptions import EmptySelectionError, InvalidColorError, InvalidConfigurationError
from sprite_recolor.core.progress import ProgressUpdate
from sprite_recolor.processing.pipeline import run_job
from sprite_recolor.utils.colors import Rgba, parse_color
from sprite_recolor.utils.logging import setup_logging

app = typer.Typer(help="批量将精灵图重新着色并导出 PNG。")

EXIT_EMPTY_SELECTION = 1
EXIT_PARTIAL = 3


def _parse_target(value: str) -> Rgba:
    try:
        return parse_color(value)
    except InvalidColorError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _build_progress_callback(progress: Progress):
    task_id: Optional[int] = None

    def callback(update: ProgressUpdate) -> None:
        nonlocal task_id
        if task_id is None:
            task_id = progress.add_task("Processing Sprites", total=update.total)
        progress.update(task_id, completed=update.completed, description=update.message or "Processing Sprites")

    return callback


@app.callback()
def main() -> None:
    """批量将精灵图重新着色并导出 PNG。"""


@app.command("run")
def run_cli(
    source: List[Path] = typer.Argument(..., help="源图片文件或目录，可指定多个"),
    color: str = typer.Option("#FFFFFFFF", "--color", "-c", help="目标颜色，HEX (#RRGGBBAA) 或 R,G,B[,A]"),
    output_dir_name: str = typer.Option("Output", "--output-dir-name", help="源文件旁的输出子目录名"),
    conflict_strategy: str = typer.Option(
        "rename", "--on-conflict", help="同批次输出重名策略 rename/overwrite/error"
    ),
    allow_recursive: bool = typer.Option(True, "--recursive/--no-recursive", help="是否递归扫描目录"),
    include: Optional[List[str]] = typer.Option(None, "--include", help="目录扫描时包含的文件模式"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", help="目录扫描时排除的文件模式"),
    report: Optional[Path] = typer.Option(None, "--report", help="将逐项结果写入 CSV 报告"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """对选中的图片执行重新着色。"""

    setup_logging(logging.DEBUG if verbose else logging.INFO)
    target = _parse_target(color)

    job = JobConfig(
        sources=[p.expanduser() for p in source],
        target=target,
        output=OutputConfig(subdir_name=output_dir_name, conflict_strategy=conflict_strategy),
        allow_recursive=allow_recursive,
        include_patterns=tuple(include) if include else DEFAULT_INCLUDE_PATTERNS,
        exclude_patterns=tuple(exclude or ()),
        report_path=report.expanduser().resolve() if report else None,
    )

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
    )

    try:
        with progress:
            result = run_job(job, progress_callback=_build_progress_callback(progress))
    except EmptySelectionError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_EMPTY_SELECTION) from exc
    except InvalidConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(result.display_message)
    if job.report_path is not None:
        typer.echo(f"报告文件：{job.report_path}")
    if not result.all_succeeded:
        raise typer.Exit(code=EXIT_PARTIAL)


if __name__ == "__main__":
    app()
