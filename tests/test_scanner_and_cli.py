"""测试输入扫描、CSV 报告与命令行入口。"""

from __future__ import annotations

import csv
from pathlib import Path

from PIL import Image
from typer.testing import CliRunner

from sprite_recolor.cli.main import EXIT_EMPTY_SELECTION, EXIT_PARTIAL, app
from sprite_recolor.core.config import JobConfig
from sprite_recolor.core.scanner import collect_batch_items
from sprite_recolor.processing.pipeline import run_job
from sprite_recolor.utils.colors import Rgba

RED = Rgba(1.0, 0.0, 0.0, 1.0)

runner = CliRunner()


def _make_tree(root: Path) -> None:
    (root / "nested").mkdir(parents=True)
    (root / "Output").mkdir()
    Image.new("RGBA", (4, 4), (0, 0, 0, 255)).save(root / "hero.png")
    Image.new("RGB", (4, 4), "white").save(root / "nested" / "tile.JPG")
    Image.new("RGBA", (4, 4), (0, 0, 0, 255)).save(root / "Output" / "hero_FF0000FF.png")
    (root / "readme.txt").write_text("hello")


def test_directory_scan_filters_patterns_and_skips_output(tmp_path: Path) -> None:
    _make_tree(tmp_path)

    items = collect_batch_items(JobConfig(sources=[tmp_path], target=RED))

    names = [item.source_path.name for item in items]
    assert names == ["hero.png", "tile.JPG"]


def test_directory_scan_without_recursion(tmp_path: Path) -> None:
    _make_tree(tmp_path)

    items = collect_batch_items(JobConfig(sources=[tmp_path], target=RED, allow_recursive=False))

    assert [item.source_path.name for item in items] == ["hero.png"]


def test_exclude_patterns_and_explicit_files(tmp_path: Path) -> None:
    _make_tree(tmp_path)
    notes = tmp_path / "readme.txt"

    items = collect_batch_items(
        JobConfig(sources=[tmp_path, notes, notes], target=RED, exclude_patterns=("tile*",))
    )

    assert [item.source_path.name for item in items] == ["hero.png", "readme.txt"]


def test_run_job_writes_csv_report(tmp_path: Path) -> None:
    source = tmp_path / "sprites"
    _make_tree(source)
    report = tmp_path / "reports" / "recolor.csv"

    result = run_job(JobConfig(sources=[source, source / "readme.txt"], target=RED, report_path=report))

    assert (result.processed_count, result.warning_count, result.error_count) == (2, 1, 0)
    with report.open("r", encoding="utf-8", newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert [row["status"] for row in rows] == ["processed", "processed", "skip-not-image"]
    assert rows[0]["output_path"].endswith("hero_FF0000FF.png")


def test_cli_reports_success(tmp_path: Path) -> None:
    Image.new("RGBA", (4, 4), (0, 0, 0, 255)).save(tmp_path / "cat.png")

    result = runner.invoke(app, ["run", str(tmp_path / "cat.png"), "--color", "#FF0000FF"])

    assert result.exit_code == 0, result.output
    assert "Successfully processed 1 images." in result.output
    assert (tmp_path / "Output" / "cat_FF0000FF.png").exists()


def test_cli_reports_partial_failure(tmp_path: Path) -> None:
    Image.new("RGBA", (4, 4), (0, 0, 0, 255)).save(tmp_path / "cat.png")
    (tmp_path / "broken.png").write_text("nope")

    result = runner.invoke(app, ["run", str(tmp_path), "-c", "0,0,255"])

    assert result.exit_code == EXIT_PARTIAL
    assert "Processed: 1 of 2" in result.output
    assert "Warnings: 1" in result.output


def test_cli_empty_selection(tmp_path: Path) -> None:
    result = runner.invoke(app, ["run", str(tmp_path), "--color", "#FFFFFF"])

    assert result.exit_code == EXIT_EMPTY_SELECTION
    assert "No images selected" in result.output


def test_cli_rejects_invalid_color(tmp_path: Path) -> None:
    result = runner.invoke(app, ["run", str(tmp_path), "--color", "not-a-color"])

    assert result.exit_code == 2
    assert not (tmp_path / "Output").exists()
