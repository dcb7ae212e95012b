"""单个条目的处理单元。"""

from __future__ import annotations

from sprite_recolor.core.models import BatchItem, ItemOutcome
from sprite_recolor.core.output_manager import ImageWriteError, OutputManager
from sprite_recolor.processing.encoder import encode_png
from sprite_recolor.processing.image_loader import (
    ImageLoadingError,
    ImageTooLargeError,
    ensure_readable,
    load_pixels,
)
from sprite_recolor.processing.recolor import recolor
from sprite_recolor.utils.colors import Rgba


def run_item(item: BatchItem, target: Rgba, output_manager: OutputManager) -> ItemOutcome:
    """执行单个条目的完整流程，所有单项错误都在这里转换为结果记录。"""

    ref = item.ref

    try:
        ensure_readable(item.source_path)
    except OSError as exc:
        return ItemOutcome(
            source_path=item.source_path,
            status="error-readable",
            message=f"failed to make readable: {ref} ({exc})",
        )

    try:
        pixels = load_pixels(item.source_path)
    except ImageTooLargeError as exc:
        return ItemOutcome(
            source_path=item.source_path,
            status="error-load",
            message=f"failed to load: {ref} ({exc})",
        )
    except ImageLoadingError:
        return ItemOutcome(
            source_path=item.source_path,
            status="skip-not-image",
            message=f"not an image: {ref}",
        )

    recolored = recolor(pixels, target)

    output_dir = output_manager.output_dir_for(item.source_path)
    try:
        output_manager.ensure_directory(output_dir)
    except ImageWriteError as exc:
        return ItemOutcome(
            source_path=item.source_path,
            status="error-write",
            message=f"failed to write: {ref} ({exc})",
        )

    png_data = encode_png(recolored)
    if png_data is None:
        return ItemOutcome(
            source_path=item.source_path,
            status="error-encode",
            message=f"failed to encode: {ref}",
        )

    decision = output_manager.decide_destination(item.source_path, target)
    if decision.action == "error" or decision.destination is None:
        return ItemOutcome(
            source_path=item.source_path,
            status="error-collision",
            message=f"output name collision: {ref} ({decision.note})",
        )

    try:
        output_manager.write_bytes(png_data, decision.destination)
    except ImageWriteError as exc:
        return ItemOutcome(
            source_path=item.source_path,
            status="error-write",
            output_path=decision.destination,
            message=f"failed to write: {ref} ({exc})",
        )

    status = "processed"
    if decision.action == "overwrite":
        status = "processed-overwrite"
    elif decision.action == "rename":
        status = "processed-rename"

    message = f"saved to: {decision.destination}"
    if decision.note:
        message = f"{message}; {decision.note}"

    return ItemOutcome(
        source_path=item.source_path,
        status=status,
        output_path=decision.destination,
        message=message,
    )
