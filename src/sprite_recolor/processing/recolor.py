"""逐像素重新着色。"""

from __future__ import annotations

import numpy as np

from sprite_recolor.utils.colors import Rgba


def recolor(pixels: np.ndarray, target: Rgba) -> np.ndarray:
    """返回新的像素数组：RGB 全部替换为目标色，Alpha 为目标 Alpha 与原 Alpha 之积。

    不做截断、伽马校正或取整；零尺寸输入得到零尺寸输出。
    """

    if pixels.ndim != 3 or pixels.shape[-1] != 4:
        raise ValueError(f"需要 (高, 宽, 4) 的 RGBA 数组，实际形状为 {pixels.shape}")

    result = np.empty_like(pixels)
    result[..., 0] = target.r
    result[..., 1] = target.g
    result[..., 2] = target.b
    result[..., 3] = pixels[..., 3] * target.a
    return result
