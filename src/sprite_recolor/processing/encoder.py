"""PNG 编码。"""

from __future__ import annotations

import io
import logging
from typing import Optional

import numpy as np
from PIL import Image

LOGGER = logging.getLogger(__name__)


def to_rgba8(pixels: np.ndarray) -> np.ndarray:
    """将 [0, 1] 浮点通道量化为 uint8，超出范围的值在这里截断。"""

    scaled = np.clip(pixels, 0.0, 1.0) * 255.0
    return np.rint(scaled).astype(np.uint8)


def encode_png(pixels: np.ndarray) -> Optional[bytes]:
    """将 RGBA 浮点数组编码为无损 PNG 字节，失败时返回 None。"""

    if pixels.size == 0:
        LOGGER.debug("零尺寸图像无法编码为 PNG")
        return None

    try:
        image = Image.fromarray(to_rgba8(pixels))
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
    except (ValueError, TypeError, OSError) as exc:
        LOGGER.debug("PNG 编码失败: %s", exc)
        return None

    return buffer.getvalue()
