"""图片可读性准备与像素加载实现。"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from sprite_recolor.core.exceptions import SpriteRecolorError

LOGGER = logging.getLogger(__name__)


class ImageLoadingError(SpriteRecolorError):
    """源文件无法解码为图片。"""


class ImageTooLargeError(ImageLoadingError):
    """图片像素数超过 Pillow 的解压炸弹上限。"""


def is_image_path(path: Path) -> bool:
    """扩展名是否属于 Pillow 已注册的图片格式。"""

    return path.suffix.lower() in Image.registered_extensions()


def ensure_readable(path: Path) -> bool:
    """确保源图片对当前用户可读。

    文件系统上的“不可读”标记就是缺少读权限：此时为属主补上读权限位并返回 True。
    只处理扩展名属于图片格式的文件；已可读、文件不存在或不是图片时不做任何事。
    chmod 失败时抛出 ``OSError``。
    """

    if not path.is_file() or not is_image_path(path) or _is_readable(path):
        return False

    mode = path.stat().st_mode
    path.chmod(stat.S_IMODE(mode) | stat.S_IRUSR)
    LOGGER.info("已为源文件开启读权限: %s", path)
    return True


def _is_readable(path: Path) -> bool:
    return os.access(path, os.R_OK)


def load_pixels(path: Path) -> np.ndarray:
    """加载单张图片为 ``(高, 宽, 4)`` 的 float32 RGBA 数组，取值范围 [0, 1]。

    按文件中存储的像素读取，不应用 EXIF 方向；任何模式都会转换为 RGBA，
    缺少 Alpha 的图片视为完全不透明。
    """

    try:
        with Image.open(path) as img:
            img.load()
            if img.mode != "RGBA":
                img = img.convert("RGBA")
            array = np.asarray(img, dtype=np.float32)
    except Image.DecompressionBombError as exc:
        LOGGER.debug("图像尺寸超出上限 %s: %s", path, exc)
        raise ImageTooLargeError(f"图像尺寸超出上限: {path}") from exc
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        LOGGER.debug("无法识别图像文件 %s: %s", path, exc)
        raise ImageLoadingError(f"无法加载图像: {path}") from exc

    return array / 255.0
