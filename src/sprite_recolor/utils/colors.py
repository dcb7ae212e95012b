"""颜色工具函数。"""

from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass
from typing import Tuple

from sprite_recolor.core.exceptions import InvalidColorError

HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


@dataclass(frozen=True, slots=True)
class Rgba:
    """浮点 RGBA 颜色，通道约定在 [0, 1]，但不做截断。"""

    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise InvalidColorError(f"颜色通道 {name} 必须为有限数值: {value!r}")

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def to_bytes(self) -> Tuple[int, int, int, int]:
        """转换为 0-255 的整数通道（先截断到 [0, 1] 再四舍五入）。"""

        return tuple(_channel_to_byte(value) for value in self.as_tuple())  # type: ignore[return-value]

    def to_hex(self) -> str:
        """返回大写 RRGGBBAA 字符串，用于输出文件名。"""

        return "".join(f"{value:02X}" for value in self.to_bytes())


def _channel_to_byte(value: float) -> int:
    clamped = min(max(value, 0.0), 1.0)
    return int(round(clamped * 255))


def parse_hex_color(value: str) -> Rgba:
    """将 HEX 字符串（#RGB、#RGBA、#RRGGBB、#RRGGBBAA）解析为 Rgba。"""

    if not value:
        raise InvalidColorError("颜色值不能为空")

    match = HEX_COLOR_RE.match(value.strip())
    if not match:
        raise InvalidColorError(f"无法解析颜色值: {value}")

    hex_value = match.group(1)
    if len(hex_value) in (3, 4):
        hex_value = "".join(ch * 2 for ch in hex_value)
    if len(hex_value) == 6:
        hex_value += "FF"

    channels = [int(hex_value[idx : idx + 2], 16) / 255.0 for idx in range(0, 8, 2)]
    return Rgba(*channels)


def parse_color(value: str) -> Rgba:
    """解析命令行传入的颜色。

    支持 HEX 形式，以及逗号分隔的 3 或 4 个通道：全部为整数时按 0-255 解释，
    否则按 [0, 1] 浮点解释。
    """

    text = (value or "").strip()
    if "," not in text:
        return parse_hex_color(text)

    parts = [part.strip() for part in text.split(",")]
    if len(parts) not in (3, 4):
        raise InvalidColorError(f"颜色需要 3 或 4 个通道: {value}")

    if all(re.fullmatch(r"\d+", part) for part in parts):
        ints = [int(part) for part in parts]
        if any(channel > 255 for channel in ints):
            raise InvalidColorError(f"整数通道必须在 0-255 之间: {value}")
        return Rgba(*(channel / 255.0 for channel in ints))

    try:
        floats = [float(part) for part in parts]
    except ValueError as exc:
        raise InvalidColorError(f"无法解析颜色值: {value}") from exc
    return Rgba(*floats)
