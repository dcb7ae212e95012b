"""项目内使用的自定义异常定义。"""


class SpriteRecolorError(Exception):
    """基础异常类型。"""


class InvalidConfigurationError(SpriteRecolorError):
    """配置不合法时抛出。"""


class InvalidColorError(InvalidConfigurationError):
    """目标颜色无法解析或包含非有限值。"""


class EmptySelectionError(SpriteRecolorError):
    """没有选择任何待处理的图片。"""
