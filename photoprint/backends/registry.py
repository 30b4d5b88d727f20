"""
編解碼器註冊表

以裝飾器註冊圖片編解碼器，依名稱建立實例
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar

from photoprint.core.interfaces import ImageCodecProtocol


if TYPE_CHECKING:
    from photoprint.settings import AppSettings


logger = logging.getLogger(__name__)


class CodecRegistry:
    """
    編解碼器註冊表

    用法::

        @CodecRegistry.register("pillow")
        class PillowCodec: ...

        codec = CodecRegistry.create("pillow", jpeg_quality=95)
    """

    _codecs: ClassVar[dict[str, type[ImageCodecProtocol]]] = {}

    @classmethod
    def register(
        cls, name: str
    ) -> Callable[[type[ImageCodecProtocol]], type[ImageCodecProtocol]]:
        """註冊編解碼器類別"""

        def decorator(codec_cls: type[ImageCodecProtocol]) -> type[ImageCodecProtocol]:
            if name in cls._codecs and cls._codecs[name] is not codec_cls:
                logger.warning("Codec %s re-registered by %s", name, codec_cls.__name__)
            cls._codecs[name] = codec_cls
            return codec_cls

        return decorator

    @classmethod
    def has_codec(cls, name: str) -> bool:
        """是否已註冊"""
        return name in cls._codecs

    @classmethod
    def list_codecs(cls) -> list[str]:
        """列出所有已註冊的編解碼器名稱"""
        return sorted(cls._codecs)

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> ImageCodecProtocol:
        """
        建立編解碼器實例

        Raises:
            ValueError: 名稱未註冊時
        """
        codec_cls = cls._codecs.get(name)
        if codec_cls is None:
            available = ", ".join(cls.list_codecs()) or "none"
            msg = f"Unknown codec: {name} (available: {available})"
            raise ValueError(msg)
        return codec_cls(**kwargs)


def build_codec(app_settings: "AppSettings") -> ImageCodecProtocol:
    """依設定建立編解碼器"""
    # 確保內建編解碼器已註冊
    from . import pillow_codec  # noqa: F401

    return CodecRegistry.create(
        app_settings.codec,
        jpeg_quality=app_settings.jpeg_quality,
        png_compress_level=app_settings.png_compress_level,
    )
