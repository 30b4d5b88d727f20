"""
後端模組

提供圖片編解碼器與儲存的實作
"""

from .pillow_codec import PillowCodec
from .registry import CodecRegistry, build_codec
from .storage import LocalStorage


__all__ = [
    "CodecRegistry",
    "LocalStorage",
    "PillowCodec",
    "build_codec",
]
