"""
圖片格式正規化

允許格式比對與儲存格式判斷共用同一個正規化函數，避免 jpeg/jpg 不一致
"""

from collections.abc import Iterable
from typing import Final, Literal


OutputFormat = Literal["jpg", "png"]

# 正規化別名
FORMAT_ALIASES: Final[dict[str, str]] = {
    "jpeg": "jpg",
    "jpe": "jpg",
}

CONTENT_TYPES: Final[dict[str, str]] = {
    "jpg": "image/jpeg",
    "png": "image/png",
}


def normalize_format(fmt: str) -> str:
    """
    正規化格式名稱

    轉小寫並將 jpeg 對應為 jpg

    Args:
        fmt: 格式名稱 (如 "JPEG", "png", ".jpg")

    Returns:
        正規化後的格式名稱
    """
    lowered = fmt.strip().lower().lstrip(".")
    return FORMAT_ALIASES.get(lowered, lowered)


def normalize_formats(formats: Iterable[str]) -> frozenset[str]:
    """正規化一組格式名稱"""
    return frozenset(normalize_format(f) for f in formats)


def output_format_for(source_format: str) -> OutputFormat:
    """
    決定重新編碼後的輸出格式

    PNG 保持 PNG，其餘一律輸出 JPEG
    """
    return "png" if normalize_format(source_format) == "png" else "jpg"


def content_type_for(fmt: str) -> str:
    """取得格式對應的 Content-Type"""
    return CONTENT_TYPES[output_format_for(fmt)]
