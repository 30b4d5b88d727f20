"""
共用模組

提供單位換算與格式正規化等在多個功能間共用的工具
"""

from .formats import (
    OutputFormat,
    content_type_for,
    normalize_format,
    normalize_formats,
    output_format_for,
)
from .units import (
    CM_PER_INCH,
    DEFAULT_PRINT_DPI,
    cm_to_px,
    px_to_cm,
    px_to_inches,
    require_positive_dpi,
    truncate_decimals,
)


__all__ = [
    "CM_PER_INCH",
    "DEFAULT_PRINT_DPI",
    "OutputFormat",
    "cm_to_px",
    "content_type_for",
    "normalize_format",
    "normalize_formats",
    "output_format_for",
    "px_to_cm",
    "px_to_inches",
    "require_positive_dpi",
    "truncate_decimals",
]
