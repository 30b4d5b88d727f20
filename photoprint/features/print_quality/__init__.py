"""
印刷品質模組

中繼資料擷取、驗證、像素需求計算與 DPI 嵌入
"""

from .calculator import (
    calculate_physical_size,
    calculate_required_pixels,
    describe_print_requirements,
)
from .dpi_embedder import DPIEmbedder
from .metadata import MetadataExtractor
from .validator import ImageValidator


__all__ = [
    "DPIEmbedder",
    "ImageValidator",
    "MetadataExtractor",
    "calculate_physical_size",
    "calculate_required_pixels",
    "describe_print_requirements",
]
