"""
像素需求計算

- 實體尺寸 → 最少像素（無條件進位）
- 像素 → 實體尺寸（不四捨五入）
"""

from photoprint.common.units import DEFAULT_PRINT_DPI, cm_to_px, px_to_cm
from photoprint.data_model import PhysicalSize, PixelDimensions, PrintRequirement


def calculate_required_pixels(
    width_cm: float, height_cm: float, dpi: float = DEFAULT_PRINT_DPI
) -> PixelDimensions:
    """
    計算印刷指定尺寸所需的最少像素

    Args:
        width_cm: 印刷寬度（公分）
        height_cm: 印刷高度（公分）
        dpi: 印刷解析度

    Returns:
        每軸獨立無條件進位的像素尺寸
    """
    return PixelDimensions(
        width=cm_to_px(width_cm, dpi),
        height=cm_to_px(height_cm, dpi),
    )


def calculate_physical_size(
    width_px: int, height_px: int, dpi: float = DEFAULT_PRINT_DPI
) -> PhysicalSize:
    """
    計算像素在指定 DPI 下的實體尺寸

    Args:
        width_px: 寬度（像素）
        height_px: 高度（像素）
        dpi: 印刷解析度

    Returns:
        實體尺寸（公分，未四捨五入）
    """
    return PhysicalSize(
        width_cm=px_to_cm(width_px, dpi),
        height_cm=px_to_cm(height_px, dpi),
    )


def describe_print_requirements(
    width_cm: float, height_cm: float, dpi: float = DEFAULT_PRINT_DPI
) -> PrintRequirement:
    """產生印刷需求說明（含百萬像素與建議文字）"""
    pixels = calculate_required_pixels(width_cm, height_cm, dpi)
    megapixels = f"{pixels.width * pixels.height / 1_000_000:.2f}"
    recommendation = (
        f"To print {width_cm:g}cm x {height_cm:g}cm at {dpi:g} DPI, "
        f"you need an image of at least {pixels.width}x{pixels.height} pixels"
    )
    return PrintRequirement(
        width_cm=width_cm,
        height_cm=height_cm,
        dpi=dpi,
        required_pixels=pixels,
        megapixels=megapixels,
        recommendation=recommendation,
    )
