"""
單位換算模組

像素、英吋與公分之間的換算，全部以 DPI 為基準

換算規則：
- 像素需求一律無條件進位（寧可多給像素，不可印刷不足）
- 實體尺寸不做四捨五入，保留浮點數，由呼叫端決定截斷位數
"""

import math
from decimal import ROUND_DOWN, Decimal
from typing import Final

from photoprint.core.errors import InvalidDPIError


# 1 inch = 2.54 cm
CM_PER_INCH: Final[float] = 2.54

# 印刷預設解析度，所有「假設 DPI」都以此為準
DEFAULT_PRINT_DPI: Final[int] = 300


def require_positive_dpi(dpi: float) -> None:
    """
    檢查 DPI 是否為正數

    Raises:
        InvalidDPIError: DPI <= 0 時
    """
    if dpi <= 0:
        raise InvalidDPIError(f"DPI must be positive, got {dpi}")


def px_to_inches(px: float, dpi: float) -> float:
    """像素 → 英吋"""
    require_positive_dpi(dpi)
    return px / dpi


def px_to_cm(px: float, dpi: float) -> float:
    """
    像素 → 公分

    Args:
        px: 像素數
        dpi: 解析度

    Returns:
        公分（未經四捨五入）
    """
    return px_to_inches(px, dpi) * CM_PER_INCH


def cm_to_px(cm: float, dpi: float) -> int:
    """
    公分 → 像素

    Args:
        cm: 公分
        dpi: 解析度

    Returns:
        所需像素數（無條件進位）
    """
    require_positive_dpi(dpi)
    return math.ceil((cm / CM_PER_INCH) * dpi)


def truncate_decimals(value: float, places: int = 2) -> float:
    """
    截斷至指定小數位數（不進位）

    使用 Decimal 避免 10.16 * 100 = 1015.999... 這類浮點誤差
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_DOWN))
