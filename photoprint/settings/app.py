"""
應用程式設定

使用 Pydantic BaseSettings 管理環境變數和配置
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from photoprint.common.units import DEFAULT_PRINT_DPI


class AppSettings(BaseSettings):
    """
    應用程式設定

    從環境變數和 .env 文件讀取設定

    Attributes:
        log_level: 日誌級別 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        default_dpi: 套餐未設定解析度時的印刷 DPI
        max_upload_bytes: 上傳檔案大小上限
        allowed_formats: 允許上傳的格式
        tolerance_cm: 實體尺寸容許誤差（公分）
        jpeg_quality: JPEG 重新編碼品質
        png_compress_level: PNG 壓縮等級 (0-9)
        codec: 圖片編解碼器名稱
        storage_prefix: 儲存 key 前綴
        max_workers: 批次處理執行緒數
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PHOTOPRINT_",
        case_sensitive=False,
    )

    # 日誌設定
    log_level: str = "INFO"

    # 上傳限制
    default_dpi: float = DEFAULT_PRINT_DPI
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB
    allowed_formats: tuple[str, ...] = ("jpg", "jpeg", "png")
    tolerance_cm: float = 0.5

    # 編碼設定
    jpeg_quality: int = 95
    png_compress_level: int = 9
    codec: str = "pillow"

    # 儲存設定
    storage_prefix: str = "photos"
    max_workers: int = 1

