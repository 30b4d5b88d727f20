"""
核心資料模型

使用 Pydantic 進行資料驗證和序列化，所有模型皆為不可變的值物件，
每次上傳請求建立、用完即丟
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

from photoprint.common.formats import OutputFormat, content_type_for


class ImageMetadata(BaseModel):
    """
    圖片中繼資料

    Attributes:
        width: 寬度（像素）
        height: 高度（像素）
        format: 偵測到的格式 (jpeg, png...)
        size_bytes: 檔案大小（位元組）
        dpi: 內嵌 DPI（無則為 None）
        physical_width_cm: 實體寬度（僅在有 DPI 時）
        physical_height_cm: 實體高度（僅在有 DPI 時）
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=0)
    height: int = Field(ge=0)
    format: str
    size_bytes: int = Field(ge=0)
    dpi: float | None = None
    physical_width_cm: float | None = None
    physical_height_cm: float | None = None

    @classmethod
    def empty(cls) -> "ImageMetadata":
        """解碼失敗時使用的零值中繼資料"""
        return cls(width=0, height=0, format="unknown", size_bytes=0)

    @property
    def size_mb(self) -> float:
        """檔案大小 (MB)"""
        return self.size_bytes / 1024 / 1024


class ValidationRequirements(BaseModel):
    """
    驗證需求

    所有欄位皆為選填，未提供的項目不檢查

    Attributes:
        min_width_px: 最小寬度（像素）
        min_height_px: 最小高度（像素）
        min_dpi: 建議最低 DPI（通常為 300）
        max_file_size_bytes: 檔案大小上限
        allowed_formats: 允許的格式（保留順序供錯誤訊息使用）
        expected_width_cm: 預期實體寬度
        expected_height_cm: 預期實體高度
        tolerance_cm: 實體尺寸容許誤差
    """

    model_config = ConfigDict(frozen=True)

    min_width_px: int | None = Field(default=None, gt=0)
    min_height_px: int | None = Field(default=None, gt=0)
    min_dpi: float | None = Field(default=None, gt=0)
    max_file_size_bytes: int | None = Field(default=None, gt=0)
    allowed_formats: tuple[str, ...] | None = None
    expected_width_cm: float | None = Field(default=None, gt=0)
    expected_height_cm: float | None = Field(default=None, gt=0)
    tolerance_cm: float = Field(default=0.5, ge=0)


class ValidationResult(BaseModel):
    """
    驗證結果

    is_valid 只取決於 errors，warnings 不影響結果
    """

    model_config = ConfigDict(frozen=True)

    metadata: ImageMetadata
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        """是否通過驗證"""
        return len(self.errors) == 0


class EmbedResult(BaseModel):
    """
    DPI 嵌入結果

    Attributes:
        buffer: 重新編碼後的圖片
        format: 標準三字母格式 (jpg / png)
    """

    model_config = ConfigDict(frozen=True)

    buffer: bytes
    format: OutputFormat

    @property
    def content_type(self) -> str:
        """儲存時使用的 Content-Type"""
        return content_type_for(self.format)

    @property
    def extension(self) -> str:
        """副檔名（含點）"""
        return f".{self.format}"


class PixelDimensions(BaseModel):
    """像素尺寸"""

    model_config = ConfigDict(frozen=True)

    width: int
    height: int


class PhysicalSize(BaseModel):
    """實體尺寸（公分，未四捨五入）"""

    model_config = ConfigDict(frozen=True)

    width_cm: float
    height_cm: float


class PrintRequirement(BaseModel):
    """
    印刷需求說明

    Attributes:
        width_cm: 印刷寬度
        height_cm: 印刷高度
        dpi: 印刷解析度
        required_pixels: 最少像素
        megapixels: 百萬像素（兩位小數）
        recommendation: 給使用者的建議文字
    """

    model_config = ConfigDict(frozen=True)

    width_cm: float
    height_cm: float
    dpi: float
    required_pixels: PixelDimensions
    megapixels: str
    recommendation: str


class ValidationReport(BaseModel):
    """
    驗證報告

    提供給使用者上傳前預覽的摘要
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    metadata: ImageMetadata
    size_mb: str
    physical_width_cm: str | None = None
    physical_height_cm: str | None = None
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    recommended_pixels: PixelDimensions | None = None
    message: str


class PrintSpec(BaseModel):
    """
    套餐的印刷規格

    Attributes:
        width_cm: 照片寬度（公分）
        height_cm: 照片高度（公分）
        resolution_dpi: 套餐設定的解析度（未設定時使用預設 300）
    """

    model_config = ConfigDict(frozen=True)

    width_cm: float | None = Field(default=None, gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    resolution_dpi: float | None = Field(default=None, gt=0)


class StoredPhoto(BaseModel):
    """
    已儲存照片的紀錄

    實體尺寸由嵌入後圖片的真實像素與目標 DPI 計算，截斷至兩位小數
    """

    model_config = ConfigDict(frozen=True)

    key: str
    url: str
    original_filename: str
    format: OutputFormat
    content_type: str
    size_bytes: int
    width_px: int
    height_px: int
    dpi: float
    physical_width_cm: float
    physical_height_cm: float
    warnings: tuple[str, ...] = ()


class BatchConfig(BaseModel):
    """
    批次處理設定

    Attributes:
        input_folder: 輸入資料夾路徑
        spec: 套用到所有圖片的印刷規格
        output_folder: 輸出資料夾路徑
        owner_id: 儲存路徑使用的擁有者編號
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    input_folder: Path
    spec: PrintSpec = Field(default_factory=PrintSpec)
    output_folder: Path | None = None
    owner_id: int = 0

    def model_post_init(self, __context: object) -> None:
        """Set default output folder after initialization."""
        if self.output_folder is None:
            # Use object.__setattr__ since model is frozen
            object.__setattr__(self, "output_folder", self.input_folder / "print_ready")


class BatchResult(BaseModel):
    """
    批次處理結果

    Attributes:
        total: 總圖片數
        success: 成功數
        failed: 失敗數
        output_folder: 輸出資料夾路徑
        failures: 失敗檔名與原因
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    total: int = Field(ge=0)
    success: int = Field(ge=0)
    failed: int = Field(ge=0)
    output_folder: Path
    failures: dict[str, str] = Field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        """成功率"""
        return self.success / self.total if self.total > 0 else 0.0

    @property
    def is_complete_success(self) -> bool:
        """是否全部成功"""
        return self.failed == 0


# 支援的圖片副檔名
SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({".jpg", ".jpeg", ".png"})


def is_supported_image(path: Path) -> bool:
    """
    檢查檔案是否為支援的圖片格式

    Args:
        path: 檔案路徑

    Returns:
        是否為支援的圖片格式
    """
    return path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS
