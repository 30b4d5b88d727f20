#!/usr/bin/env python3
"""
照片印刷品質工具

主程式進入點

使用方法:
    uv run main.py validate photo.jpg --width-cm 10 --height-cm 15
    uv run main.py requirements 10 15 --dpi 300
    uv run main.py embed photo.jpg --dpi 300 -o photo_300dpi.jpg
    uv run main.py batch ./photos --width-cm 10 --height-cm 15 --workers 4
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from photoprint.backends import build_codec
from photoprint.common import DEFAULT_PRINT_DPI
from photoprint.core.errors import PhotoPrintError
from photoprint.core.processor import PrintBatchProcessor
from photoprint.core.progress import RichProgressBar
from photoprint.data_model import BatchConfig, PrintSpec, ValidationRequirements
from photoprint.features.print_quality import (
    DPIEmbedder,
    ImageValidator,
    MetadataExtractor,
    describe_print_requirements,
)
from photoprint.settings import AppSettings


def build_parser() -> argparse.ArgumentParser:
    """建立命令列參數解析器"""
    parser = argparse.ArgumentParser(
        prog="photoprint",
        description="Validate photos for printing and embed print DPI",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate an image for printing")
    validate.add_argument("image", type=Path)
    validate.add_argument("--width-cm", type=float)
    validate.add_argument("--height-cm", type=float)
    validate.add_argument("--min-dpi", type=float, default=DEFAULT_PRINT_DPI)
    validate.add_argument("--tolerance-cm", type=float)

    requirements = sub.add_parser("requirements", help="Pixels needed for a print size")
    requirements.add_argument("width_cm", type=float)
    requirements.add_argument("height_cm", type=float)
    requirements.add_argument("--dpi", type=float, default=DEFAULT_PRINT_DPI)

    embed = sub.add_parser("embed", help="Re-encode an image with the given DPI")
    embed.add_argument("image", type=Path)
    embed.add_argument("--dpi", type=float)
    embed.add_argument("-o", "--output", type=Path)

    batch = sub.add_parser("batch", help="Validate and prepare a folder of photos")
    batch.add_argument("folder", type=Path)
    batch.add_argument("-o", "--output", type=Path)
    batch.add_argument("--width-cm", type=float)
    batch.add_argument("--height-cm", type=float)
    batch.add_argument("--dpi", type=float)
    batch.add_argument("--workers", type=int)

    return parser


def run_validate(args: argparse.Namespace, app_settings: AppSettings) -> int:
    """驗證單張圖片並輸出 JSON 報告"""
    validator = ImageValidator(MetadataExtractor(build_codec(app_settings)))
    requirements = ValidationRequirements(
        min_dpi=args.min_dpi,
        max_file_size_bytes=app_settings.max_upload_bytes,
        allowed_formats=app_settings.allowed_formats,
        expected_width_cm=args.width_cm,
        expected_height_cm=args.height_cm,
        tolerance_cm=(
            args.tolerance_cm if args.tolerance_cm is not None else app_settings.tolerance_cm
        ),
    )
    report = validator.build_report(args.image.read_bytes(), requirements)
    print(report.model_dump_json(indent=2))
    return 0 if report.is_valid else 1


def run_requirements(args: argparse.Namespace, app_settings: AppSettings) -> int:
    """顯示印刷尺寸所需像素"""
    requirement = describe_print_requirements(args.width_cm, args.height_cm, args.dpi)
    print(requirement.model_dump_json(indent=2))
    return 0


def run_embed(args: argparse.Namespace, app_settings: AppSettings) -> int:
    """以指定 DPI 重新編碼圖片"""
    dpi = args.dpi or app_settings.default_dpi
    result = DPIEmbedder(build_codec(app_settings)).embed_dpi(args.image.read_bytes(), dpi)

    output = args.output or args.image.with_name(
        f"{args.image.stem}_{dpi:g}dpi{result.extension}"
    )
    output.write_bytes(result.buffer)
    print(f"✅ {output} ({result.content_type}, {dpi:g} DPI)")
    return 0


def run_batch(args: argparse.Namespace, app_settings: AppSettings) -> int:
    """批次驗證並準備資料夾中的照片"""
    config = BatchConfig(
        input_folder=args.folder,
        output_folder=args.output,
        spec=PrintSpec(
            width_cm=args.width_cm,
            height_cm=args.height_cm,
            resolution_dpi=args.dpi,
        ),
    )
    codec = build_codec(app_settings)
    workers = args.workers or app_settings.max_workers
    total = len(PrintBatchProcessor(codec, app_settings).scan_images(config.input_folder))

    with RichProgressBar(total=total) as bar:
        processor = PrintBatchProcessor(
            codec, app_settings, progress_callback=bar, max_workers=workers
        )
        result = processor.process_folder(config)

    print("\n" + "=" * 60)
    print("✅ 處理完成！".center(60))
    print("=" * 60)
    print(f"\n  📊 總計: {result.total} 張圖片")
    print(f"  ✅ 成功: {result.success} 張")
    if result.failed > 0:
        print(f"  ❌ 失敗: {result.failed} 張")
        for name, reason in sorted(result.failures.items()):
            print(f"     - {name}: {reason}")
    print(f"  📂 輸出: {result.output_folder}")
    print("\n" + "=" * 60 + "\n")
    return 0 if result.is_complete_success else 1


COMMANDS = {
    "validate": run_validate,
    "requirements": run_requirements,
    "embed": run_embed,
    "batch": run_batch,
}


def main(argv: Sequence[str] | None = None) -> int:
    """
    主程式

    Returns:
        退出碼 (0: 成功, 1: 失敗, 130: 中斷)
    """
    args = build_parser().parse_args(argv)

    try:
        app_settings = AppSettings()
        logging.basicConfig(level=app_settings.log_level.upper(), format="%(message)s")
        return COMMANDS[args.command](args, app_settings)

    except KeyboardInterrupt:
        print("\n\n👋 已中斷操作，再見！")
        return 130

    except (PhotoPrintError, OSError, ValueError) as exc:
        print(f"\n❌ 錯誤: {exc}\n")
        logging.exception("處理時發生錯誤")
        return 1


if __name__ == "__main__":
    sys.exit(main())
