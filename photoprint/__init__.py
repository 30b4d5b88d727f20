"""
photoprint - 照片印刷品質驗證與 DPI 處理
"""

__version__ = "0.1.0"
