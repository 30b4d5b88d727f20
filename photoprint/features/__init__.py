"""功能模組"""
