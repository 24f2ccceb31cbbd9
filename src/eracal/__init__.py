"""
eracal: 元号日付 → グレゴリオ暦 変換ツール
"""

__version__ = "0.1.0"
