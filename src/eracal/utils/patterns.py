"""
共通正規表現パターン定義

元号日付の文法と、対照表の見出しセルの整形に使うパターンを
一元管理するための薄いユーティリティです。

設計方針:
- パターンとシンプルなヘルパ関数のみを提供
- レジストリ参照などのロジックは持たない（core/dates.py, core/source_table.py から使用）
"""

import re

from .numerals import NUMERAL_CHARS

# ==============================================================================
# 元号日付パターン
# ==============================================================================

YEAR_SUFFIXES = "年歳"
GANNEN = "元"
LEAP_MONTH_MARKER = "閏"

# 数字の年は「年」を省略できるが、元年は「年」「歳」が必須
# グループ1: 数字の年（接尾辞込み）
# グループ2: 元年（接尾辞込み）
YEAR_PATTERN = rf"(?:([{NUMERAL_CHARS}]+\s*(?:年|歳)?)|({GANNEN}\s*(?:年|歳)))"

# グループ3: 月（閏を含む）
MONTH_PATTERN = rf"\s*({LEAP_MONTH_MARKER}?\s*[{NUMERAL_CHARS}]+)\s*月"

# グループ4: 日
DAY_PATTERN = rf"\s*([{NUMERAL_CHARS}]+)\s*日"

ERA_DATE_PATTERN = re.compile(
    rf"{YEAR_PATTERN}(?:{MONTH_PATTERN}(?:{DAY_PATTERN})?)?"
)

YEAR_SUFFIX_PATTERN = re.compile(f"[{YEAR_SUFFIXES}]")

# ==============================================================================
# 対照表の見出しパターン
# ==============================================================================

# 見出しセルから取り除く記号・単位
HEADING_NOISE_PATTERN = re.compile(r"[※¶年歳月閏\n]")


def strip_year_suffix(text: str) -> str:
    """
    年の接尾辞（年・歳）を取り除く

    '2年' → '2', '十 歳' → '十 '

    Args:
        text: 年トークン

    Returns:
        接尾辞を取り除いた文字列
    """
    return YEAR_SUFFIX_PATTERN.sub('', text)


def clean_heading(text: str) -> str:
    """見出しセルから単位と注記記号を取り除き、元を1に置き換える"""
    return HEADING_NOISE_PATTERN.sub('', text.replace(GANNEN, '1', 1))
