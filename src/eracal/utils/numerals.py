"""
数字表記の変換ユーティリティ

元号日付に現れる数字を整数に変換する。
- 算用数字: 12
- 全角数字: １２
- 漢数字（連結形式）: 一二, 二〇
- 漢数字（位取り形式）: 十二, 二十一, 百五
"""

from typing import Dict, Optional

FULLWIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")

KANJI_TO_DIGIT: Dict[str, int] = {
    '〇': 0,
    '一': 1,
    '二': 2,
    '三': 3,
    '四': 4,
    '五': 5,
    '六': 6,
    '七': 7,
    '八': 8,
    '九': 9,
}

UNIT_MAP: Dict[str, int] = {
    '百': 100,
    '十': 10,
}

# 正規表現の文字クラスで使う数字の一覧
NUMERAL_CHARS = "0-9０-９〇一二三四五六七八九十百"


def parse_number(text: str) -> Optional[int]:
    """
    数字文字列を整数に変換

    Args:
        text: 数字文字列（前後の空白は無視）

    Returns:
        整数値。解釈できない場合は None

    Examples:
        >>> parse_number('２０')
        20
        >>> parse_number('二十一')
        21
        >>> parse_number('百五')
        105
        >>> parse_number('十百') is None
        True
    """
    if not text:
        return None
    text = text.strip().translate(FULLWIDTH_DIGITS)
    if not text:
        return None

    if text.isascii() and text.isdigit():
        return int(text)

    if any(c in UNIT_MAP for c in text):
        return _parse_positional_kanji(text)
    return _parse_concatenative_kanji(text)


def _parse_concatenative_kanji(text: str) -> Optional[int]:
    """連結形式の漢数字をパース（二〇 → 20）"""
    if not all(c in KANJI_TO_DIGIT for c in text):
        return None
    return int(''.join(str(KANJI_TO_DIGIT[c]) for c in text))


def _parse_positional_kanji(text: str) -> Optional[int]:
    """位取り形式の漢数字をパース（二十三 → 23）"""
    total = 0
    current: Optional[int] = None
    # 百 → 十 の順でのみ出現できる
    last_unit = 1000

    for char in text:
        if char in KANJI_TO_DIGIT:
            if current is not None:
                return None
            current = KANJI_TO_DIGIT[char]
        elif char in UNIT_MAP:
            unit = UNIT_MAP[char]
            if unit >= last_unit or current == 0:
                return None
            total += (current if current is not None else 1) * unit
            current = None
            last_unit = unit
        else:
            return None

    if current is not None:
        if current == 0:
            return None
        total += current
    return total
