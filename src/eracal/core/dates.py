"""
元号日付のパースとグレゴリオ暦への変換

'令和2年5月1日' のような文字列を解析し、元号レジストリの月初日を基準に
グレゴリオ暦の日付に変換する。解釈できない入力は例外ではなく None を返す。
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..utils.numerals import parse_number
from ..utils.patterns import ERA_DATE_PATTERN, LEAP_MONTH_MARKER, strip_year_suffix
from .registry import DateArray, EraRegistry

# 元年（year=0）は年テーブル参照時に1年として扱う
GANNEN_YEAR = 0


@dataclass(frozen=True)
class ParsedEraDate:
    era: str
    year: int
    month: Optional[int] = None
    day: Optional[int] = None
    match_length: int = 0

    @property
    def table_year(self) -> int:
        return max(self.year, 1)


def parse_era_date(text: str, registry: EraRegistry) -> Optional[ParsedEraDate]:
    """
    元号日付をパースする

    文法: <元号> <年> [<月> [<日>]]
    - 年: 数字（年・歳は省略可）または「元年」（年・歳は必須）
    - 月: 閏を前置すると閏月（負数で表す）
    - 日: 月が有効な場合のみ採用

    match_length は入力のうち、構文的にも意味的にも有効な最長の接頭辞の長さ。
    月が無効な場合は年トークンの直後までに切り詰める。

    Args:
        text: 元号日付を含む文字列
        registry: 元号レジストリ

    Returns:
        ParsedEraDate。元号・年が解釈できない場合は None

    Examples:
        '令和2年5月1日' → era='令和', year=2, month=5, day=1, match_length=8
        '令和元年'     → era='令和', year=0, month=None, day=None, match_length=4
    """
    match = ERA_DATE_PATTERN.search(text)
    if not match or match.start() == 0:
        return None

    era = text[:match.start()].strip()
    if not registry.has_era(era):
        return None

    raw_year, raw_gannen, raw_month, raw_day = match.groups()

    # 年
    if raw_year is not None:
        year = parse_number(strip_year_suffix(raw_year).strip())
        if year is None or not registry.has_year(era, year):
            return None
        year_end = match.end(1)
    else:
        year = GANNEN_YEAR
        year_end = match.end(2)

    match_length = match.end()

    # 月
    month: Optional[int] = None
    if raw_month is not None:
        month = parse_number(raw_month.replace(LEAP_MONTH_MARKER, '').strip())
        if month is not None:
            if LEAP_MONTH_MARKER in raw_month:
                month = -month
            if not registry.has_month(era, max(year, 1), month):
                month = None

    if month is None:
        match_length = year_end

    # 日
    day: Optional[int] = None
    if month is not None and raw_day is not None:
        day = parse_number(raw_day)
        if day is not None and day < 1:
            day = None

    return ParsedEraDate(
        era=era,
        year=year,
        month=month,
        day=day,
        match_length=match_length,
    )


def to_gregorian_date(
    registry: EraRegistry, era: str, year: int, month: int, day: int
) -> Optional[date]:
    """月初日に (day - 1) 日を加算する。月末を越えた日は翌月に繰り越す。"""
    anchor = registry.anchor(era, year, month)
    if anchor is None:
        return None
    try:
        return date(*anchor) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def resolve_parsed(parsed: ParsedEraDate, registry: EraRegistry) -> Optional[DateArray]:
    """年月日が揃ったパース結果をグレゴリオ暦の DateArray に変換"""
    if parsed.month is None or parsed.day is None:
        return None

    gregorian = to_gregorian_date(
        registry, parsed.era, parsed.table_year, parsed.month, parsed.day
    )
    if gregorian is None:
        return None
    return (gregorian.year, gregorian.month, gregorian.day)


def era_date_to_gregorian(text: str, registry: EraRegistry) -> Optional[DateArray]:
    parsed = parse_era_date(text, registry)
    if parsed is None:
        return None
    return resolve_parsed(parsed, registry)
