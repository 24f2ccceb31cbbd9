"""
ユリウス暦 → グレゴリオ暦 変換

両暦を1582年以前にも延長した（先発的な）暦として扱い、
世紀ごとの日数差を閉じた式で求めて加算する。
"""
from datetime import date, timedelta

from .registry import DateArray


def julian_day_offset(year: int, month: int) -> int:
    """
    ユリウス暦の日付に加算する日数を求める

    1月・2月は前年として世紀を数える（閏日の挿入が2月末のため）。

    Args:
        year: ユリウス暦の年
        month: ユリウス暦の月

    Returns:
        グレゴリオ暦との日数差

    Examples:
        >>> julian_day_offset(1582, 10)
        10
        >>> julian_day_offset(1000, 2)
        5
    """
    if month < 3:
        year -= 1

    century = year // 100
    a = century // 4
    b = century % 4
    return 3 * a + b - 2


def julian_to_gregorian(julian: DateArray) -> DateArray:
    """
    ユリウス暦の (年, 月, 日) をグレゴリオ暦の (年, 月, 日) に変換

    ユリウス暦にしか存在しない日（1500-02-29 など）は、グレゴリオ暦の
    日付軸上で翌日以降に繰り越してから差分を加算する。
    """
    year, month, day = julian
    on_axis = date(year, month, 1) + timedelta(days=day - 1)
    converted = on_axis + timedelta(days=julian_day_offset(year, month))
    return (converted.year, converted.month, converted.day)
