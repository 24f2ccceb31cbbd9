"""
元号レジストリ

元号名 → 年 → 月（負数は閏月）→ 月初日のグレゴリオ暦日付、を引くための
読み取り専用のデータ構造。構築は core/builder.py が一度だけ行う。
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

DateArray = Tuple[int, int, int]

# Negative numbers represent intercalary months and follow after the
# corresponding positive month: ..., 3, 4, -4, 5, 6, ...
Months = Mapping[int, DateArray]

_EMPTY: Mapping = MappingProxyType({})


def month_sort_key(month: int) -> Tuple[int, int]:
    """暦の並び順（4, 閏4, 5）のソートキー"""
    return (abs(month), 1 if month < 0 else 0)


def freeze_months(months: Dict[int, DateArray]) -> Months:
    """月テーブルを暦順に並べた読み取り専用ビューに変換"""
    ordered = {m: tuple(months[m]) for m in sorted(months, key=month_sort_key)}
    return MappingProxyType(ordered)


@dataclass(frozen=True)
class EraInfo:
    reading: Optional[str] = None
    yomi: Optional[str] = None
    start: Optional[DateArray] = None
    end: Optional[DateArray] = None
    years: Mapping[int, Months] = field(default_factory=lambda: _EMPTY)

    @property
    def is_complete(self) -> bool:
        return None not in (self.reading, self.yomi, self.start, self.end) and bool(self.years)


class EraRegistry:
    """
    Read-only lookup of era name -> EraInfo.

    Every accessor checks key presence and returns None/False instead of
    raising, so callers can pass user input straight through.
    """

    def __init__(self, eras: Mapping[str, EraInfo]):
        self._eras: Mapping[str, EraInfo] = MappingProxyType(dict(eras))

    def __contains__(self, era: object) -> bool:
        return era in self._eras

    def __iter__(self) -> Iterator[str]:
        return iter(self._eras)

    def __len__(self) -> int:
        return len(self._eras)

    def names(self) -> List[str]:
        return list(self._eras)

    def get(self, era: str) -> Optional[EraInfo]:
        return self._eras.get(era)

    def items(self):
        return self._eras.items()

    def has_era(self, era: str) -> bool:
        return era in self._eras

    def months(self, era: str, year: int) -> Optional[Months]:
        info = self._eras.get(era)
        if info is None:
            return None
        return info.years.get(year)

    def has_year(self, era: str, year: int) -> bool:
        return year >= 1 and self.months(era, year) is not None

    def has_month(self, era: str, year: int, month: int) -> bool:
        months = self.months(era, year)
        return months is not None and month in months

    def anchor(self, era: str, year: int, month: int) -> Optional[DateArray]:
        months = self.months(era, year)
        if months is None:
            return None
        return months.get(month)
