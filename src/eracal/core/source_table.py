"""
元号記事（Wikipedia）からの対照表抽出

保存済みの元号記事 HTML から、以下を抜き出して整形済みの行データにする。
- 改元の節: 開始日・終了日の元号日付文字列
- 西暦との対照表: 年ごとの月初日（グレゴリオ暦 / ユリウス暦）
- 西暦などとの対照表: 南朝元号の年 → 北朝元号の年 の対応（別名テーブル）

HTML の構造に依存する処理はこのモジュールに閉じ込め、
レジストリ構築（core/builder.py）はここで返す行データのみを扱う。
"""
from dataclasses import dataclass, field
from pathlib import Path
import logging
import re
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ..utils.fs import sanitize_filename
from ..utils.numerals import parse_number
from ..utils.patterns import LEAP_MONTH_MARKER, clean_heading
from .registry import DateArray

logger = logging.getLogger(__name__)

CHANGE_OF_ERA_ID = "改元"
CONVERSION_TABLE_ID = "西暦との対照表"
ALIAS_TABLE_IDS = ("西暦などとの対照表", "西暦との対照表")
NORTHERN_COURT_LABEL = "北朝"

# 注記の括弧以降は捨てる
NOTE_SEPARATOR = "（"
# 期間表記（1/1–1/30）は開始日のみを使う
RANGE_SEPARATOR = "–"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class ConversionRow:
    """対照表のデータ行（暦の種類ごとに1行）"""
    year: int
    calendar: str
    dates: Dict[int, DateArray] = field(default_factory=dict)


@dataclass(frozen=True)
class AliasEntry:
    """南朝元号の year 年 = 北朝元号 ref_era の ref_year 年"""
    year: int
    ref_era: str
    ref_year: int


def _to_int(text: str) -> Optional[int]:
    """先頭の整数を読み取る（'12 ' → 12, 'abc' → None）"""
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else None


def _is_valid_date(year: int, month: int, day: int) -> bool:
    """暦の上であり得る (年, 月, 日) か（月末を越える日は繰り越すので 31 まで許す）"""
    return year >= 1 and 1 <= month <= 12 and 1 <= day <= 31


def _next_element(tag: Optional[Tag], count: int = 1) -> Optional[Tag]:
    for _ in range(count):
        if tag is None:
            return None
        tag = tag.find_next_sibling()
    return tag


class EraPage:
    """One saved era article."""

    def __init__(self, html: str):
        self.soup = BeautifulSoup(html, "html.parser")

    def _section_anchor(self, heading_id: str) -> Optional[Tag]:
        """見出し要素（id 付き span 等）の親 = 見出しそのもの"""
        anchor = self.soup.find(id=heading_id)
        if anchor is None:
            return None
        return anchor.parent

    def transition_dates(self) -> Tuple[Optional[str], Optional[str]]:
        """改元の節の最初の箇条書き2項目（開始・終了）を返す"""
        heading = self._section_anchor(CHANGE_OF_ERA_ID)
        container = _next_element(heading)
        if container is None:
            return None, None

        start_item = container.find("li")
        if start_item is None:
            return None, None
        end_item = start_item.find_next_sibling("li")

        start = start_item.get_text().split(NOTE_SEPARATOR)[0]
        end = end_item.get_text().split(NOTE_SEPARATOR)[0] if end_item is not None else None
        return start, end

    def conversion_rows(self, era: str, skip_tables: int = 0) -> Optional[List[ConversionRow]]:
        """
        西暦との対照表を行データに変換

        見出し行: [年, 月, 月, 閏月, ...]
        データ行: [暦の種類, 年/月/日, 月/日, ...]

        Args:
            era: 元号名（見出しセルから取り除く）
            skip_tables: 見出し直後の説明要素に加えて読み飛ばす要素数

        Returns:
            ConversionRow のリスト。表が見つからない場合は None
        """
        heading = self._section_anchor(CONVERSION_TABLE_ID)
        table = _next_element(heading, 2 + skip_tables)
        if table is None:
            return None

        rows = table.find_all("tr")
        if not rows:
            return None

        headings: List[int] = []
        result: List[ConversionRow] = []

        for tr in rows:
            header_cells = tr.find_all("th")
            if header_cells:
                parsed = [self._month_heading(th.get_text(), era) for th in header_cells]
                if len(parsed) > 1:
                    headings = parsed
                continue

            cells = [
                td.get_text().replace("\n", "", 1).split(RANGE_SEPARATOR)[0].split("/")
                for td in tr.find_all("td")
            ]
            if not cells or not headings:
                continue

            row = ConversionRow(year=headings[0], calendar=cells[0][0].strip())
            year: Optional[int] = None
            for i in range(1, min(len(headings), len(cells))):
                parts = cells[i]
                if len(parts) == 3:
                    year = _to_int(parts[0])
                    month, day = _to_int(parts[1]), _to_int(parts[2])
                elif len(parts) == 2:
                    month, day = _to_int(parts[0]), _to_int(parts[1])
                else:
                    continue

                if headings[i] == 0:
                    logger.debug(f"{era}: skipping cell under unreadable heading {parts}")
                    continue
                if year is None or month is None or day is None:
                    logger.debug(f"{era}: skipping cell {parts}")
                    continue
                if not _is_valid_date(year, month, day):
                    logger.warning(f"{era}: skipping invalid date {parts}")
                    continue
                row.dates[headings[i]] = (year, month, day)

            result.append(row)

        return result

    @staticmethod
    def _month_heading(text: str, era: str) -> int:
        is_leap_month = LEAP_MONTH_MARKER in text
        stripped = clean_heading(text.split(NOTE_SEPARATOR)[0].replace(era, "", 1))

        number = parse_number(stripped)
        if number is None:
            return 0
        return -number if is_leap_month else number

    def alias_entries(self) -> Optional[List[AliasEntry]]:
        """
        西暦などとの対照表から北朝の行を読み取る

        見出し行: [-, 1年, 2年, ...]（南朝元号の年）
        北朝の行: [北朝, 建武3, 建武4, ...]
        """
        table = None
        for heading_id in ALIAS_TABLE_IDS:
            table = _next_element(self._section_anchor(heading_id))
            if table is not None:
                break
        if table is None:
            return None

        rows = table.find_all("tr")
        if not rows:
            return None

        headings: List[Optional[int]] = []
        entries: List[AliasEntry] = []

        for tr in rows:
            header_cells = tr.find_all("th")
            if header_cells:
                headings = [_to_int(clean_heading(th.get_text())) for th in header_cells]
                continue

            cells = [clean_heading(td.get_text()).strip() for td in tr.find_all("td")]
            if not cells or cells[0] != NORTHERN_COURT_LABEL:
                continue

            for i in range(1, min(len(headings), len(cells))):
                year = headings[i]
                ref_era = cells[i][:2]
                ref_year = _to_int(cells[i][2:])
                if year is None or ref_year is None:
                    logger.debug(f"Skipping alias cell {cells[i]!r}")
                    continue
                entries.append(AliasEntry(year=year, ref_era=ref_era, ref_year=ref_year))

        return entries


class SiteDirectorySource:
    """Reads era articles saved by `eracal fetch-sites`."""

    def __init__(self, sites_dir: Path):
        self.sites_dir = sites_dir

    def page_path(self, era: str) -> Path:
        return self.sites_dir / f"{sanitize_filename(era)}.html"

    def load(self, era: str) -> Optional[EraPage]:
        path = self.page_path(era)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return EraPage(f.read())
