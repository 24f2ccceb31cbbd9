"""
元号テーブル構築

元号の一覧と保存済みの記事から EraRegistry を一括構築する。

処理順序:
1. 通常の元号: 西暦との対照表から年ごとの月初日を作る
   （ユリウス暦の行はグレゴリオ暦に変換し、両方ある場合は突き合わせる）
2. 南朝の元号（延元・興国・正平）: 北朝の行から、既に構築済みの
   北朝元号の年テーブルを共有参照する
3. 全元号: 改元の節（または特例表）の開始日・終了日を 1〜2 のテーブルで変換

1 つの元号でデータが欠けていても、診断を記録して次の元号に進む。
"""
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from ..utils.fs import load_yaml_mapping
from .dates import era_date_to_gregorian
from .julian import julian_to_gregorian
from .registry import DateArray, EraInfo, EraRegistry, Months, freeze_months
from .source_table import ConversionRow, EraPage

logger = logging.getLogger(__name__)

# 北朝元号の年を別名として持つ南朝元号
ALIAS_ERAS: Tuple[str, ...] = ("延元", "興国", "正平")

GREGORIAN_LABEL = "グレゴリオ暦"
JULIAN_LABEL = "ユリウス暦"

# 対照表の暦ラベルが元号によって異なるもの
ERA_GREGORIAN_LABELS: Dict[str, str] = {"明治": "西暦"}

# 対照表の前に余分な要素がある元号
TABLE_SKIPS: Dict[str, int] = {"明治": 1}


class EraSource(Protocol):
    def load(self, era: str) -> Optional[EraPage]:
        ...


@dataclass(frozen=True)
class Reading:
    reading: str
    yomi: str


@dataclass(frozen=True)
class Diagnostic:
    era: str
    kind: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"era": self.era, "kind": self.kind, "message": self.message}


@dataclass
class BuildResult:
    registry: EraRegistry
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def by_kind(self, kind: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]


def load_readings(path: Path) -> Dict[str, Reading]:
    """
    元号の読みを読み込む

    YAML 形式:
        令和:
          reading: れいわ
          yomi: れいわ
    """
    readings = {}
    for era, entry in load_yaml_mapping(path).items():
        if not isinstance(entry, dict):
            continue
        reading, yomi = entry.get("reading"), entry.get("yomi")
        if reading and yomi:
            readings[str(era)] = Reading(reading=str(reading), yomi=str(yomi))
    return readings


def load_special_dates(path: Path) -> Dict[str, Tuple[str, str]]:
    """改元の節から抽出できない元号の開始・終了日（元号日付文字列）"""
    special = {}
    for era, entry in load_yaml_mapping(path).items():
        if isinstance(entry, dict) and entry.get("start") and entry.get("end"):
            special[str(era)] = (str(entry["start"]), str(entry["end"]))
    return special


class EraTableBuilder:
    def __init__(
        self,
        eras: Sequence[str],
        source: EraSource,
        readings: Mapping[str, Reading],
        special_dates: Optional[Mapping[str, Tuple[str, str]]] = None,
        alias_eras: Iterable[str] = ALIAS_ERAS,
        era_gregorian_labels: Optional[Mapping[str, str]] = None,
        table_skips: Optional[Mapping[str, int]] = None,
    ):
        self.eras = list(eras)
        self.source = source
        self.readings = readings
        self.special_dates = special_dates or {}
        self.alias_eras = set(alias_eras)
        self.era_gregorian_labels = ERA_GREGORIAN_LABELS if era_gregorian_labels is None else era_gregorian_labels
        self.table_skips = TABLE_SKIPS if table_skips is None else table_skips

    def build(self, progress: bool = False) -> BuildResult:
        diagnostics: List[Diagnostic] = []
        pages: Dict[str, Optional[EraPage]] = {}
        years: Dict[str, Mapping[int, Months]] = {}

        def report(era: str, kind: str, message: str, level: int = logging.ERROR):
            logger.log(level, f"{era}: {message}")
            diagnostics.append(Diagnostic(era=era, kind=kind, message=message))

        ready = []
        for era in self.eras:
            if era not in self.readings:
                report(era, "missing_reading", "Could not find readings for era")
                continue
            page = self.source.load(era)
            if page is None:
                report(era, "missing_page", "Era page not found")
                continue
            pages[era] = page
            ready.append(era)

        regular = [era for era in ready if era not in self.alias_eras]
        aliased = [era for era in ready if era in self.alias_eras]

        iterator: Iterable[str] = regular
        if progress:
            from tqdm import tqdm
            iterator = tqdm(regular, desc="Building Era Tables")

        # Pass 1
        for era in iterator:
            table = self._build_years(era, pages[era], report)
            if table is not None:
                years[era] = table

        # Pass 2: every referenced era is complete at this point
        for era in aliased:
            table = self._build_alias_years(era, pages[era], years, report)
            if table is not None:
                years[era] = table

        tables = EraRegistry({
            era: EraInfo(years=years.get(era, MappingProxyType({})))
            for era in self.eras
        })

        # Pass 3
        eras: Dict[str, EraInfo] = {}
        for era in self.eras:
            reading = self.readings.get(era)
            if reading is None:
                eras[era] = EraInfo()
                continue

            start, end = None, None
            if era in pages:
                start, end = self._resolve_transition(era, pages[era], tables, report)

            eras[era] = EraInfo(
                reading=reading.reading,
                yomi=reading.yomi,
                start=start,
                end=end,
                years=years.get(era, MappingProxyType({})),
            )

        return BuildResult(registry=EraRegistry(eras), diagnostics=diagnostics)

    def _classify(self, era: str, label: str) -> Optional[str]:
        if label == GREGORIAN_LABEL or label == self.era_gregorian_labels.get(era):
            return "gregorian"
        if label == JULIAN_LABEL:
            return "julian"
        return None

    def _build_years(self, era: str, page: EraPage, report) -> Optional[Mapping[int, Months]]:
        rows = page.conversion_rows(era, skip_tables=self.table_skips.get(era, 0))
        if rows is None:
            report(era, "missing_table", "Conversion table not found!")
            return None

        gregorian: Dict[int, Dict[int, DateArray]] = {}
        julian: Dict[int, Dict[int, DateArray]] = {}

        for row in rows:
            self._collect_row(era, row, gregorian, julian, report)

        table: Dict[int, Months] = {}
        for year in sorted(set(gregorian) | set(julian)):
            merged = dict(julian.get(year, {}))
            merged.update(gregorian.get(year, {}))
            table[year] = freeze_months(merged)

            for month, greg_date in gregorian.get(year, {}).items():
                jul_date = julian.get(year, {}).get(month)
                if jul_date is not None and jul_date != greg_date:
                    report(
                        era,
                        "calendar_mismatch",
                        f"Converted dates are not the same! year={year} month={month} "
                        f"gregorian={list(greg_date)} julian={list(jul_date)}",
                        level=logging.WARNING,
                    )

        return MappingProxyType(table)

    def _collect_row(
        self,
        era: str,
        row: ConversionRow,
        gregorian: Dict[int, Dict[int, DateArray]],
        julian: Dict[int, Dict[int, DateArray]],
        report,
    ):
        kind = self._classify(era, row.calendar)
        if kind is None:
            return
        if not row.dates:
            report(era, "no_dates", f"No dates found for year {row.year}", level=logging.WARNING)
            return

        if kind == "gregorian":
            gregorian.setdefault(row.year, {}).update(row.dates)
            return

        converted = {}
        for month, julian_date in row.dates.items():
            try:
                converted[month] = julian_to_gregorian(julian_date)
            except (ValueError, OverflowError) as e:
                report(
                    era,
                    "invalid_date",
                    f"Could not convert Julian date {list(julian_date)} (year={row.year} month={month}): {e}",
                )
        julian.setdefault(row.year, {}).update(converted)

    def _build_alias_years(
        self,
        era: str,
        page: EraPage,
        years: Mapping[str, Mapping[int, Months]],
        report,
    ) -> Optional[Mapping[int, Months]]:
        entries = page.alias_entries()
        if entries is None:
            report(era, "missing_alias_table", "Alias table not found!")
            return None

        table: Dict[int, Months] = {}
        for entry in entries:
            if entry.ref_era in self.alias_eras:
                report(era, "unresolved_alias", f"{entry.ref_era} is itself an alias era")
                continue
            months = years.get(entry.ref_era, {}).get(entry.ref_year)
            if months is None:
                report(
                    era,
                    "unresolved_alias",
                    f"No table for {entry.ref_era} {entry.ref_year} (year {entry.year})",
                )
                continue
            # 同じ Months オブジェクトを共有する
            table[entry.year] = months

        return MappingProxyType(dict(sorted(table.items())))

    def _resolve_transition(
        self, era: str, page: EraPage, tables: EraRegistry, report
    ) -> Tuple[Optional[DateArray], Optional[DateArray]]:
        if era in self.special_dates:
            start_text, end_text = self.special_dates[era]
        else:
            start_text, end_text = page.transition_dates()

        resolved: List[Optional[DateArray]] = []
        for label, text in (("start", start_text), ("end", end_text)):
            if text is None:
                report(era, f"missing_{label}", f"{label.capitalize()} date not found!")
                resolved.append(None)
                continue
            value = era_date_to_gregorian(text, tables)
            if value is None:
                report(era, "unconvertible_date", f"Could not convert era date string: {text}")
            resolved.append(value)

        return resolved[0], resolved[1]
