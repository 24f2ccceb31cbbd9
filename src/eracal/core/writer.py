"""
生成テーブルの書き出し・読み込み

出力形式（JSON）:
{
  "令和": {
    "reading": "れいわ",
    "yomi": "れいわ",
    "start": [2019, 5, 1],
    "end": [...],
    "years": {"1": {"5": [2019, 5, 1], ...}, ...}
  },
  ...
}

同じレジストリからは常にバイト単位で同一の出力を生成する。
"""
from pathlib import Path
from types import MappingProxyType
import json
import logging
from typing import Any, Dict, Mapping

from ..utils.fs import load_json, write_text
from .registry import DateArray, EraInfo, EraRegistry, Months, freeze_months, month_sort_key

logger = logging.getLogger(__name__)


def _months_to_dict(months: Months) -> Dict[str, list]:
    return {str(m): list(months[m]) for m in sorted(months, key=month_sort_key)}


def era_info_to_dict(info: EraInfo) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for key in ("reading", "yomi", "start", "end"):
        value = getattr(info, key)
        if value is not None:
            data[key] = list(value) if isinstance(value, tuple) else value
    if info.years:
        data["years"] = {
            str(year): _months_to_dict(info.years[year]) for year in sorted(info.years)
        }
    return data


def serialize_registry(registry: EraRegistry) -> str:
    table = {era: era_info_to_dict(info) for era, info in registry.items()}
    return json.dumps(table, ensure_ascii=False, indent=2) + "\n"


def write_era_table(registry: EraRegistry, path: Path):
    write_text(path, serialize_registry(registry))
    logger.info(f"Wrote {len(registry)} eras to {path}")


def _date_array(value: Any) -> DateArray:
    year, month, day = (int(v) for v in value)
    return (year, month, day)


def era_info_from_dict(data: Mapping[str, Any]) -> EraInfo:
    years = {}
    for year, months in (data.get("years") or {}).items():
        years[int(year)] = freeze_months(
            {int(m): _date_array(d) for m, d in months.items()}
        )
    return EraInfo(
        reading=data.get("reading"),
        yomi=data.get("yomi"),
        start=_date_array(data["start"]) if data.get("start") else None,
        end=_date_array(data["end"]) if data.get("end") else None,
        years=MappingProxyType(years),
    )


def load_registry(path: Path) -> EraRegistry:
    """
    生成済みテーブルからレジストリを復元する

    別名の年（南朝元号）は共有参照ではなく、値の等しい別オブジェクトになる。
    """
    data = load_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Invalid era table: {path}")
    return EraRegistry({era: era_info_from_dict(info) for era, info in data.items()})
