"""
共通フィクスチャ

テスト用の小さな元号レジストリ:
- 令和: 元年5月〜、2〜7年（月初日は西暦の1日）
- 慶応: 元年4月、4年（閏4月あり）
- 天保: 2年（閏11月あり）、3年（閏月なし）
"""
from types import MappingProxyType

import pytest

from eracal.core.registry import EraInfo, EraRegistry, freeze_months


def _reiwa_years():
    years = {1: freeze_months({m: (2019, m, 1) for m in range(5, 13)})}
    for year in range(2, 8):
        years[year] = freeze_months({m: (2018 + year, m, 1) for m in range(1, 13)})
    return years


def make_registry() -> EraRegistry:
    reiwa = EraInfo(
        reading="れいわ",
        yomi="れいわ",
        start=(2019, 5, 1),
        end=(2025, 12, 31),
        years=MappingProxyType(_reiwa_years()),
    )
    keio = EraInfo(
        reading="けいおう",
        yomi="けいおう",
        start=(1865, 5, 1),
        end=(1868, 10, 23),
        years=MappingProxyType({
            1: freeze_months({4: (1865, 4, 25), 5: (1865, 5, 25)}),
            4: freeze_months({
                3: (1868, 3, 24),
                4: (1868, 4, 23),
                -4: (1868, 5, 22),
                5: (1868, 6, 20),
            }),
        }),
    )
    tenpo = EraInfo(
        reading="てんぽう",
        yomi="てんぽう",
        start=(1831, 1, 23),
        end=(1845, 1, 9),
        years=MappingProxyType({
            2: freeze_months({
                11: (1831, 12, 5),
                -11: (1832, 1, 4),
                12: (1832, 2, 2),
            }),
            3: freeze_months({
                11: (1832, 11, 23),
                12: (1832, 12, 22),
            }),
        }),
    )
    return EraRegistry({"令和": reiwa, "慶応": keio, "天保": tenpo})


@pytest.fixture
def registry() -> EraRegistry:
    return make_registry()
