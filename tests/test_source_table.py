"""
source_table.py のテスト

テスト対象:
- 改元の節からの開始・終了日文字列
- 西暦との対照表の見出し（年・月・閏月）とデータ行
- 西暦などとの対照表の北朝行
- SiteDirectorySource のファイル読み込み
"""
from era_pages import (
    alias_section,
    change_of_era_section,
    conversion_section,
    page,
    year_block,
)
from eracal.core.source_table import AliasEntry, EraPage, SiteDirectorySource


class TestTransitionDates:
    """改元の節"""

    def test_start_and_end(self):
        html = page(change_of_era_section(
            "令和元年5月1日（2019年5月1日）",
            "令和7年12月31日（2025年12月31日）",
        ))
        start, end = EraPage(html).transition_dates()
        assert start == "令和元年5月1日"
        assert end == "令和7年12月31日"

    def test_start_only(self):
        html = page(change_of_era_section("令和元年5月1日", None))
        assert EraPage(html).transition_dates() == ("令和元年5月1日", None)

    def test_missing_section(self):
        assert EraPage(page("<p>本文</p>")).transition_dates() == (None, None)


class TestConversionRows:
    """西暦との対照表"""

    def test_headings_and_dates(self):
        html = page(conversion_section([
            year_block("天正10年", ["9月", "閏9月", "10月"], [
                ("ユリウス暦", ["1582/9/17", "10/17", "11/15"]),
                ("グレゴリオ暦", ["1582/9/27", "10/27", "11/25"]),
            ]),
        ]))
        rows = EraPage(html).conversion_rows("天正")
        assert len(rows) == 2
        julian, gregorian = rows
        assert julian.year == 10
        assert julian.calendar == "ユリウス暦"
        assert julian.dates == {9: (1582, 9, 17), -9: (1582, 10, 17), 10: (1582, 11, 15)}
        assert gregorian.calendar == "グレゴリオ暦"
        assert list(gregorian.dates) == [9, -9, 10]

    def test_gannen_heading_and_notes(self):
        html = page(conversion_section([
            year_block("天正元年（1573年）", ["7月※", "8月¶"], [
                ("ユリウス暦", ["1573/7/30", "8/28"]),
            ]),
        ]))
        rows = EraPage(html).conversion_rows("天正")
        assert rows[0].year == 1
        assert rows[0].dates == {7: (1573, 7, 30), 8: (1573, 8, 28)}

    def test_kanji_headings(self):
        html = page(conversion_section([
            year_block("天正十年", ["十一月", "閏十一月"], [
                ("グレゴリオ暦", ["1582/12/24", "1583/1/23"]),
            ]),
        ]))
        rows = EraPage(html).conversion_rows("天正")
        assert rows[0].year == 10
        assert rows[0].dates == {11: (1582, 12, 24), -11: (1583, 1, 23)}

    def test_ranges_keep_start_date(self):
        html = page(conversion_section([
            year_block("天正2年", ["1月"], [
                ("グレゴリオ暦", ["1574/2/1–3/1"]),
            ]),
        ]))
        assert EraPage(html).conversion_rows("天正")[0].dates == {1: (1574, 2, 1)}

    def test_year_carries_over_new_year(self):
        """月/日のみのセルは同じ行の直前の年を引き継ぐ"""
        html = page(conversion_section([
            year_block("天正2年", ["11月", "12月", "1月"], [
                ("グレゴリオ暦", ["1574/12/13", "1575/1/11", "2/10"]),
            ]),
        ]))
        dates = EraPage(html).conversion_rows("天正")[0].dates
        assert dates[1] == (1575, 2, 10)

    def test_unparseable_cells_skipped(self):
        html = page(conversion_section([
            year_block("天正2年", ["1月", "2月", "3月"], [
                ("グレゴリオ暦", ["1574/2/1", "-", "x/y"]),
            ]),
        ]))
        assert EraPage(html).conversion_rows("天正")[0].dates == {1: (1574, 2, 1)}

    def test_impossible_dates_skipped(self):
        """月が 1〜12 の外、年が 0 の日付は格納しない"""
        html = page(conversion_section([
            year_block("天正元年", ["7月", "8月", "9月"], [
                ("ユリウス暦", ["1573/13/25", "0/5", "9/23"]),
                ("グレゴリオ暦", ["1573/0/25", "9/45", "10/3"]),
            ]),
            year_block("天正2年", ["1月", "2月"], [
                ("グレゴリオ暦", ["0/2/1", "3/2"]),
            ]),
        ]))
        rows = EraPage(html).conversion_rows("天正")
        assert rows[0].dates == {9: (1573, 9, 23)}
        assert rows[1].dates == {9: (1573, 10, 3)}
        assert rows[2].dates == {}

    def test_unreadable_month_heading_column_skipped(self):
        html = page(conversion_section([
            year_block("天正2年", ["1月", "不明"], [
                ("グレゴリオ暦", ["1574/2/1", "3/2"]),
            ]),
        ]))
        dates = EraPage(html).conversion_rows("天正")[0].dates
        assert dates == {1: (1574, 2, 1)}
        assert 0 not in dates

    def test_single_cell_header_keeps_previous_headings(self):
        html = page(conversion_section([
            year_block("天正2年", ["1月"], []),
            "<tr><th>注</th></tr>",
            "<tr><td>グレゴリオ暦</td><td>1574/2/1</td></tr>",
        ]))
        rows = EraPage(html).conversion_rows("天正")
        assert rows[0].year == 2
        assert rows[0].dates == {1: (1574, 2, 1)}

    def test_skip_tables(self):
        html = page(conversion_section([
            year_block("明治6年", ["1月"], [("西暦", ["1873/1/1"])]),
        ], extra_before_table=1))
        page_ = EraPage(html)
        assert page_.conversion_rows("明治") is None
        assert page_.conversion_rows("明治", skip_tables=1)[0].dates == {1: (1873, 1, 1)}

    def test_missing_table(self):
        assert EraPage(page("<p>本文</p>")).conversion_rows("天正") is None


class TestAliasEntries:
    """北朝の行"""

    def test_northern_court_row(self):
        html = page(alias_section(["元年", "2年"], ["建武3年", "建武4年"]))
        assert EraPage(html).alias_entries() == [
            AliasEntry(year=1, ref_era="建武", ref_year=3),
            AliasEntry(year=2, ref_era="建武", ref_year=4),
        ]

    def test_fallback_heading(self):
        html = page(alias_section(["元年"], ["暦応4年"], heading_id="西暦との対照表"))
        assert EraPage(html).alias_entries() == [AliasEntry(year=1, ref_era="暦応", ref_year=4)]

    def test_missing_table(self):
        assert EraPage(page("<p>本文</p>")).alias_entries() is None


class TestSiteDirectorySource:
    def test_load_existing(self, tmp_path):
        (tmp_path / "令和.html").write_text(page(change_of_era_section("令和元年5月1日", None)), encoding="utf-8")
        source = SiteDirectorySource(tmp_path)
        loaded = source.load("令和")
        assert loaded is not None
        assert loaded.transition_dates()[0] == "令和元年5月1日"

    def test_load_missing(self, tmp_path):
        assert SiteDirectorySource(tmp_path).load("令和") is None
