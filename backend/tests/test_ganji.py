"""
日干 / 命式 계산 테스트
"""
import pytest
from datetime import date, timedelta

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dreamcard.services.day_stem import STEM_RECORDS, calc_day_stem, day_stem_index, days_since_epoch
from dreamcard.services.ganji import (
    GanjiCalculator,
    calc_four_pillars,
    dominant_elements,
)
from dreamcard.services.solar_terms import get_lichun_adjusted_year, get_solar_term_month_index


class TestDayStem:
    """日干 (기준일 1900-01-01 = 甲)"""

    def test_epoch_is_index_zero(self):
        assert days_since_epoch(1900, 1, 1) == 0
        assert calc_day_stem(1900, 1, 1) is STEM_RECORDS[0]
        assert calc_day_stem(1900, 1, 1).stem == "甲"

    def test_before_epoch(self):
        """음수 일수도 [0,10) 로 정규화"""
        assert day_stem_index(1899, 12, 31) == 9
        assert calc_day_stem(1899, 12, 31).stem == "癸"

    @pytest.mark.parametrize("d", [
        date(1900, 1, 1),
        date(1850, 6, 15),
        date(1978, 5, 16),
        date(2000, 2, 28),
        date(2024, 2, 29),
    ])
    def test_ten_day_cycle(self, d):
        later = d + timedelta(days=10)
        assert calc_day_stem(d.year, d.month, d.day) == calc_day_stem(later.year, later.month, later.day)

    def test_2000_01_01(self):
        stem = calc_day_stem(2000, 1, 1)
        assert stem.stem == "戊"
        assert stem.element == "earth"
        assert stem.polarity == "yang"

    def test_catalog_element_polarity(self):
        assert [r.stem for r in STEM_RECORDS] == list("甲乙丙丁戊己庚辛壬癸")
        assert [r.polarity for r in STEM_RECORDS] == ["yang", "yin"] * 5


class TestSolarTerms:
    """立春 / 절기 월"""

    @pytest.mark.parametrize("month,day,expected", [
        (1, 15, 1999),
        (2, 3, 1999),
        (2, 4, 2000),
        (3, 1, 2000),
    ])
    def test_lichun_adjusted_year(self, month, day, expected):
        assert get_lichun_adjusted_year(2000, month, day) == expected

    def test_january_before_shokan(self):
        """1/5 → 子月(10), 1/6 → 丑月(11)"""
        assert get_solar_term_month_index(2025, 1, 5)[0] == 10
        assert get_solar_term_month_index(2025, 1, 6)[0] == 11


class TestFourPillars:
    """命式"""

    def test_1978_05_16(self):
        result = calc_four_pillars(1978, 5, 16)
        assert result.year_pillar.pillar == "戊午"
        assert result.month_pillar.pillar == "丁巳"
        assert result.day_pillar.pillar == "戊寅"
        assert result.hour_pillar is None

    def test_2000_01_01(self):
        """立春 전 → 己卯年, 小寒 전 → 子月"""
        result = calc_four_pillars(2000, 1, 1)
        assert result.year_pillar.pillar == "己卯"
        assert result.month_pillar.pillar == "丙子"
        assert result.day_pillar.pillar == "戊午"
        assert result.element_balance.model_dump() == {
            "wood": 1, "fire": 2, "earth": 2, "metal": 0, "water": 1
        }

    def test_day_stem_matches(self):
        result = calc_four_pillars(1985, 7, 20)
        assert result.day_pillar.stem_index == day_stem_index(1985, 7, 20)

    @pytest.mark.parametrize("ymd", [(1950, 3, 3), (1978, 5, 16), (2000, 1, 1), (2024, 12, 31)])
    def test_balance_total_six(self, ymd):
        """년/월/일주 6글자만 집계 (시주 제외)"""
        with_hour = calc_four_pillars(*ymd, hour=11)
        without = calc_four_pillars(*ymd)
        assert sum(without.element_balance.model_dump().values()) == 6
        assert with_hour.element_balance == without.element_balance
        assert with_hour.hour_pillar is not None

    @pytest.mark.parametrize("hour,branch", [(23, 0), (0, 0), (1, 1), (11, 6), (22, 11)])
    def test_hour_branch(self, hour, branch):
        assert GanjiCalculator.get_hour_branch_index(hour) == branch

    def test_dominant_elements(self):
        balance = calc_four_pillars(2000, 1, 1).element_balance
        assert dominant_elements(balance) == [("fire", 2), ("earth", 2)]
