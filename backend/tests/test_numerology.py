"""
数秘術 ライフパスナンバー 테스트
"""
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dreamcard.services.numerology import (
    LIFE_PATH_INFO,
    analyze_numerology,
    calc_birthday_number,
    calc_life_path_number,
    reduce_number,
)


class TestLifePath:
    """자릿수 합 축약 (11/22/33 에서 정지)"""

    @pytest.mark.parametrize("ymd,expected", [
        ((2000, 1, 1), 4),
        ((1978, 5, 16), 1),
        ((1990, 9, 19), 11),   # 38 → 11 에서 정지 (2 아님)
        ((2000, 1, 8), 11),
        ((1980, 1, 3), 22),
        ((1989, 5, 1), 33),
        ((1985, 7, 20), 5),
    ])
    def test_life_path(self, ymd, expected):
        assert calc_life_path_number(*ymd) == expected

    @pytest.mark.parametrize("n,expected", [(29, 11), (38, 11), (47, 11), (10, 1), (9, 9), (44, 8)])
    def test_reduce(self, n, expected):
        assert reduce_number(n) == expected

    def test_every_result_in_catalog(self):
        for year in (1950, 1977, 1999, 2010):
            for month in range(1, 13):
                for day in (1, 9, 17, 28):
                    assert calc_life_path_number(year, month, day) in LIFE_PATH_INFO


class TestBirthdayNumber:
    @pytest.mark.parametrize("month,day,expected", [
        (1, 1, 2),
        (9, 29, 11),
        (5, 6, 11),
        (7, 15, 22),
        (3, 4, 7),
    ])
    def test_birthday_number(self, month, day, expected):
        assert calc_birthday_number(month, day) == expected


class TestProfile:
    def test_master_profile(self):
        profile = analyze_numerology(1980, 1, 3)
        assert profile.life_path_number == 22
        assert profile.name == LIFE_PATH_INFO[22].name
        assert profile.mission == LIFE_PATH_INFO[22].mission
