"""天赋系统集成测试 (使用 data/talents.json)"""
import json
from pathlib import Path

import numpy as np
import pytest

from talents import (
    NotFoundError,
    Talent,
    TalentConfig,
    Variant,
)

CATALOG_PATH = Path(__file__).resolve().parents[2] / "data" / "talents.json"


@pytest.fixture
def catalog():
    with open(CATALOG_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def talent(catalog):
    t = Talent(TalentConfig(seed=42))
    t.initial(catalog)
    return t


class TestCatalogLoad:
    """目录加载测试"""

    def test_count(self, talent, catalog):
        assert talent.count() == len(catalog["talents"])

    def test_ids_and_grades(self, talent, catalog):
        for raw_id, raw in catalog["talents"].items():
            definition = talent.get(raw_id)
            assert definition.id == int(raw_id)
            assert definition.grade == int(raw["grade"])

    def test_information(self, talent):
        assert talent.information(1048) == {
            "grade": 3, "name": "神秘的小盒子", "description": "100岁时才能开启",
        }

    def test_not_found(self, talent):
        with pytest.raises(NotFoundError):
            talent.get(1)

    def test_max_triggers(self, talent):
        assert talent.get(1001).max_triggers == 5
        assert talent.get(1002).max_triggers == 1


class TestTalentRandom:
    """抽取流程测试"""

    def test_hand(self, talent):
        for _ in range(50):
            hand = talent.talent_random()
            ids = [t.id for t in hand]
            assert len(hand) == 10
            assert len(set(ids)) == 10

    def test_include(self, talent):
        for _ in range(50):
            hand = talent.talent_random(include=1024, times=100, achievement=70)
            assert hand[0].to_dict() == {
                "id": 1024, "grade": 3, "name": "不老不死", "description": "寿命大幅延长",
            }

    @pytest.mark.parametrize("variant", [Variant.IMMORTALS, Variant.MAGIC])
    def test_variants(self, talent, variant):
        specials = {Variant.IMMORTALS: [1048], Variant.MAGIC: [1131, 1005, 1004]}[variant]
        for _ in range(50):
            hand = talent.talent_random(variant=variant)
            ids = [t.id for t in hand]
            assert len(hand) == 10
            assert len(set(ids)) == 10
            for special in specials:
                assert special in ids

    def test_bonus_signals_raise_legend_rate(self, catalog):
        def legend_share(times):
            t = Talent(TalentConfig(seed=7))
            t.initial(catalog)
            hands = [t.talent_random(times=times) for _ in range(300)]
            return np.mean([sum(s.grade == 3 for s in hand) for hand in hands])

        assert legend_share(100) > legend_share(0)


class TestReplaceFlow:
    """替换流程测试"""

    def test_no_rules(self, talent):
        assert talent.replace([1001, 1003, 1022]) == {}

    def test_empty(self, talent):
        assert talent.replace([]) == {}

    def test_talent_rule(self, talent):
        for _ in range(20):
            result = talent.replace([1025])
            assert result[1025] in (1019, 1021)

    def test_grade_rule(self, talent):
        for _ in range(20):
            result = talent.replace([1020, 1002])
            final = result[1020]
            assert talent.get(final).grade in (2, 3)
            # 1024 声明与 1002 互斥
            assert final != 1024

    def test_forced_pick(self, catalog):
        t = Talent(weight_random=lambda pairs: pairs[-1][0])
        t.initial(catalog)
        assert t.replace([1025]) == {1025: 1021}


class TestEffects:
    """条件与效果测试"""

    def test_exclusive(self, talent):
        assert talent.exclusive([1003], 1004) == 1003
        assert talent.exclusive([1001], 1004) is None
        assert talent.exclusive([1004], 1001) is None

    def test_do(self, talent):
        assert talent.do(1048, {"AGE": 99}) is None
        assert talent.do(1048, {"AGE": 100})["name"] == "神秘的小盒子"
        assert talent.check(1002, {"AGE": 5}) is True

    def test_allocation_addition(self, talent):
        assert talent.allocation_addition([1007, 1017, 1022, 1001]) == 6
