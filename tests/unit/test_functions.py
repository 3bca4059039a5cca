"""条件判定、加成查询与加权随机测试"""
import numpy as np
import pytest

from talents.config import RateConfig, RateTable, TalentConfig, Variant
from talents.functions import (
    check_condition,
    clone,
    extract_max_triggers,
    get_rate,
    parse_condition,
    weight_random,
)


class Property:
    """提供 get() 的属性对象"""

    def __init__(self, **data):
        self.data = data

    def get(self, key):
        return self.data.get(key)


class TestParseCondition:
    """条件解析测试"""

    def test_atom(self):
        assert parse_condition("AGE>10") == ["AGE>10"]

    def test_operators(self):
        assert parse_condition("AGE>10&CHR<3|INT=5") == ["AGE>10", "&", "CHR<3", "|", "INT=5"]

    def test_parentheses(self):
        assert parse_condition("(AGE>10)&(CHR<3|INT=5)") == [
            ["AGE>10"], "&", ["CHR<3", "|", "INT=5"],
        ]

    def test_spaces(self):
        assert parse_condition(" AGE > 10 ") == ["AGE>10"]

    def test_unbalanced(self):
        with pytest.raises(ValueError):
            parse_condition("(AGE>10")
        with pytest.raises(ValueError):
            parse_condition("AGE>10)")


class TestCheckCondition:
    """条件判定测试"""

    def test_empty(self):
        assert check_condition({}, None) is True
        assert check_condition({}, "") is True

    def test_comparisons(self):
        prop = {"AGE": 10}
        assert check_condition(prop, "AGE>9")
        assert not check_condition(prop, "AGE>10")
        assert check_condition(prop, "AGE>=10")
        assert check_condition(prop, "AGE<=10")
        assert not check_condition(prop, "AGE<10")
        assert check_condition(prop, "AGE=10")
        assert check_condition(prop, "AGE!=11")

    def test_includes(self):
        assert check_condition({"AGE": 20}, "AGE?[10,20,30]")
        assert not check_condition({"AGE": 21}, "AGE?[10,20,30]")
        assert check_condition({"AGE": 21}, "AGE![10,20,30]")

    def test_list_property(self):
        prop = {"TLT": [1001, 1004]}
        assert check_condition(prop, "TLT?[1004,1005]")
        assert not check_condition(prop, "TLT![1004]")
        assert check_condition(prop, "TLT![1005]")
        assert check_condition(prop, "TLT=1001")
        assert check_condition(prop, "TLT!=1002")
        assert not check_condition(prop, "TLT>1")

    def test_logic(self):
        prop = {"AGE": 10, "CHR": 2}
        assert check_condition(prop, "AGE>5&CHR<3")
        assert not check_condition(prop, "AGE>50&CHR<3")
        assert check_condition(prop, "AGE>50|CHR<3")
        assert check_condition(prop, "(AGE>50|CHR<3)&AGE=10")

    def test_missing_property(self):
        assert not check_condition({}, "AGE>1")

    def test_property_object(self):
        assert check_condition(Property(AGE=100), "AGE>=100")

    def test_malformed(self):
        with pytest.raises(ValueError):
            check_condition({}, "AGE")


class TestExtractMaxTriggers:
    """触发次数提取测试"""

    def test_default(self):
        assert extract_max_triggers(None) == 1
        assert extract_max_triggers("CHR>5") == 1

    def test_age_list(self):
        assert extract_max_triggers("AGE?[10,20,30,40,50]") == 5
        assert extract_max_triggers("(TLT?[1])&AGE?[18]") == 1


class TestGetRate:
    """加成查询测试"""

    def test_below_threshold(self):
        assert get_rate("times", 0) == {}

    def test_threshold(self):
        config = RateConfig(times=RateTable([(10, {2: 2}), (30, {2: 3, 3: 2})]))
        assert get_rate("times", 10, config) == {2: 2}
        assert get_rate("times", 29, config) == {2: 2}
        assert get_rate("times", 30, config) == {2: 3, 3: 2}

    def test_achievement(self):
        config = RateConfig(achievement=RateTable([(5, {3: 4})]))
        assert get_rate("achievement", 5, config) == {3: 4}

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            get_rate("luck", 1)

    def test_returns_copy(self):
        config = RateConfig(times=RateTable([(1, {2: 2})]))
        get_rate("times", 1, config)[2] = 100
        assert get_rate("times", 1, config) == {2: 2}


class TestWeightRandom:
    """加权随机测试"""

    def test_single(self):
        assert weight_random([(7, 3)]) == 7

    def test_empty(self):
        with pytest.raises(ValueError):
            weight_random([])

    def test_distribution(self):
        rng = np.random.default_rng(0)
        picks = [weight_random([("a", 1), ("b", 3)], rng) for _ in range(20_000)]
        assert picks.count("b") / len(picks) == pytest.approx(0.75, abs=0.02)

    def test_zero_weight_never_picked(self):
        rng = np.random.default_rng(0)
        for _ in range(200):
            assert weight_random([("a", 0), ("b", 1)], rng) == "b"


class TestConfig:
    """配置测试"""

    def test_clone(self):
        value = {"a": [1, 2]}
        copied = clone(value)
        copied["a"].append(3)
        assert value == {"a": [1, 2]}

    def test_from_dict(self):
        config = TalentConfig.from_dict({
            "hand_size": 8,
            "variant": "B",
            "unknown": 1,
            "sampler": {"scale": 100, "base_rates": {"3": 5}},
            "rates": {"times": [[10, {"2": 2}]]},
        })
        assert config.hand_size == 8
        assert config.variant is Variant.MAGIC
        assert config.sampler.scale == 100
        assert config.sampler.base_rates == {3: 5}
        assert config.rates.times.lookup(10) == {2: 2.0}
