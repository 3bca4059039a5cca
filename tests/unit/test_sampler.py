"""品级采样测试"""
import numpy as np
import pytest

from talents.config import RateConfig, RateTable, SamplerConfig
from talents.sampler import GradeSampler, GradeTable, rate_addition


def no_bonus(kind, value):
    return {}


class TestRateAddition:
    """倍率累加测试"""

    def test_empty(self):
        assert rate_addition({}, {}) == {}

    def test_accumulates(self):
        assert rate_addition({2: 2, 3: 3}, {3: 2}) == {2: 2, 3: 4}

    def test_unit_multiplier(self):
        assert rate_addition({1: 1}) == {1: 1}


class TestGradeTable:
    """权重表测试"""

    def test_thresholds(self):
        table = GradeTable(weights={3: 100, 2: 10, 1: 1})
        np.testing.assert_array_equal(table.thresholds, [100, 110, 111])

    def test_grade_boundaries(self):
        table = GradeTable(weights={3: 100, 2: 10, 1: 1})
        assert table.grade_of(0) == 3
        assert table.grade_of(99) == 3
        assert table.grade_of(100) == 2
        assert table.grade_of(109) == 2
        assert table.grade_of(110) == 1
        assert table.grade_of(111) == 0
        assert table.grade_of(999) == 0

    def test_zero_weight_grade_skipped(self):
        table = GradeTable(weights={3: 0, 2: 10, 1: 0})
        assert table.grade_of(0) == 2
        assert table.grade_of(10) == 0

    def test_probabilities(self):
        probs = GradeTable(weights={3: 100, 2: 10, 1: 1}).probabilities()
        assert probs[3] == pytest.approx(0.1)
        assert probs[2] == pytest.approx(0.01)
        assert probs[1] == pytest.approx(0.001)
        assert probs[0] == pytest.approx(0.889)

    def test_probabilities_saturated(self):
        probs = GradeTable(weights={3: 900, 2: 200, 1: 1}).probabilities()
        assert probs[3] == pytest.approx(0.9)
        assert probs[2] == pytest.approx(0.1)
        assert probs[1] == 0
        assert probs[0] == 0

    def test_sample_in_range(self):
        table = GradeTable(weights={3: 100, 2: 10, 1: 1})
        rng = np.random.default_rng(0)
        for _ in range(100):
            assert table.sample(rng) in (0, 1, 2, 3)


class TestGradeSampler:
    """采样器测试"""

    def test_base_weights(self):
        table = GradeSampler(get_rate=no_bonus).build()
        assert table.weights == {3: 100, 2: 10, 1: 1}
        assert table.scale == 1000

    def test_bonus_multipliers(self):
        def get_rate(kind, value):
            return {"times": {2: 2, 3: 3}, "achievement": {3: 2}}[kind]

        table = GradeSampler(get_rate=get_rate).build(times=50, achievement=20)
        assert table.weights == {3: 100 * 4, 2: 10 * 2, 1: 1}

    def test_signals_forwarded(self):
        calls = []

        def get_rate(kind, value):
            calls.append((kind, value))
            return {}

        GradeSampler(get_rate=get_rate).build(times=7, achievement=3)
        assert calls == [("times", 7), ("achievement", 3)]

    def test_default_rate_tables(self):
        rates = RateConfig(
            times=RateTable([(10, {3: 2})]),
            achievement=RateTable([]),
        )
        sampler = GradeSampler(rates=rates)
        assert sampler.build(times=9).weights[3] == 100
        assert sampler.build(times=10).weights[3] == 200

    def test_custom_base_rates(self):
        sampler = GradeSampler(SamplerConfig(scale=100, base_rates={3: 1}), get_rate=no_bonus)
        table = sampler.build()
        assert table.scale == 100
        assert table.weights == {3: 1}

    def test_saturation_warning(self, caplog):
        sampler = GradeSampler(get_rate=lambda kind, value: {3: 6})
        sampler.build()
        assert "unreachable" in caplog.text

    def test_distribution(self):
        table = GradeSampler(get_rate=no_bonus).build()
        grades = table.sample_many(np.random.default_rng(2024), 100_000)
        assert grades.shape == (100_000,)
        freq = {g: float(np.mean(grades == g)) for g in (0, 1, 2, 3)}
        assert freq[3] == pytest.approx(0.10, abs=0.005)
        assert freq[2] == pytest.approx(0.01, abs=0.002)
        assert freq[1] == pytest.approx(0.001, abs=0.0005)
        assert freq[0] == pytest.approx(0.889, abs=0.006)

    def test_single_sample_distribution(self):
        table = GradeSampler(get_rate=no_bonus).build()
        rng = np.random.default_rng(7)
        grades = [table.sample(rng) for _ in range(20_000)]
        assert grades.count(3) / len(grades) == pytest.approx(0.10, abs=0.01)
