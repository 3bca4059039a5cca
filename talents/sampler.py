"""
品级采样器

按加权阈值 (逆 CDF) 抽取品级:
    r ∈ [0, scale)，依次减去 3、2、1 级权重，先变为负数的品级即为结果，否则为 0 级
"""
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Tuple
import logging

import numpy as np

from .config import RateConfig, SamplerConfig
from .functions import get_rate as default_get_rate

logger = logging.getLogger(__name__)

# 阈值扣减顺序，最后一个为兜底品级
GRADE_ORDER: Tuple[int, ...] = (3, 2, 1, 0)


def rate_addition(*bonuses: Mapping[int, float]) -> Dict[int, float]:
    """
    累加多个加成表的倍率

    rate_addition[g] = 1 + Σ(bonus[g] - 1)，未出现的品级倍率为 1
    """
    addition: Dict[int, float] = {}
    for bonus in bonuses:
        for grade, multiplier in bonus.items():
            grade = int(grade)
            addition[grade] = addition.get(grade, 1) + multiplier - 1
    return addition


@dataclass(frozen=True)
class GradeTable:
    """
    单次抽取请求的品级权重表

    同一次请求的所有槽位共用一张表

    Attributes:
        weights: 品级 -> 最终权重 (不含 0 级)
        scale: 随机数范围
    """
    weights: Dict[int, float]
    scale: int = 1000

    @property
    def thresholds(self) -> np.ndarray:
        """按 GRADE_ORDER 的累计阈值"""
        ordered = [self.weights.get(grade, 0) for grade in GRADE_ORDER[:-1]]
        return np.cumsum(np.array(ordered, dtype=np.float64))

    def grade_of(self, number: int) -> int:
        idx = int(np.searchsorted(self.thresholds, number, side="right"))
        return GRADE_ORDER[idx]

    def sample(self, rng: np.random.Generator) -> int:
        """抽取一个品级"""
        return self.grade_of(int(rng.integers(0, self.scale)))

    def sample_many(self, rng: np.random.Generator, size: int) -> np.ndarray:
        """
        批量抽取品级

        Args:
            rng: 随机数生成器
            size: 抽取次数

        Returns:
            (size,) 品级数组
        """
        numbers = rng.integers(0, self.scale, size=size)
        idx = np.searchsorted(self.thresholds, numbers, side="right")
        return np.array(GRADE_ORDER, dtype=np.int64)[idx]

    def probabilities(self) -> Dict[int, float]:
        """各品级的理论概率"""
        probs: Dict[int, float] = {}
        remaining = float(self.scale)
        for grade in GRADE_ORDER[:-1]:
            share = min(max(self.weights.get(grade, 0), 0), remaining)
            probs[grade] = share / self.scale
            remaining -= share
        probs[GRADE_ORDER[-1]] = remaining / self.scale
        return probs


class GradeSampler:
    """
    品级采样器

    Args:
        config: 基础权重配置
        rates: 加成表配置 (使用默认 get_rate 时生效)
        get_rate: 加成查询函数 (kind, value) -> {grade: multiplier}
    """

    def __init__(
        self,
        config: Optional[SamplerConfig] = None,
        rates: Optional[RateConfig] = None,
        get_rate: Optional[Callable[[str, int], Mapping[int, float]]] = None,
    ):
        self.config = config or SamplerConfig()
        self.rates = rates or RateConfig()
        self._get_rate = get_rate or (lambda kind, value: default_get_rate(kind, value, self.rates))

    def build(self, times: int = 0, achievement: int = 0) -> GradeTable:
        """
        根据重开次数与成就数量构建权重表

        Args:
            times: 重开次数
            achievement: 成就数量

        Returns:
            GradeTable
        """
        addition = rate_addition(
            self._get_rate("times", times),
            self._get_rate("achievement", achievement),
        )
        weights = {
            grade: base * addition.get(grade, 1)
            for grade, base in self.config.base_rates.items()
        }

        total = sum(weights.values())
        if total >= self.config.scale:
            logger.warning(
                f"Grade weights {weights} reach scale {self.config.scale}, grade 0 is unreachable"
            )
        logger.debug(f"Grade weights (times={times}, achievement={achievement}): {weights}")
        return GradeTable(weights=weights, scale=self.config.scale)
