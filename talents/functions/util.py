"""
通用工具: 加权随机与深拷贝
"""
from typing import Any, Optional, Sequence, Tuple, TypeVar
import copy

import numpy as np

T = TypeVar("T")


def weight_random(
    pairs: Sequence[Tuple[T, float]],
    rng: Optional[np.random.Generator] = None,
) -> T:
    """
    加权随机选取

    Args:
        pairs: (候选项, 权重) 列表，至少一项
        rng: 随机数生成器

    Returns:
        选中的候选项
    """
    if not pairs:
        raise ValueError("weight_random requires at least one candidate")
    rng = rng if rng is not None else np.random.default_rng()

    weights = np.array([weight for _, weight in pairs], dtype=np.float64)
    cumulative = np.cumsum(weights)
    point = rng.random() * cumulative[-1]
    idx = int(np.searchsorted(cumulative, point, side="right"))
    # 浮点误差落在末尾时取最后一项
    if idx >= len(pairs):
        idx = len(pairs) - 1
    return pairs[idx][0]


def clone(value: Any) -> Any:
    """深拷贝"""
    return copy.deepcopy(value)
