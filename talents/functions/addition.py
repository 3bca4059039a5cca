"""
概率加成查询

根据重开次数、成就数量返回各品级的概率倍率
"""
from typing import Dict, Optional

from ..config import RateConfig

RATE_KINDS = ("times", "achievement")


def get_rate(kind: str, value: int, config: Optional[RateConfig] = None) -> Dict[int, float]:
    """
    查询加成倍率

    Args:
        kind: 信号类型 ("times" 或 "achievement")
        value: 信号值
        config: 加成表配置

    Returns:
        品级 -> 倍率，未列出的品级倍率为 1
    """
    if kind not in RATE_KINDS:
        raise ValueError(f"Unknown rate kind: {kind}")
    config = config or RateConfig()
    table = config.times if kind == "times" else config.achievement
    return table.lookup(int(value or 0))
