"""
外部协作函数 - 条件判定、概率加成、加权随机
"""
from .condition import check_condition, extract_max_triggers, parse_condition
from .addition import get_rate
from .util import weight_random, clone

__all__ = [
    "check_condition",
    "extract_max_triggers",
    "parse_condition",
    "get_rate",
    "weight_random",
    "clone",
]
