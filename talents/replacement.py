"""
天赋替换

持有的天赋可按替换规则变为其他天赋，替换结果自身也可能继续替换 (链式)。
候选来源:
- grade 规则: 目录中该品级的所有天赋，权重取规则值
- talent 规则: 指定天赋 ID 及其权重
与当前工作集互斥的候选会被排除。工作集包含全部初始天赋、已完成替换的结果
以及本条替换链上已选中的天赋。
"""
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import logging

import numpy as np

from .catalog import to_talent_id
from .errors import ResolutionDepthExceeded
from .exclusivity import find_exclusive
from .functions import weight_random
from .registry import TalentRegistry

logger = logging.getLogger(__name__)

Candidates = List[Tuple[int, Union[int, float]]]


class ReplacementResolver:
    """
    链式替换解析器

    Args:
        registry: 天赋注册表
        weight_random: 加权随机函数 [(id, weight), ...] -> id
        max_depth: 单条替换链的最大长度，None 表示使用目录大小
        rng: 随机数生成器 (使用默认 weight_random 时生效)
    """

    def __init__(
        self,
        registry: TalentRegistry,
        weight_random: Optional[Callable[[Sequence[Tuple[int, Union[int, float]]]], Any]] = None,
        max_depth: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.registry = registry
        self.max_depth = max_depth
        self.rng = rng if rng is not None else np.random.default_rng()
        self._weight_random = weight_random or self._default_weight_random

    def _default_weight_random(self, pairs: Sequence[Tuple[int, Union[int, float]]]) -> int:
        return weight_random(pairs, self.rng)

    @property
    def depth_limit(self) -> int:
        if self.max_depth is not None:
            return self.max_depth
        return max(self.registry.count(), 1)

    def candidates(self, talent_id: int, talents: Iterable[int]) -> Optional[Candidates]:
        """
        收集替换候选

        Args:
            talent_id: 待替换的天赋
            talents: 当前工作集 (用于互斥检查)

        Returns:
            [(候选 ID, 权重), ...]；天赋没有替换规则时为 None
        """
        replacement = self.registry.get(talent_id).replacement
        if replacement is None:
            return None
        talents = list(talents)
        candidates: Candidates = []

        if replacement.grade:
            def visit(talent, _):
                weight = replacement.grade.get(talent.grade)
                if not weight:
                    return
                if find_exclusive(self.registry, talents, talent.id) is not None:
                    return
                candidates.append((talent.id, weight))

            self.registry.for_each(visit)

        for candidate_id, weight in replacement.talent.items():
            # 0 为缺省 ID 占位，不是真实天赋
            if candidate_id == 0:
                continue
            if find_exclusive(self.registry, talents, candidate_id) is not None:
                continue
            candidates.append((candidate_id, weight))

        return candidates

    def resolve(self, talent_id: Any, talents: Sequence[int]) -> int:
        """
        解析单个天赋的最终替换结果

        Args:
            talent_id: 初始天赋
            talents: 当前工作集

        Returns:
            替换链末端的天赋 ID (无替换时为自身)

        Raises:
            ResolutionDepthExceeded: 替换链过长 (规则成环)
        """
        current = to_talent_id(talent_id)
        chain = list(talents)
        limit = self.depth_limit
        steps = 0

        while True:
            candidates = self.candidates(current, chain)
            if not candidates:
                return current
            if steps >= limit:
                raise ResolutionDepthExceeded(to_talent_id(talent_id), limit)
            picked = to_talent_id(self._weight_random(candidates))
            logger.debug(f"Talent[{current}] -> Talent[{picked}] from {candidates}")
            chain.append(picked)
            current = picked
            steps += 1

    def replace(self, talents: Iterable[Any]) -> Dict[int, int]:
        """
        解析一组天赋的替换

        Args:
            talents: 已持有的天赋 ID

        Returns:
            原 ID -> 最终 ID，只包含发生变化的天赋
        """
        held = [to_talent_id(t) for t in talents]
        working = list(held)
        result: Dict[int, int] = {}
        for talent in held:
            final = self.resolve(talent, working)
            if final != talent:
                result[talent] = final
                working.append(final)
        if result:
            logger.debug(f"Replaced talents: {result}")
        return result
