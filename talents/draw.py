"""
天赋抽取

每次抽取 10 个天赋 (不放回):
- 槽位 0 可指定必选天赋
- 其余槽位先抽品级，品级池为空时逐级降低
- 最后按版本注入特殊天赋
"""
from typing import Any, Dict, List, Optional
import logging

import numpy as np

from .bonus import BonusInjector
from .catalog import GRADES, TalentSummary
from .config import TalentConfig, Variant
from .errors import PoolExhaustedError
from .registry import TalentRegistry
from .sampler import GradeSampler, GradeTable

logger = logging.getLogger(__name__)


class GradePools:
    """
    按品级分组的天赋池

    池由本对象独占，抽取使用交换删除 (swap-remove)，不影响注册表
    """

    def __init__(self, talents: List[TalentSummary]):
        self._pools: Dict[int, List[TalentSummary]] = {grade: [] for grade in GRADES}
        for talent in talents:
            self._pools.setdefault(talent.grade, []).append(talent)

    @classmethod
    def from_registry(cls, registry: TalentRegistry, exclude: Optional[int] = None) -> 'GradePools':
        summaries = [
            registry.summary(talent_id)
            for talent_id in registry.ids()
            if talent_id != exclude
        ]
        return cls(summaries)

    def size(self, grade: int) -> int:
        return len(self._pools.get(grade, []))

    def remaining(self, grade: int) -> List[TalentSummary]:
        """某品级剩余天赋 (副本)"""
        return list(self._pools.get(grade, []))

    def available_grade(self, grade: int) -> int:
        """从 grade 开始向下寻找非空的品级"""
        while grade >= 0 and not self._pools.get(grade):
            grade -= 1
        if grade < 0:
            raise PoolExhaustedError(0)
        return grade

    def take(self, grade: int, index: int) -> TalentSummary:
        """取出指定位置的天赋 (交换删除)"""
        pool = self._pools[grade]
        pool[index], pool[-1] = pool[-1], pool[index]
        return pool.pop()


class DrawAssembler:
    """
    天赋抽取器

    Args:
        registry: 天赋注册表
        sampler: 品级采样器
        injector: 版本特殊天赋注入器
        config: 天赋系统配置
        rng: 随机数生成器
    """

    def __init__(
        self,
        registry: TalentRegistry,
        sampler: Optional[GradeSampler] = None,
        injector: Optional[BonusInjector] = None,
        config: Optional[TalentConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.registry = registry
        self.config = config or TalentConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.sampler = sampler or GradeSampler(self.config.sampler, self.config.rates)
        self.injector = injector or BonusInjector(self.config.variants, self.rng)

    def _resolve_include(self, include: Any) -> Optional[TalentSummary]:
        if include is None:
            return None
        if include not in self.registry:
            logger.warning(f"Included Talent[{include}] is not registered, ignored")
            return None
        return self.registry.summary(include)

    def draw_slot(self, pools: GradePools, table: GradeTable) -> TalentSummary:
        """抽取一个槽位"""
        grade = pools.available_grade(table.sample(self.rng))
        index = int(self.rng.integers(0, pools.size(grade)))
        return pools.take(grade, index)

    def draw(
        self,
        include: Any = None,
        times: int = 0,
        achievement: int = 0,
        variant: Any = None,
    ) -> List[TalentSummary]:
        """
        抽取一手天赋

        Args:
            include: 必选天赋 ID，放在槽位 0
            times: 重开次数
            achievement: 成就数量
            variant: 版本，None 时使用配置中的版本

        Returns:
            hand_size 个天赋摘要
        """
        included = self._resolve_include(include)
        pools = GradePools.from_registry(
            self.registry,
            exclude=included.id if included is not None else None,
        )
        table = self.sampler.build(times=times, achievement=achievement)

        hand: List[TalentSummary] = []
        for slot in range(self.config.hand_size):
            if slot == 0 and included is not None:
                hand.append(included)
                continue
            hand.append(self.draw_slot(pools, table))

        logger.debug(f"Drew {[t.id for t in hand]}")
        variant = self.config.variant if variant is None else variant
        return self.injector.inject(
            hand,
            pools.remaining(self.config.variants.legend_grade),
            variant=Variant.parse(variant),
        )
