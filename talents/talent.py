"""
天赋系统入口

组合注册表、抽取器与替换解析器，对外提供统一接口
"""
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import logging

import numpy as np

from .bonus import BonusInjector
from .catalog import TalentDefinition, TalentSummary
from .config import TalentConfig
from .draw import DrawAssembler
from .exclusivity import find_exclusive
from .registry import TalentIds, TalentRegistry
from .replacement import ReplacementResolver
from .sampler import GradeSampler

logger = logging.getLogger(__name__)


class Talent:
    """
    天赋系统

    Usage:
        talent = Talent(TalentConfig(variant=Variant.MAGIC, seed=42))
        talent.initial({"talents": catalog})
        hand = talent.talent_random(include=1004, times=20)
        replaced = talent.replace([t.id for t in hand[:3]])

    Args:
        config: 天赋系统配置
        registry: 天赋注册表 (默认新建)
        get_rate: 加成查询函数
        weight_random: 替换使用的加权随机函数
        rng: 随机数生成器 (默认由 config.seed 创建)
    """

    def __init__(
        self,
        config: Optional[TalentConfig] = None,
        registry: Optional[TalentRegistry] = None,
        get_rate: Optional[Callable] = None,
        weight_random: Optional[Callable] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or TalentConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.registry = registry or TalentRegistry()

        sampler = GradeSampler(self.config.sampler, self.config.rates, get_rate=get_rate)
        injector = BonusInjector(self.config.variants, self.rng)
        self.assembler = DrawAssembler(
            self.registry,
            sampler=sampler,
            injector=injector,
            config=self.config,
            rng=self.rng,
        )
        self.resolver = ReplacementResolver(
            self.registry,
            weight_random=weight_random,
            max_depth=self.config.max_depth,
            rng=self.rng,
        )

    # ---- 注册表 ----

    def initial(self, catalog: Any) -> None:
        self.registry.initial(catalog)

    def count(self) -> int:
        return self.registry.count()

    def get(self, talent_id: Any) -> TalentDefinition:
        return self.registry.get(talent_id)

    def information(self, talent_id: Any) -> Dict[str, Any]:
        return self.registry.information(talent_id)

    def for_each(self, visitor: Callable[[TalentDefinition, int], Any]) -> None:
        self.registry.for_each(visitor)

    def check(self, talent_id: Any, property: Any) -> bool:
        return self.registry.check(talent_id, property)

    def do(self, talent_id: Any, property: Any) -> Optional[Dict[str, Any]]:
        return self.registry.do(talent_id, property)

    def allocation_addition(self, talents: TalentIds) -> Union[int, float]:
        return self.registry.allocation_addition(talents)

    # ---- 抽取与替换 ----

    def exclusive(self, talents: Iterable[Any], exclusive_id: Any) -> Optional[int]:
        """返回与 exclusive_id 互斥的第一个已持有天赋，无冲突时为 None"""
        return find_exclusive(self.registry, talents, exclusive_id)

    def talent_random(
        self,
        include: Any = None,
        times: int = 0,
        achievement: int = 0,
        variant: Any = None,
    ) -> List[TalentSummary]:
        """
        抽取一手天赋

        Args:
            include: 必选天赋 ID (槽位 0)
            times: 重开次数
            achievement: 成就数量
            variant: 版本，None 时使用配置中的版本

        Returns:
            10 个天赋摘要
        """
        return self.assembler.draw(
            include=include,
            times=times,
            achievement=achievement,
            variant=variant,
        )

    def replace(self, talents: Iterable[Any]) -> Dict[int, int]:
        """解析替换，返回 原 ID -> 最终 ID"""
        return self.resolver.replace(talents)
