"""
版本特殊天赋注入

修仙版: 注入 "神秘的小盒子" + 1 个随机传说天赋
魔法版: 注入 3 个魔法天赋 + 1 个随机传说天赋
"""
from typing import List, Optional, Sequence
import logging

import numpy as np

from .catalog import TalentSummary
from .config import SpecialTalent, Variant, VariantConfig

logger = logging.getLogger(__name__)

# 低于该品级的槽位可以被覆盖
OVERWRITE_BELOW_GRADE = 2


def _as_summary(special: SpecialTalent) -> TalentSummary:
    return TalentSummary(
        id=special.id,
        grade=special.grade,
        name=special.name,
        description=special.description,
    )


def build_extra_talents(
    hand: Sequence[TalentSummary],
    extras: Sequence[TalentSummary],
) -> List[TalentSummary]:
    """
    将额外天赋依次写入手牌

    已在手牌中的跳过；否则覆盖第一个品级 < 2 且不属于本次额外天赋的槽位；
    没有可覆盖槽位时丢弃

    Args:
        hand: 原手牌
        extras: 按顺序注入的额外天赋

    Returns:
        新手牌 (原手牌不变)
    """
    new_hand = list(hand)
    extra_ids = {extra.id for extra in extras}
    for extra in extras:
        if any(slot.id == extra.id for slot in new_hand):
            continue
        index = next(
            (
                i for i, slot in enumerate(new_hand)
                if slot.grade < OVERWRITE_BELOW_GRADE and slot.id not in extra_ids
            ),
            None,
        )
        if index is None:
            logger.debug(f"No free slot for extra Talent[{extra.id}], dropped")
            continue
        new_hand[index] = extra
    return new_hand


class BonusInjector:
    """
    版本特殊天赋注入器

    Args:
        config: 版本特殊天赋配置
        rng: 随机数生成器
    """

    def __init__(
        self,
        config: Optional[VariantConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or VariantConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    def pick_legends(
        self,
        legend_pool: Sequence[TalentSummary],
        exclude: Sequence[int] = (),
    ) -> List[TalentSummary]:
        """从未抽中的传说天赋中随机挑选 (不放回)"""
        excluded = set(exclude)
        candidates = [t for t in legend_pool if t.id not in excluded]
        count = min(self.config.extra_legend, len(candidates))
        if count <= 0:
            return []
        indices = self.rng.choice(len(candidates), size=count, replace=False)
        return [candidates[int(i)] for i in indices]

    def inject(
        self,
        hand: Sequence[TalentSummary],
        legend_pool: Sequence[TalentSummary],
        variant=Variant.NONE,
    ) -> List[TalentSummary]:
        """
        按版本注入特殊天赋

        Args:
            hand: 抽取得到的手牌
            legend_pool: 剩余 (未抽中) 的传说天赋池
            variant: 版本

        Returns:
            注入后的手牌
        """
        variant = Variant.parse(variant)
        if variant == Variant.NONE:
            return list(hand)

        specials = [_as_summary(s) for s in self.config.specials_for(variant)]
        legends = self.pick_legends(legend_pool, exclude=[s.id for s in specials])
        if not legends:
            logger.debug(f"No legend talent left for variant {variant.value}")

        logger.debug(
            f"Variant {variant.value}: injecting {[t.id for t in specials + legends]}"
        )
        return build_extra_talents(hand, specials + legends)
