"""
天赋系统配置

定义抽取概率、加成表、版本特殊天赋等配置
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


class Variant(Enum):
    """游戏版本 (决定额外注入的特殊天赋)"""
    NONE = ""
    IMMORTALS = "immortals"  # 修仙版
    MAGIC = "magic"          # 魔法版

    @classmethod
    def parse(cls, value: Union[str, "Variant", None]) -> "Variant":
        """
        解析版本标识

        支持枚举值、"immortals"/"magic" 以及简写 "A"/"B"，空值视为无版本
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.NONE
        aliases = {"a": cls.IMMORTALS, "b": cls.MAGIC}
        key = str(value).strip().lower()
        if key in aliases:
            return aliases[key]
        return cls(key)


@dataclass(frozen=True)
class SpecialTalent:
    """版本特殊天赋 (直接注入手牌，不经过目录查询)"""
    id: int
    grade: int
    name: str
    description: str


@dataclass
class SamplerConfig:
    """
    品级采样配置

    Attributes:
        scale: 随机数范围 [0, scale)
        base_rates: 各品级基础权重，0 级获得剩余部分
    """
    scale: int = 1000
    base_rates: Dict[int, float] = field(
        default_factory=lambda: {3: 100, 2: 10, 1: 1}
    )

    @classmethod
    def from_dict(cls, d: dict) -> 'SamplerConfig':
        base_rates = {int(k): v for k, v in d.get("base_rates", {3: 100, 2: 10, 1: 1}).items()}
        return cls(scale=int(d.get("scale", 1000)), base_rates=base_rates)


@dataclass
class RateTable:
    """
    阈值加成表

    thresholds 按阈值升序排列，取不超过信号值的最大阈值对应的倍率
    """
    thresholds: List[Tuple[int, Dict[int, float]]] = field(default_factory=list)

    def lookup(self, value: int) -> Dict[int, float]:
        rate: Dict[int, float] = {}
        for threshold, multipliers in sorted(self.thresholds, key=lambda t: t[0]):
            if value < threshold:
                break
            rate = multipliers
        return dict(rate)

    @classmethod
    def from_list(cls, items: list) -> 'RateTable':
        thresholds = [
            (int(threshold), {int(g): float(m) for g, m in multipliers.items()})
            for threshold, multipliers in items
        ]
        return cls(thresholds=thresholds)


def _default_times_table() -> RateTable:
    # 重开次数越多，高品级概率越高
    return RateTable([
        (10, {2: 2}),
        (30, {2: 3, 3: 2}),
        (50, {2: 4, 3: 2}),
        (70, {2: 5, 3: 3}),
        (100, {2: 6, 3: 3}),
    ])


def _default_achievement_table() -> RateTable:
    return RateTable([
        (10, {2: 2}),
        (30, {2: 3, 3: 2}),
        (50, {2: 4, 3: 2}),
        (70, {2: 5, 3: 3}),
    ])


@dataclass
class RateConfig:
    """重开次数 / 成就数量的加成表"""
    times: RateTable = field(default_factory=_default_times_table)
    achievement: RateTable = field(default_factory=_default_achievement_table)

    @classmethod
    def from_dict(cls, d: dict) -> 'RateConfig':
        config = cls()
        if "times" in d:
            config.times = RateTable.from_list(d["times"])
        if "achievement" in d:
            config.achievement = RateTable.from_list(d["achievement"])
        return config


def _default_specials() -> Dict[Variant, Tuple[SpecialTalent, ...]]:
    return {
        Variant.IMMORTALS: (
            SpecialTalent(id=1048, grade=3, name="神秘的小盒子", description="100岁时才能开启"),
        ),
        Variant.MAGIC: (
            SpecialTalent(id=1131, grade=2, name="魔法棒", description="不知道有什么用……"),
            SpecialTalent(id=1005, grade=2, name="动漫高手", description="入宅的可能性翻6倍"),
            SpecialTalent(id=1004, grade=1, name="生而为女", description="性别一定为女"),
        ),
    }


@dataclass
class VariantConfig:
    """
    版本特殊天赋配置

    Attributes:
        specials: 各版本固定注入的特殊天赋
        extra_legend: 各版本额外注入的随机传说天赋数量
        legend_grade: 传说天赋品级
    """
    specials: Dict[Variant, Tuple[SpecialTalent, ...]] = field(default_factory=_default_specials)
    extra_legend: int = 1
    legend_grade: int = 3

    def specials_for(self, variant: Variant) -> Tuple[SpecialTalent, ...]:
        return self.specials.get(variant, ())


@dataclass
class TalentConfig:
    """
    天赋系统总配置

    Attributes:
        hand_size: 每次抽取的天赋数量
        variant: 当前版本
        max_depth: 替换链最大深度，None 表示使用目录大小
        seed: 随机种子
    """
    hand_size: int = 10
    variant: Variant = Variant.NONE
    max_depth: Optional[int] = None
    seed: Optional[int] = None

    sampler: SamplerConfig = field(default_factory=SamplerConfig)
    rates: RateConfig = field(default_factory=RateConfig)
    variants: VariantConfig = field(default_factory=VariantConfig)

    @classmethod
    def from_dict(cls, d: dict) -> 'TalentConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        if "variant" in filtered:
            filtered["variant"] = Variant.parse(filtered["variant"])
        if isinstance(filtered.get("sampler"), dict):
            filtered["sampler"] = SamplerConfig.from_dict(filtered["sampler"])
        if isinstance(filtered.get("rates"), dict):
            filtered["rates"] = RateConfig.from_dict(filtered["rates"])
        return cls(**filtered)
