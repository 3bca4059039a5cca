"""
Talents - 人生重开天赋抽取与替换 (纯逻辑，无 IO)

Modules:
    catalog: 天赋定义与目录数据规范化
    registry: 天赋注册表
    sampler: 品级采样
    draw: 天赋抽取
    bonus: 版本特殊天赋注入
    exclusivity: 互斥检查
    replacement: 链式替换
    talent: 统一入口
"""
from .errors import (
    TalentError,
    NotFoundError,
    CatalogError,
    ConfigurationHazard,
    PoolExhaustedError,
    ResolutionDepthExceeded,
)

from .config import (
    Variant,
    SpecialTalent,
    SamplerConfig,
    RateTable,
    RateConfig,
    VariantConfig,
    TalentConfig,
)

from .catalog import (
    GRADES,
    Replacement,
    TalentSummary,
    TalentDefinition,
    parse_weighted,
    parse_talent,
)

from .registry import TalentRegistry
from .sampler import GradeSampler, GradeTable, rate_addition
from .draw import DrawAssembler, GradePools
from .bonus import BonusInjector, build_extra_talents
from .exclusivity import find_exclusive
from .replacement import ReplacementResolver
from .talent import Talent

__all__ = [
    # errors
    "TalentError",
    "NotFoundError",
    "CatalogError",
    "ConfigurationHazard",
    "PoolExhaustedError",
    "ResolutionDepthExceeded",
    # config
    "Variant",
    "SpecialTalent",
    "SamplerConfig",
    "RateTable",
    "RateConfig",
    "VariantConfig",
    "TalentConfig",
    # catalog
    "GRADES",
    "Replacement",
    "TalentSummary",
    "TalentDefinition",
    "parse_weighted",
    "parse_talent",
    # components
    "TalentRegistry",
    "GradeSampler",
    "GradeTable",
    "rate_addition",
    "DrawAssembler",
    "GradePools",
    "BonusInjector",
    "build_extra_talents",
    "find_exclusive",
    "ReplacementResolver",
    "Talent",
]
