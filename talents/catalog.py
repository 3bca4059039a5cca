"""
天赋定义与目录数据规范化

目录原始数据示例:
    {
        "1004": {
            "grade": 1, "name": "生而为女", "description": "性别一定为女",
            "condition": "AGE?[0]", "effect": {"SPR": 1},
            "exclusive": [1003],
            "replacement": {"grade": ["2*3"], "talent": ["1005", "1006*2"]}
        }
    }
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union
import logging
import math

from .errors import CatalogError

logger = logging.getLogger(__name__)

GRADES: Tuple[int, ...] = (0, 1, 2, 3)
REPLACEMENT_SECTIONS: Tuple[str, ...] = ("grade", "talent")


@dataclass(frozen=True)
class Replacement:
    """
    替换规则

    Attributes:
        grade: 品级 -> 权重，该品级的所有天赋都是候选
        talent: 天赋 ID -> 权重
    """
    grade: Dict[int, Union[int, float]] = field(default_factory=dict)
    talent: Dict[int, Union[int, float]] = field(default_factory=dict)


@dataclass(frozen=True)
class TalentSummary:
    """抽取结果中的天赋摘要"""
    id: int
    grade: int
    name: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "grade": self.grade,
            "name": self.name,
            "description": self.description,
        }


@dataclass(frozen=True)
class TalentDefinition:
    """
    天赋定义 (加载后不可变)

    Attributes:
        id: 天赋 ID
        grade: 品级 0-3 (普通 -> 传说)
        condition: 生效条件表达式
        max_triggers: 最大触发次数 (由 condition 推导)
        effect: 生效时返回的效果数据
        status: 额外可分配属性点
        exclusive: 互斥天赋 ID (单向)
        replacement: 替换规则
    """
    id: int
    grade: int
    name: str = ""
    description: str = ""
    condition: Optional[str] = None
    max_triggers: int = 1
    effect: Any = None
    status: Any = None
    exclusive: Optional[Tuple[int, ...]] = None
    replacement: Optional[Replacement] = None

    def summary(self) -> TalentSummary:
        return TalentSummary(
            id=self.id,
            grade=self.grade,
            name=self.name,
            description=self.description,
        )


def to_talent_id(value: Any) -> int:
    """将 ID 规范化为整数 (接受 "1004"、1004、1004.0)"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise CatalogError(f"Talent id must be numeric, got {value!r}") from None
    if not number.is_integer():
        raise CatalogError(f"Talent id must be an integer, got {value!r}")
    return int(number)


def to_grade(value: Any, talent_id: int) -> int:
    try:
        grade = to_talent_id(value)
    except CatalogError:
        raise CatalogError(f"Talent[{talent_id}] has invalid grade {value!r}") from None
    if grade not in GRADES:
        raise CatalogError(f"Talent[{talent_id}] grade {grade} out of range {GRADES}")
    return grade


def parse_weighted(value: Any, talent_id: int = 0) -> Tuple[int, Union[int, float]]:
    """
    解析 "id*weight" 形式的加权候选

    宽松解析: ID 缺失或非法时为 0，权重缺失、非法、非有限或非正时为 1，小数权重保留

    Args:
        value: 原始字符串或数字
        talent_id: 所属天赋 ID (仅用于日志)

    Returns:
        (id, weight)
    """
    text = str(value).strip()
    raw_id, _, raw_weight = text.partition("*")

    key = 0
    if raw_id.strip():
        try:
            key = to_talent_id(raw_id.strip())
        except CatalogError:
            logger.warning(f"Talent[{talent_id}] replacement {text!r}: bad id, using 0")

    weight: Union[int, float] = 1
    if raw_weight.strip():
        try:
            number = float(raw_weight)
        except ValueError:
            number = None
        if number is None or not math.isfinite(number):
            logger.warning(f"Talent[{talent_id}] replacement {text!r}: bad weight, using 1")
        elif number <= 0:
            logger.warning(f"Talent[{talent_id}] replacement {text!r}: non-positive weight, using 1")
        else:
            # 小数权重保留原值
            weight = int(number) if number.is_integer() else number
    return key, weight


def parse_section(raw: Any, talent_id: int = 0) -> Dict[int, Union[int, float]]:
    """解析替换规则中的一个分区 (列表或映射)"""
    if isinstance(raw, dict):
        items: Iterable[Any] = (f"{k}*{v}" for k, v in raw.items())
    elif isinstance(raw, (list, tuple)):
        items = raw
    else:
        items = [raw]

    section: Dict[int, Union[int, float]] = {}
    for item in items:
        key, weight = parse_weighted(item, talent_id)
        section[key] = weight
    return section


def parse_replacement(raw: Optional[dict], talent_id: int = 0) -> Optional[Replacement]:
    if not raw:
        return None
    unknown = set(raw) - set(REPLACEMENT_SECTIONS)
    if unknown:
        logger.warning(f"Talent[{talent_id}] ignores replacement sections {sorted(unknown)}")
    return Replacement(
        grade=parse_section(raw["grade"], talent_id) if raw.get("grade") else {},
        talent=parse_section(raw["talent"], talent_id) if raw.get("talent") else {},
    )


def parse_talent(
    raw_id: Any,
    raw: dict,
    extract_max_triggers: Callable[[Optional[str]], int],
) -> TalentDefinition:
    """
    规范化单条目录数据

    Args:
        raw_id: 目录中的键 (字符串或数字)
        raw: 原始条目
        extract_max_triggers: 从条件中提取触发次数的函数

    Returns:
        TalentDefinition
    """
    talent_id = to_talent_id(raw_id)
    condition = raw.get("condition") or None
    exclusive = raw.get("exclusive")
    if exclusive is not None:
        if not isinstance(exclusive, (list, tuple)):
            exclusive = [exclusive]
        exclusive = tuple(to_talent_id(e) for e in exclusive)

    return TalentDefinition(
        id=talent_id,
        grade=to_grade(raw.get("grade", 0), talent_id),
        name=raw.get("name", ""),
        description=raw.get("description", ""),
        condition=condition,
        max_triggers=extract_max_triggers(condition),
        effect=raw.get("effect"),
        status=raw.get("status"),
        exclusive=exclusive,
        replacement=parse_replacement(raw.get("replacement"), talent_id),
    )
