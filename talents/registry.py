"""
天赋注册表

进程内唯一的天赋目录，加载后只读；所有对外读取均返回副本
"""
from typing import Any, Callable, Dict, Iterator, List, Optional, Union
import logging
import numbers

from .catalog import TalentDefinition, TalentSummary, parse_talent, to_talent_id
from .errors import CatalogError, NotFoundError
from .functions import check_condition, clone, extract_max_triggers

logger = logging.getLogger(__name__)

TalentIds = Union[int, str, List[Any]]


def _to_number(value: Any) -> Union[int, float]:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, numbers.Number):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if number != number:  # NaN
        return 0
    return int(number) if number.is_integer() else number


class TalentRegistry:
    """
    天赋注册表

    生命周期: 未初始化 -> initial() 加载 -> (可选) 再次 initial() 整体替换

    Args:
        check_condition: 条件判定函数 (property, condition) -> bool
        extract_max_triggers: 触发次数提取函数 (condition) -> int
        clone: 深拷贝函数
    """

    def __init__(
        self,
        check_condition: Callable[[Any, Optional[str]], bool] = check_condition,
        extract_max_triggers: Callable[[Optional[str]], int] = extract_max_triggers,
        clone: Callable[[Any], Any] = clone,
    ):
        self._check_condition = check_condition
        self._extract_max_triggers = extract_max_triggers
        self._clone = clone
        self._talents: Dict[int, TalentDefinition] = {}

    def initial(self, catalog: Any) -> None:
        """
        加载天赋目录 (整体替换已有数据)

        Args:
            catalog: {"talents": {...}}、{id: 条目} 或带 id 字段的条目列表
        """
        if isinstance(catalog, dict) and isinstance(catalog.get("talents"), (dict, list)):
            catalog = catalog["talents"]

        if isinstance(catalog, dict):
            entries = list(catalog.items())
        elif isinstance(catalog, (list, tuple)):
            entries = [(raw.get("id"), raw) for raw in catalog]
        else:
            raise CatalogError(f"Unsupported catalog type: {type(catalog).__name__}")

        talents: Dict[int, TalentDefinition] = {}
        for raw_id, raw in entries:
            talent = parse_talent(raw_id, raw, self._extract_max_triggers)
            if talent.id in talents:
                raise CatalogError(f"Duplicate talent id {talent.id}")
            talents[talent.id] = talent

        # 一次性替换，不暴露中间状态
        self._talents = talents
        logger.info(f"Loaded {len(talents)} talents")

    def count(self) -> int:
        return len(self._talents)

    def __len__(self) -> int:
        return len(self._talents)

    def __contains__(self, talent_id: Any) -> bool:
        try:
            return to_talent_id(talent_id) in self._talents
        except CatalogError:
            return False

    def ids(self) -> List[int]:
        """按注册顺序返回所有 ID"""
        return list(self._talents)

    def _lookup(self, talent_id: Any) -> TalentDefinition:
        try:
            key = to_talent_id(talent_id)
        except CatalogError:
            raise NotFoundError(talent_id) from None
        talent = self._talents.get(key)
        if talent is None:
            raise NotFoundError(talent_id)
        return talent

    def get(self, talent_id: Any) -> TalentDefinition:
        """
        获取天赋定义副本

        Raises:
            NotFoundError: ID 未注册
        """
        return self._clone(self._lookup(talent_id))

    def summary(self, talent_id: Any) -> TalentSummary:
        return self._lookup(talent_id).summary()

    def information(self, talent_id: Any) -> Dict[str, Any]:
        """公开信息 (不含机制字段)"""
        talent = self._lookup(talent_id)
        return {
            "grade": talent.grade,
            "name": talent.name,
            "description": talent.description,
        }

    def for_each(self, visitor: Callable[[TalentDefinition, int], Any]) -> None:
        """按注册顺序以 (副本, id) 调用 visitor，visitor 不可调用时不做任何事"""
        if not callable(visitor):
            return
        for talent_id, talent in list(self._talents.items()):
            visitor(self._clone(talent), talent_id)

    def __iter__(self) -> Iterator[TalentDefinition]:
        for talent in list(self._talents.values()):
            yield self._clone(talent)

    def check(self, talent_id: Any, property: Any) -> bool:
        """判定天赋条件在当前属性下是否成立"""
        condition = self._lookup(talent_id).condition
        return self._check_condition(property, condition)

    def do(self, talent_id: Any, property: Any) -> Optional[Dict[str, Any]]:
        """
        尝试生效天赋

        Returns:
            条件成立 (或无条件) 时返回 {effect, grade, name, description}，否则 None
        """
        talent = self._lookup(talent_id)
        if talent.condition and not self._check_condition(property, talent.condition):
            return None
        return {
            "effect": self._clone(talent.effect),
            "grade": talent.grade,
            "name": talent.name,
            "description": talent.description,
        }

    def allocation_addition(self, talents: TalentIds) -> Union[int, float]:
        """
        额外可分配属性点

        Args:
            talents: 单个 ID 或 ID 列表 (可嵌套)
        """
        if isinstance(talents, (list, tuple)):
            return sum(self.allocation_addition(t) for t in talents)
        return _to_number(self._lookup(talents).status)
