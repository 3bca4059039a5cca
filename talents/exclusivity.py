"""
天赋互斥检查

互斥关系是单向的: 只查询候选天赋自身的 exclusive 列表
"""
from typing import Any, Iterable, Optional

from .catalog import to_talent_id
from .registry import TalentRegistry


def find_exclusive(
    registry: TalentRegistry,
    talents: Iterable[Any],
    exclusive_id: Any,
) -> Optional[int]:
    """
    查找与候选天赋互斥的已持有天赋

    Args:
        registry: 天赋注册表
        talents: 已持有的天赋 ID
        exclusive_id: 候选天赋 ID

    Returns:
        第一个出现在候选天赋互斥列表中的已持有天赋 ID，无冲突时为 None

    Raises:
        NotFoundError: 候选天赋未注册
    """
    exclusive = registry.get(exclusive_id).exclusive
    if not exclusive:
        return None
    for talent in talents:
        talent = to_talent_id(talent)
        for e in exclusive:
            if talent == e:
                return talent
    return None
