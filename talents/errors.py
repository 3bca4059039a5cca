"""
天赋系统异常定义
"""


class TalentError(Exception):
    """天赋系统异常基类"""


class NotFoundError(TalentError, LookupError):
    """查询了未注册的天赋 ID"""

    def __init__(self, talent_id):
        super().__init__(f"No Talent[{talent_id}]")
        self.talent_id = talent_id


class CatalogError(TalentError, ValueError):
    """天赋目录数据无法规范化 (ID 或品级非法)"""


class ConfigurationHazard(TalentError):
    """
    配置隐患

    目录数据本身合法，但组合起来会导致抽取或替换无法完成
    """


class PoolExhaustedError(ConfigurationHazard):
    """所有品级的天赋池 (含 0 级) 都已抽空"""

    def __init__(self, grade: int):
        super().__init__(f"Talent pool exhausted at grade {grade}")
        self.grade = grade


class ResolutionDepthExceeded(ConfigurationHazard):
    """替换链超过最大深度，通常意味着替换规则成环"""

    def __init__(self, talent_id: int, depth: int):
        super().__init__(
            f"Replacement chain of Talent[{talent_id}] exceeded depth {depth}"
        )
        self.talent_id = talent_id
        self.depth = depth
