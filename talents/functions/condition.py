"""
条件表达式解析与判定

表达式示例:
    "AGE?[10,20,30]"          年龄为 10/20/30 之一
    "(CHR>5)&(TLT![1004])"    颜值大于 5 且未持有天赋 1004
    "EVT?[10001]|MNY>=8"      经历过事件 10001 或家境不低于 8

原子条件为 "属性 运算符 值"，值为数字或 JSON 列表
运算符: > < >= <= = != ? (包含任一) ! (不包含任何)
"""
from typing import Any, List, Optional, Union
import json
import re

_ATOM_RE = re.compile(r"^([^<>=!?]+)(>=|<=|!=|>|<|=|\?|!)(.+)$")
_AGE_TRIGGER_RE = re.compile(r"AGE\?\[([0-9,\s]+)\]")

Parsed = List[Union[str, "Parsed"]]


def parse_condition(condition: str) -> Parsed:
    """
    将条件表达式解析为嵌套列表

    原子条件与 "&" / "|" 交替出现，括号对应子列表

    Args:
        condition: 条件表达式

    Returns:
        嵌套列表，如 "(A>1)&B<2" -> [["A>1"], "&", "B<2"]
    """
    root: Parsed = []
    stack: List[Parsed] = [root]
    buffer: List[str] = []

    def flush():
        atom = "".join(buffer).strip()
        buffer.clear()
        if atom:
            stack[-1].append(atom)

    for ch in condition:
        if ch.isspace():
            continue
        if ch == "(":
            flush()
            sub: Parsed = []
            stack[-1].append(sub)
            stack.append(sub)
        elif ch == ")":
            flush()
            if len(stack) == 1:
                raise ValueError(f"Unbalanced ')' in condition: {condition}")
            stack.pop()
        elif ch in "&|":
            flush()
            stack[-1].append(ch)
        else:
            buffer.append(ch)
    flush()

    if len(stack) != 1:
        raise ValueError(f"Unbalanced '(' in condition: {condition}")
    return root


def _parse_value(raw: str) -> Any:
    if raw.startswith("["):
        return json.loads(raw)
    number = float(raw)
    return int(number) if number.is_integer() else number


def _get(property: Any, key: str) -> Any:
    getter = getattr(property, "get", None)
    if getter is None:
        raise TypeError(f"Property object must provide get(), got {type(property).__name__}")
    return getter(key)


def check_atom(property: Any, atom: str) -> bool:
    """判定单个原子条件"""
    match = _ATOM_RE.match(atom)
    if match is None:
        raise ValueError(f"Malformed condition: {atom}")
    key, symbol, raw = match.groups()
    value = _parse_value(raw)
    data = _get(property, key)
    is_list = isinstance(data, (list, tuple, set, frozenset))

    if symbol in (">", "<", ">=", "<="):
        if data is None or is_list:
            return False
        if symbol == ">":
            return data > value
        if symbol == "<":
            return data < value
        if symbol == ">=":
            return data >= value
        return data <= value
    if symbol == "=":
        return value in data if is_list else data == value
    if symbol == "!=":
        return value not in data if is_list else data != value

    candidates = value if isinstance(value, list) else [value]
    if symbol == "?":
        if is_list:
            return any(item in candidates for item in data)
        return data in candidates
    # "!"
    if is_list:
        return not any(item in candidates for item in data)
    return data not in candidates


def check_parsed(property: Any, conditions: Union[str, Parsed]) -> bool:
    """判定已解析的条件 ("&" 与 "|" 从左到右短路求值)"""
    if isinstance(conditions, str):
        return check_atom(property, conditions)
    if not conditions:
        return True
    result = check_parsed(property, conditions[0])
    for i in range(1, len(conditions), 2):
        operator = conditions[i]
        if i + 1 >= len(conditions):
            raise ValueError(f"Dangling operator '{operator}' in condition")
        if operator == "&":
            if not result:
                return False
            result = check_parsed(property, conditions[i + 1])
        elif operator == "|":
            if result:
                return True
            result = check_parsed(property, conditions[i + 1])
        else:
            raise ValueError(f"Expected '&' or '|', got {operator!r}")
    return result


def check_condition(property: Any, condition: Optional[str]) -> bool:
    """
    判定条件是否成立

    Args:
        property: 属性对象 (dict 或任何提供 get(key) 的对象)
        condition: 条件表达式，空表达式视为成立

    Returns:
        条件是否成立
    """
    if not condition:
        return True
    return check_parsed(property, parse_condition(condition))


def extract_max_triggers(condition: Optional[str]) -> int:
    """
    提取最大触发次数

    只有年龄相关的天赋可以多次触发，次数为 AGE?[...] 中的年龄个数
    """
    if not condition:
        return 1
    match = _AGE_TRIGGER_RE.search(condition)
    if match is None:
        return 1
    return len([age for age in match.group(1).split(",") if age.strip()])
