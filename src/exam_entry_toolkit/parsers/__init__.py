"""题型解析器注册表：每种题型一个解析器，按块首标记分发"""
from __future__ import annotations
import importlib
import pkgutil
from typing import TYPE_CHECKING

from exam_entry_toolkit.models import QuestionType

if TYPE_CHECKING:
    from exam_entry_toolkit.parsers.base import BaseParser

_REGISTRY: dict[str, type[BaseParser]] = {}
_DISCOVERED = False

# 标签题型按此顺序判定，都不匹配时按单选题处理
DISPATCH_ORDER = [
    QuestionType.TRUE_FALSE,
    QuestionType.FILL_IN_BLANK,
    QuestionType.MATCHING,
    QuestionType.SHORT_ANSWER,
]
DEFAULT_TYPE = QuestionType.MULTIPLE_CHOICE


def _key(name: str) -> str:
    return name.value if isinstance(name, QuestionType) else str(name)


def register(name: str):
    def decorator(cls):
        _REGISTRY[_key(name)] = cls
        return cls
    return decorator


def discover() -> None:
    """导入本包下所有模块，触发 @register"""
    global _DISCOVERED
    if _DISCOVERED:
        return
    for info in pkgutil.iter_modules(__path__):
        if info.name == "base":
            continue
        importlib.import_module(f"{__name__}.{info.name}")
    _DISCOVERED = True


def get_parser(name: str) -> BaseParser:
    discover()
    cls = _REGISTRY.get(_key(name))
    if cls is None:
        raise KeyError(f"未注册的题型解析器: {name}，可用: {sorted(_REGISTRY)}")
    return cls()


def select_parser(block: str) -> BaseParser:
    """按块内标签选择解析器"""
    for qtype in DISPATCH_ORDER:
        parser = get_parser(qtype)
        if parser.can_handle(block):
            return parser
    return get_parser(DEFAULT_TYPE)
