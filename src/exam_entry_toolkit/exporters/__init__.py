from __future__ import annotations
import importlib
import pkgutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from exam_entry_toolkit.exporters.base import BaseExporter

_REGISTRY: dict[str, type[BaseExporter]] = {}
_DISCOVERED = False


def register(name: str):
    def decorator(cls):
        _REGISTRY[name] = cls
        return cls
    return decorator


def discover() -> None:
    global _DISCOVERED
    if _DISCOVERED:
        return
    for info in pkgutil.iter_modules(__path__):
        if info.name != "base":
            importlib.import_module(f"{__name__}.{info.name}")
    _DISCOVERED = True


def get_exporter(name: str) -> BaseExporter:
    discover()
    if name not in _REGISTRY:
        raise KeyError(f"不支持的导出格式: {name}，可用: {', '.join(sorted(_REGISTRY))}")
    return _REGISTRY[name]()
