"""录入配置：config.yaml + 默认值"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import yaml
from exam_entry_toolkit.models import DifficultyLevel


def load_yaml(config_path: str | Path) -> dict:
    p = Path(config_path)
    if p.exists():
        return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    return {}


@dataclass
class EntryConfig:
    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM
    image_dirs: list[str] = field(default_factory=list)
    bank: str = "./data/questions.qeb"
    output_dir: str = "./data/output"
    formats: list[str] = field(default_factory=lambda: ["json"])
    db_url: str | None = None

    @classmethod
    def from_dict(cls, raw: dict) -> EntryConfig:
        """缺省或为 null 的项使用默认值；取值非法时抛 ValueError"""
        if not isinstance(raw, dict):
            raise ValueError(f"配置文件顶层应为映射，实际为 {type(raw).__name__}")
        export_cfg = raw.get("export") or {}
        cfg = cls()
        if raw.get("difficulty"):
            try:
                cfg.difficulty = DifficultyLevel(str(raw["difficulty"]).lower())
            except ValueError:
                choices = ", ".join(d.value for d in DifficultyLevel)
                raise ValueError(f"无效的 difficulty: {raw['difficulty']!r}，可选: {choices}")
        cfg.image_dirs = list(raw.get("image_dirs") or [])
        cfg.bank = raw.get("bank") or cfg.bank
        cfg.output_dir = raw.get("output_dir") or cfg.output_dir
        cfg.formats = list(export_cfg.get("formats") or cfg.formats)
        cfg.db_url = (export_cfg.get("database") or {}).get("url")
        return cfg

    @classmethod
    def load(cls, config_path: str | Path) -> EntryConfig:
        try:
            raw = load_yaml(config_path)
        except yaml.YAMLError as e:
            raise ValueError(f"配置文件解析失败: {config_path}: {e}")
        return cls.from_dict(raw)
