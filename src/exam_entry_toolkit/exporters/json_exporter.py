from __future__ import annotations
import json
from pathlib import Path
from dataclasses import asdict
from exam_entry_toolkit.models import Question
from exam_entry_toolkit.exporters import register
from exam_entry_toolkit.exporters.base import BaseExporter


def question_to_dict(q: Question) -> dict:
    d = asdict(q)
    d["type"] = q.type.value
    d["difficulty_level"] = q.difficulty_level.value
    return d


@register("json")
class JsonExporter(BaseExporter):

    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fp = output_path.with_suffix(".json")

        # 图片 data URL 体积大，默认不写入
        include_images = kwargs.get("include_images", False)
        data = []
        for q in questions:
            d = question_to_dict(q)
            if not include_images and d.get("image_path"):
                d["image_path"] = "<embedded>"
            data.append(d)

        fp.write_text(
            json.dumps(data, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        print(f"[INFO] JSON 导出完成: {fp} ({len(data)} 题)")
