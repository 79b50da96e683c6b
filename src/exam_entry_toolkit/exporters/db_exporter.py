from __future__ import annotations
import json
from dataclasses import asdict
from pathlib import Path
from sqlalchemy import create_engine, Column, String, Text, Integer, MetaData, Table
from sqlalchemy.orm import Session
from exam_entry_toolkit.dedup import compute_fingerprint
from exam_entry_toolkit.models import Question
from exam_entry_toolkit.exporters import register
from exam_entry_toolkit.exporters.base import BaseExporter, answer_text


def _build_table(metadata: MetaData) -> Table:
    return Table(
        "questions", metadata,
        Column("id",                   String(32), primary_key=True),
        Column("fingerprint",          String(32), unique=True, index=True),
        Column("type",                 String(32), index=True),
        Column("difficulty",           String(16)),
        Column("text",                 Text),
        Column("latex",                Text),
        Column("image",                Text),
        Column("correct_option_index", Integer),
        Column("answer",               Text),
        Column("detail_json",          Text),
    )


@register("db")
class DbExporter(BaseExporter):

    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        db_url = kwargs.get("db_url") or f"sqlite:///{output_path.with_suffix('.db')}"
        if db_url.startswith("sqlite:///"):
            output_path.parent.mkdir(parents=True, exist_ok=True)
        engine   = create_engine(db_url, echo=False)
        metadata = MetaData()
        table    = _build_table(metadata)
        metadata.create_all(engine)

        rows = []
        for q in questions:
            detail = asdict(q)
            for key in ("id", "fingerprint", "text", "latex", "image_path"):
                detail.pop(key, None)
            rows.append({
                "id":                   q.id,
                "fingerprint":          q.fingerprint or compute_fingerprint(q),
                "type":                 q.type.value,
                "difficulty":           q.difficulty_level.value,
                "text":                 q.text,
                "latex":                q.latex,
                "image":                q.image_path,
                "correct_option_index": q.correct_option_index,
                "answer":               answer_text(q),
                "detail_json":          json.dumps(detail, ensure_ascii=False, default=str),
            })

        with Session(engine) as session:
            conn = session.connection()
            existing = {row.fingerprint for row in conn.execute(table.select())}
            new_rows = []
            for r in rows:
                if r["fingerprint"] not in existing:
                    existing.add(r["fingerprint"])
                    new_rows.append(r)
            if new_rows:
                conn.execute(table.insert(), new_rows)
            session.commit()

        print(f"[INFO] 数据库导出完成: {db_url} (新增 {len(new_rows)}/{len(rows)} 行)")
