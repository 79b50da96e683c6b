from __future__ import annotations
from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from exam_entry_toolkit.models import Question
from exam_entry_toolkit.exporters import register
from exam_entry_toolkit.exporters.base import BaseExporter

# 中文表头映射
HEADER_LABELS = {
    "fingerprint":    "指纹",
    "id":             "ID",
    "type":           "题型",
    "difficulty":     "难度",
    "text":           "题目",
    "latex":          "公式",
    "has_image":      "图片",
    "options":        "选项",
    "answer":         "答案",
    "alternatives":   "备选答案",
    "matching_pairs": "匹配项",
    "keywords":       "关键词",
    "model_answer":   "参考答案",
}

COL_WIDTHS = {
    "id":             34,
    "type":           18,
    "text":           50,
    "latex":          30,
    "options":        50,
    "alternatives":   25,
    "matching_pairs": 50,
    "keywords":       30,
    "model_answer":   50,
}

_HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
_WARN_FILL   = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")

# 这些列即使全空也强制保留（核心字段）
_ALWAYS_KEEP = {"type", "difficulty", "text", "answer"}


@register("xlsx")
class XlsxExporter(BaseExporter):

    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fp = output_path.with_suffix(".xlsx")

        rows, columns = self.flatten(questions)

        # ── 剔除全空列 ──
        active_columns = [
            col for col in columns
            if col in _ALWAYS_KEEP
            or any(row.get(col) not in (None, "") for row in rows)
        ]
        hidden = len(columns) - len(active_columns)

        wb = Workbook()
        ws = wb.active
        ws.title = "题目"

        header_font = Font(bold=True, color="FFFFFF")
        answer_col = active_columns.index("answer") + 1

        # 表头
        for col_idx, col_key in enumerate(active_columns, 1):
            cell = ws.cell(row=1, column=col_idx, value=HEADER_LABELS.get(col_key, col_key))
            cell.font = header_font
            cell.fill = _HEADER_FILL
            cell.alignment = Alignment(horizontal="center")

        # 数据行
        for row_idx, row in enumerate(rows, 2):
            for col_idx, col_key in enumerate(active_columns, 1):
                cell = ws.cell(row=row_idx, column=col_idx, value=row.get(col_key, ""))
                cell.alignment = Alignment(wrap_text=True, vertical="top")

            # 单选/填空缺答案 → 浅黄背景提示
            if row["type"] in ("MULTIPLE_CHOICE", "FILL_IN_BLANK") and not row["answer"].strip(", "):
                ws.cell(row=row_idx, column=answer_col).fill = _WARN_FILL

        for col_idx, col_key in enumerate(active_columns, 1):
            letter = get_column_letter(col_idx)
            ws.column_dimensions[letter].width = COL_WIDTHS.get(col_key, 14)

        # 冻结首行
        ws.freeze_panes = "A2"
        last_col = get_column_letter(len(active_columns))
        ws.auto_filter.ref = f"A1:{last_col}{len(rows) + 1}"

        wb.save(fp)

        hidden_note = f", 隐藏空列: {hidden}" if hidden else ""
        print(f"[INFO] XLSX 导出完成: {fp} ({len(rows)} 行, {len(active_columns)} 列{hidden_note})")
