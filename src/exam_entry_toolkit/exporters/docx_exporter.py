from __future__ import annotations
import io
from pathlib import Path
from docx import Document
from docx.shared import Pt, RGBColor, Cm
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.oxml import OxmlElement
from docx.image.exceptions import UnrecognizedImageError
from exam_entry_toolkit.images import decode_data_url
from exam_entry_toolkit.models import Question, QuestionType
from exam_entry_toolkit.exporters import register
from exam_entry_toolkit.exporters.base import BaseExporter
from exam_entry_toolkit.stats import DIFFICULTY_LABELS
from exam_entry_toolkit.templates import TYPE_LABELS

FONT_NAME = "宋体"
_ANSWER_COLOR = RGBColor(0, 128, 0)
_MUTED_COLOR  = RGBColor(100, 100, 100)


def _set_font(run, name: str = FONT_NAME, size: Pt | None = None):
    """同时设置中西文字体"""
    run.font.name = name
    r = run._element
    rPr = r.get_or_add_rPr()
    rFonts = rPr.find(qn("w:rFonts"))
    if rFonts is None:
        rFonts = OxmlElement("w:rFonts")
        rPr.insert(0, rFonts)
    rFonts.set(qn("w:eastAsia"), name)
    if size is not None:
        run.font.size = size


def _answer_line(doc, text: str):
    p   = doc.add_paragraph()
    run = p.add_run(text)
    run.font.color.rgb = _ANSWER_COLOR
    _set_font(run)


@register("docx")
class DocxExporter(BaseExporter):

    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fp = output_path.with_suffix(".docx")
        title = kwargs.get("title", "题目汇编")

        doc = Document()
        self._set_default_font(doc)

        doc.add_heading(title, level=0).alignment = WD_ALIGN_PARAGRAPH.CENTER

        for idx, q in enumerate(questions, 1):
            doc.add_heading(
                f"第{idx}题 [{TYPE_LABELS[q.type]}] {DIFFICULTY_LABELS[q.difficulty_level]}",
                level=2,
            )

            p   = doc.add_paragraph()
            run = p.add_run(q.text)
            run.bold = True
            _set_font(run)

            if q.latex:
                # 公式以源码形式保留，由 Word 端自行转换
                p   = doc.add_paragraph()
                run = p.add_run(q.latex)
                run.font.name = "Consolas"
                run.font.size = Pt(10)

            if q.image_path:
                data = decode_data_url(q.image_path)
                if data:
                    try:
                        doc.add_picture(io.BytesIO(data), width=Cm(10))
                    except UnrecognizedImageError:
                        # python-docx 不支持的格式（如 svg）
                        doc.add_paragraph("[图片格式不支持]")

            self._write_body(doc, q)
            doc.add_paragraph("—" * 40)

        doc.save(fp)
        print(f"[INFO] DOCX 导出完成: {fp} ({len(questions)} 题)")

    @staticmethod
    def _write_body(doc, q: Question):
        if q.type == QuestionType.MULTIPLE_CHOICE:
            for i, opt in enumerate(q.options):
                doc.add_paragraph(f"{chr(65 + i)}. {opt.text}", style="List Bullet")
            _answer_line(doc, f"答案: {q.correct_letter or '—'}")

        elif q.type == QuestionType.TRUE_FALSE:
            _answer_line(doc, f"答案: {'正确' if q.correct_answer else '错误'}")

        elif q.type == QuestionType.FILL_IN_BLANK:
            for i, blank in enumerate(q.blanks, 1):
                line = f"第{i}空: {blank.answer or '—'}"
                if blank.alternatives:
                    line += f"（备选: {', '.join(blank.alternatives)}）"
                _answer_line(doc, line)

        elif q.type == QuestionType.MATCHING:
            table = doc.add_table(rows=0, cols=2)
            table.style = "Table Grid"
            for pair in q.matching_pairs:
                cells = table.add_row().cells
                cells[0].text = pair.premise
                cells[1].text = pair.response

        elif q.type == QuestionType.SHORT_ANSWER:
            if q.model_answer:
                _answer_line(doc, f"参考答案: {q.model_answer}")
            if q.keywords:
                p   = doc.add_paragraph()
                run = p.add_run(f"关键词: {', '.join(q.keywords)}")
                run.font.color.rgb = _MUTED_COLOR
                _set_font(run, size=Pt(9))

    @staticmethod
    def _set_default_font(doc: Document):
        """默认样式同时设置东亚字体"""
        style = doc.styles["Normal"]
        style.font.name = FONT_NAME
        style.font.size = Pt(10.5)
        rPr    = style.element.get_or_add_rPr()
        rFonts = rPr.find(qn("w:rFonts"))
        if rFonts is None:
            rFonts = OxmlElement("w:rFonts")
            rPr.insert(0, rFonts)
        rFonts.set(qn("w:eastAsia"), FONT_NAME)
