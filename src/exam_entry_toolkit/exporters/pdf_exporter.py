from __future__ import annotations
import io
import logging
from pathlib import Path
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, HRFlowable, Image
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from exam_entry_toolkit.images import decode_data_url
from exam_entry_toolkit.models import Question, QuestionType
from exam_entry_toolkit.exporters import register
from exam_entry_toolkit.exporters.base import BaseExporter
from exam_entry_toolkit.stats import DIFFICULTY_LABELS
from exam_entry_toolkit.templates import TYPE_LABELS

logger = logging.getLogger(__name__)

_FONT_REGISTERED = False
_ANSWER_COLOR    = colors.HexColor("#008000")
_MAX_IMAGE_WIDTH = 120 * mm


def _ensure_font():
    global _FONT_REGISTERED
    if _FONT_REGISTERED:
        return
    font_paths = [
        "/usr/share/fonts/truetype/wqy/wqy-microhei.ttc",
        "/usr/share/fonts/wqy-microhei/wqy-microhei.ttc",
        "C:/Windows/Fonts/msyh.ttc",
        "/System/Library/Fonts/PingFang.ttc",
    ]
    for fp in font_paths:
        if Path(fp).exists():
            try:
                pdfmetrics.registerFont(TTFont("ChineseFont", fp))
                _FONT_REGISTERED = True
                return
            except Exception:
                continue
    logger.warning("未找到中文字体，PDF 中文可能显示异常")


def _image_flowable(data_url: str) -> Image | None:
    """data URL → 按最大宽度等比缩放的图片，无法识别时返回 None"""
    data = decode_data_url(data_url)
    if not data:
        return None
    try:
        w, h = ImageReader(io.BytesIO(data)).getSize()
    except Exception:
        logger.warning("无法识别的图片格式，已跳过")
        return None
    scale = min(1.0, _MAX_IMAGE_WIDTH / w) if w else 1.0
    return Image(io.BytesIO(data), width=w * scale, height=h * scale)


@register("pdf")
class PdfExporter(BaseExporter):

    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fp = output_path.with_suffix(".pdf")
        show_answers = kwargs.get("show_answers", True)
        _ensure_font()

        font_name = "ChineseFont" if _FONT_REGISTERED else "Helvetica"

        doc = SimpleDocTemplate(
            str(fp), pagesize=A4,
            leftMargin=20*mm, rightMargin=20*mm,
            topMargin=15*mm,  bottomMargin=15*mm,
        )

        styles = getSampleStyleSheet()
        styles.add(ParagraphStyle(name="CN",
            fontName=font_name, fontSize=10, leading=14))
        styles.add(ParagraphStyle(name="CNBold",
            fontName=font_name, fontSize=11, leading=15, spaceAfter=4))
        styles.add(ParagraphStyle(name="CNSmall",
            fontName=font_name, fontSize=9, leading=12, textColor="grey"))
        styles.add(ParagraphStyle(name="CNAnswer",
            fontName=font_name, fontSize=10, leading=14, textColor=_ANSWER_COLOR))
        styles.add(ParagraphStyle(name="Latex",
            fontName="Courier", fontSize=9, leading=12, leftIndent=8*mm))

        story = []
        story.append(Paragraph(_esc(kwargs.get("title", "题目汇编")), ParagraphStyle(
            name="Title", fontName=font_name, fontSize=18, leading=24, alignment=1,
        )))
        story.append(Spacer(1, 10*mm))

        for idx, q in enumerate(questions, 1):
            story.append(Paragraph(
                f"第{idx}题 [{TYPE_LABELS[q.type]}] "
                f"<font size=8 color='grey'>{DIFFICULTY_LABELS[q.difficulty_level]}</font>",
                styles["CNSmall"],
            ))
            story.append(Paragraph(_esc(q.text), styles["CNBold"]))

            if q.latex:
                story.append(Paragraph(_esc(q.latex), styles["Latex"]))

            if q.image_path:
                img = _image_flowable(q.image_path)
                if img is not None:
                    story.append(img)
                    story.append(Spacer(1, 2*mm))

            story.extend(self._body(q, styles, show_answers))

            story.append(Spacer(1, 2*mm))
            story.append(HRFlowable(width="100%", thickness=0.5, color="grey"))
            story.append(Spacer(1, 4*mm))

        doc.build(story)
        print(f"[INFO] PDF 导出完成: {fp} ({len(questions)} 题)")

    @staticmethod
    def _body(q: Question, styles, show_answers: bool) -> list:
        flow = []
        if q.type == QuestionType.MULTIPLE_CHOICE:
            for i, opt in enumerate(q.options):
                flow.append(Paragraph(f"    {chr(65 + i)}. {_esc(opt.text)}", styles["CN"]))
            if show_answers and q.correct_letter:
                flow.append(Paragraph(f"答案: {q.correct_letter}", styles["CNAnswer"]))

        elif q.type == QuestionType.TRUE_FALSE:
            flow.append(Paragraph("    ( ) True    ( ) False", styles["CN"]))
            if show_answers:
                flow.append(Paragraph(
                    f"答案: {'True' if q.correct_answer else 'False'}", styles["CNAnswer"],
                ))

        elif q.type == QuestionType.FILL_IN_BLANK:
            if show_answers:
                for i, blank in enumerate(q.blanks, 1):
                    alt = f"（备选: {_esc(', '.join(blank.alternatives))}）" if blank.alternatives else ""
                    flow.append(Paragraph(f"第{i}空: {_esc(blank.answer)}{alt}", styles["CNAnswer"]))

        elif q.type == QuestionType.MATCHING:
            for i, pair in enumerate(q.matching_pairs, 1):
                arrow = f" → {_esc(pair.response)}" if show_answers else ""
                flow.append(Paragraph(f"    {i}. {_esc(pair.premise)}{arrow}", styles["CN"]))
            if not show_answers:
                # 不显示答案时，后项按字母顺序列出供作答
                for i, resp in enumerate(sorted(p.response for p in q.matching_pairs)):
                    flow.append(Paragraph(f"    {chr(97 + i)}) {_esc(resp)}", styles["CN"]))

        elif q.type == QuestionType.SHORT_ANSWER and show_answers:
            if q.model_answer:
                flow.append(Paragraph(f"参考答案: {_esc(q.model_answer)}", styles["CNAnswer"]))
            if q.keywords:
                flow.append(Paragraph(f"关键词: {_esc(', '.join(q.keywords))}", styles["CNSmall"]))

        return flow


def _esc(text: str) -> str:
    """转义 XML 特殊字符，防止 reportlab 解析出错"""
    return (text
            .replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;"))
