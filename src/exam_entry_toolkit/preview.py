"""终端预览：按录入界面的预览面板渲染题目"""
from __future__ import annotations
from exam_entry_toolkit.models import Question, QuestionType
from exam_entry_toolkit.stats import DIFFICULTY_LABELS

_MARK = "✅"


def _render_body(q: Question) -> list[str]:
    lines: list[str] = []

    if q.type == QuestionType.MULTIPLE_CHOICE:
        for i, opt in enumerate(q.options):
            mark = f" {_MARK}" if i == q.correct_option_index else ""
            lines.append(f"     {chr(65 + i)}. {opt.text}{mark}")

    elif q.type == QuestionType.TRUE_FALSE:
        lines.append(f"     True{' ' + _MARK if q.correct_answer is True else ''}")
        lines.append(f"     False{' ' + _MARK if q.correct_answer is False else ''}")

    elif q.type == QuestionType.FILL_IN_BLANK:
        for i, blank in enumerate(q.blanks, 1):
            lines.append(f"     空 #{i}  答案: {blank.answer}")
            if blank.alternatives:
                lines.append(f"            备选: {', '.join(blank.alternatives)}")

    elif q.type == QuestionType.MATCHING:
        for pair in q.matching_pairs:
            lines.append(f"     {pair.premise}  →  {pair.response}")

    elif q.type == QuestionType.SHORT_ANSWER:
        lines.append(f"     【参考答案】{q.model_answer or ''}")
        if q.keywords:
            lines.append(f"     【关键词】{' / '.join(q.keywords)}")

    return lines


def render_question(q: Question, index: int) -> list[str]:
    lines = [f"Q{index}. {q.text}"]
    if q.latex:
        lines.append(f"     【公式】{q.latex}")
    if q.image_path:
        lines.append("     【图片】已附加")
    lines.extend(_render_body(q))
    lines.append(f"     [{DIFFICULTY_LABELS[q.difficulty_level]}]")
    return lines


def render_preview(questions: list[Question]) -> list[str]:
    lines: list[str] = []
    for i, q in enumerate(questions, 1):
        if i > 1:
            lines.append("─" * 40)
        lines.extend(render_question(q, i))
    return lines
