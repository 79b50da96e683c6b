"""题目 → 录入文本（与 block_parser 互逆）"""
from __future__ import annotations
from typing import Iterable, Mapping
from exam_entry_toolkit.models import Question, QuestionType
from exam_entry_toolkit.parsers.multiple_choice import ANSWER_RE
from exam_entry_toolkit.parsers.short_answer import MODEL_ANSWER_RE


def _stem(q: Question, image_names: Mapping[str, str]) -> str:
    parts = [q.text]
    if q.latex is not None:
        parts.append(f"[latex: {q.latex}]")
    if q.image_path and q.image_path in image_names:
        parts.append(f"[image: {image_names[q.image_path]}]")
    return " ".join(parts)


def to_text(
    q: Question,
    number: int = 1,
    image_names: Mapping[str, str] | None = None,
) -> str:
    """
    把一道题还原为录入格式。

    image_names: data URL → 图片名，用于还原 [image: ...]；
    找不到时图片指令不输出。难度不写入文本。
    """
    stem = _stem(q, image_names or {})
    lines: list[str]

    if q.type == QuestionType.TRUE_FALSE:
        lines = [f"[TRUE_FALSE] {stem}", f"Answer: {'true' if q.correct_answer else 'false'}"]

    elif q.type == QuestionType.FILL_IN_BLANK:
        lines = [f"[FILL_IN_BLANK] {stem}"]
        if q.blanks:
            lines.append("Answer: " + ", ".join(b.answer for b in q.blanks))
            # 所有空共用一份备选答案
            if q.blanks[0].alternatives:
                lines.append("Alternatives: " + ", ".join(q.blanks[0].alternatives))

    elif q.type == QuestionType.MATCHING:
        lines = [f"[MATCHING] {stem}"]
        lines += [f"{i}. {p.premise} | {p.response}" for i, p in enumerate(q.matching_pairs, 1)]

    elif q.type == QuestionType.SHORT_ANSWER:
        lines = [f"[SHORT_ANSWER] {stem}"]
        if q.keywords:
            lines.append("Keywords: " + ", ".join(q.keywords))
        # 无 Keywords 行时题干延伸到块尾，参考答案已在题干里
        if q.model_answer and not MODEL_ANSWER_RE.search(q.text):
            lines.append(f"Model Answer: {q.model_answer}")

    else:
        lines = [f"Q{number}. {stem}"]
        lines += [f"{chr(65 + i)}. {opt.text}" for i, opt in enumerate(q.options)]
        # 同理，无选项时 Answer 行已留在题干里
        if q.correct_option_index is not None and not ANSWER_RE.search(q.text):
            lines.append(f"Answer: {q.correct_letter}")

    return "\n".join(lines)


def to_text_all(
    questions: Iterable[Question],
    image_names: Mapping[str, str] | None = None,
) -> str:
    """单选题按出现顺序编号 Q1. Q2. ...，题目之间空一行"""
    blocks = []
    mc_no = 0
    for q in questions:
        if q.type == QuestionType.MULTIPLE_CHOICE:
            mc_no += 1
        blocks.append(to_text(q, number=mc_no or 1, image_names=image_names))
    return "\n\n".join(blocks)
