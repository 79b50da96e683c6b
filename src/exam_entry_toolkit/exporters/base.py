from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from exam_entry_toolkit.models import Question, QuestionType

COLUMNS = [
    "fingerprint", "id", "type", "difficulty", "text", "latex", "has_image",
    "options", "answer", "alternatives", "matching_pairs",
    "keywords", "model_answer",
]


def answer_text(q: Question) -> str:
    """各题型答案的单行文本"""
    if q.type == QuestionType.MULTIPLE_CHOICE:
        return q.correct_letter
    if q.type == QuestionType.TRUE_FALSE:
        return "true" if q.correct_answer else "false"
    if q.type == QuestionType.FILL_IN_BLANK:
        return ", ".join(b.answer for b in q.blanks)
    if q.type == QuestionType.SHORT_ANSWER:
        return q.model_answer or ""
    return ""


class BaseExporter(ABC):

    @abstractmethod
    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        ...

    @staticmethod
    def flatten(questions: list[Question]) -> tuple[list[dict], list[str]]:
        """
        展平为行记录，每题一行。

        options        → "A. x | B. y"
        alternatives   → 第一个空的备选（所有空共用）
        matching_pairs → "前项 = 后项" 用 " | " 连接
        """
        rows = []
        for q in questions:
            rows.append({
                "fingerprint":    q.fingerprint,
                "id":             q.id,
                "type":           q.type.value,
                "difficulty":     q.difficulty_level.value,
                "text":           q.text,
                "latex":          q.latex or "",
                "has_image":      "Y" if q.image_path else "",
                "options":        " | ".join(
                    f"{chr(65 + i)}. {o.text}" for i, o in enumerate(q.options)
                ),
                "answer":         answer_text(q),
                "alternatives":   ", ".join(q.blanks[0].alternatives) if q.blanks else "",
                "matching_pairs": " | ".join(
                    f"{p.premise} = {p.response}" for p in q.matching_pairs
                ),
                "keywords":       ", ".join(q.keywords),
                "model_answer":   q.model_answer or "",
            })
        return rows, list(COLUMNS)
