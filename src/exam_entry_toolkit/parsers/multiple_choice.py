from __future__ import annotations
import re
from exam_entry_toolkit.models import Option, Question, QuestionType
from exam_entry_toolkit.parsers import register
from exam_entry_toolkit.parsers.base import BaseParser

# 题干：Q<n>. 之后，到第一个选项行（A.~D.）或块尾
STEM_RE = re.compile(r"Q\d+\.\s*(.*?)(?=^[ \t]*[A-D]\.|\Z)", re.DOTALL | re.MULTILINE)
OPTION_RE = re.compile(r"^[ \t]*([A-D])\.[ \t]*(\S[^\n]*)$", re.MULTILINE)
ANSWER_RE = re.compile(r"Answer:\s*([A-D])")


@register(QuestionType.MULTIPLE_CHOICE)
class MultipleChoiceParser(BaseParser):
    """Q1. 题干 / A.~D. 选项 / Answer: 字母"""

    question_type = QuestionType.MULTIPLE_CHOICE

    def can_handle(self, block: str) -> bool:
        return STEM_RE.search(block) is not None

    def parse(self, block: str) -> Question | None:
        m = STEM_RE.search(block)
        if not m:
            return None

        options = [Option(text=text.strip()) for _, text in OPTION_RE.findall(block)]

        # 无 Answer 行时保持 None，表示未标注正确答案
        correct = None
        am = ANSWER_RE.search(block)
        if am:
            correct = ord(am.group(1)) - ord("A")

        return Question(
            type=self.question_type,
            text=m.group(1).strip(),
            options=options,
            correct_option_index=correct,
        )
