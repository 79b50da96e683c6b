from __future__ import annotations
import re
from exam_entry_toolkit.models import Question, QuestionType
from exam_entry_toolkit.parsers import register
from exam_entry_toolkit.parsers.base import TaggedParser

ANSWER_RE = re.compile(r"Answer:\s*(\w+)", re.IGNORECASE)


@register(QuestionType.TRUE_FALSE)
class TrueFalseParser(TaggedParser):
    """[TRUE_FALSE] 题干 / Answer: true|false"""

    question_type = QuestionType.TRUE_FALSE
    stop = "Answer:"

    def parse(self, block: str) -> Question | None:
        stem = self._stem(block)
        if stem is None:
            return None
        # 只有 true（不区分大小写）算对，缺失或其他值一律 False
        am = ANSWER_RE.search(block)
        correct = bool(am) and am.group(1).lower() == "true"
        return Question(type=self.question_type, text=stem, correct_answer=correct)
