from __future__ import annotations
import re
from exam_entry_toolkit.models import Blank, Question, QuestionType
from exam_entry_toolkit.parsers import register
from exam_entry_toolkit.parsers.base import TaggedParser, split_list

BLANK_MARKER = "[___]"
ANSWER_RE = re.compile(r"Answer:\s*(.+?)(?=Alternatives:|\Z)", re.DOTALL)
ALTERNATIVES_RE = re.compile(r"Alternatives:\s*(.+)\Z", re.DOTALL)


@register(QuestionType.FILL_IN_BLANK)
class FillInBlankParser(TaggedParser):
    """
    [FILL_IN_BLANK] 含 [___] 的题干
    Answer: 逗号分隔，按顺序对应每个空
    Alternatives: 逗号分隔，所有空共用同一份
    """

    question_type = QuestionType.FILL_IN_BLANK
    stop = "Answer:"

    def parse(self, block: str) -> Question | None:
        stem = self._stem(block)
        if stem is None:
            return None

        blanks: list[Blank] = []
        am = ANSWER_RE.search(block)
        if am:
            answers = split_list(am.group(1))
            alt_m = ALTERNATIVES_RE.search(block)
            for i in range(stem.count(BLANK_MARKER)):
                blanks.append(Blank(
                    # 答案不够时补空串
                    answer=answers[i] if i < len(answers) else "",
                    alternatives=split_list(alt_m.group(1)) if alt_m else [],
                ))

        return Question(type=self.question_type, text=stem, blanks=blanks)
