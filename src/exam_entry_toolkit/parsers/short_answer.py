from __future__ import annotations
import re
from exam_entry_toolkit.models import Question, QuestionType
from exam_entry_toolkit.parsers import register
from exam_entry_toolkit.parsers.base import TaggedParser, split_list

KEYWORDS_RE = re.compile(r"Keywords:\s*(.+?)(?=Model Answer:|\Z)", re.DOTALL)
MODEL_ANSWER_RE = re.compile(r"Model Answer:\s*(.+)\Z", re.DOTALL)


@register(QuestionType.SHORT_ANSWER)
class ShortAnswerParser(TaggedParser):
    """[SHORT_ANSWER] 题干 / Keywords: 逗号分隔 / Model Answer: 参考答案"""

    question_type = QuestionType.SHORT_ANSWER
    stop = "Keywords:"

    def parse(self, block: str) -> Question | None:
        stem = self._stem(block)
        if stem is None:
            return None

        q = Question(type=self.question_type, text=stem)
        km = KEYWORDS_RE.search(block)
        if km:
            q.keywords = split_list(km.group(1))
        mm = MODEL_ANSWER_RE.search(block)
        if mm:
            q.model_answer = mm.group(1).strip()
        return q
