from __future__ import annotations
import re
from exam_entry_toolkit.models import MatchingPair, Question, QuestionType
from exam_entry_toolkit.parsers import register
from exam_entry_toolkit.parsers.base import TaggedParser

PAIR_RE = re.compile(r"^\s*\d+\.\s+([^|]*?)\s*\|\s*(.*?)\s*$")


@register(QuestionType.MATCHING)
class MatchingParser(TaggedParser):
    """[MATCHING] 题干 / 每行 n. 前项 | 后项"""

    question_type = QuestionType.MATCHING
    stop = r"^[ \t]*\d+\."

    def parse(self, block: str) -> Question | None:
        stem = self._stem(block)
        if stem is None:
            return None

        pairs: list[MatchingPair] = []
        for line in block.splitlines():
            m = PAIR_RE.match(line)
            if not m:
                continue
            premise, response = m.group(1).strip(), m.group(2).strip()
            if premise and response:
                pairs.append(MatchingPair(premise=premise, response=response))

        return Question(type=self.question_type, text=stem, matching_pairs=pairs)
