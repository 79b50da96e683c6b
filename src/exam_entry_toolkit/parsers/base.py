from __future__ import annotations
import re
from abc import ABC, abstractmethod
from exam_entry_toolkit.models import Question, QuestionType


def split_list(raw: str) -> list[str]:
    """逗号分隔列表，逐项去空白（空项保留）"""
    return [item.strip() for item in raw.split(",")]


class BaseParser(ABC):
    """单个题型的字段提取器"""

    question_type: QuestionType

    @abstractmethod
    def can_handle(self, block: str) -> bool:
        ...

    @abstractmethod
    def parse(self, block: str) -> Question | None:
        """
        从一个文本块提取题干和题型字段。

        返回的 Question.text 为未处理指令的原始题干；
        找不到题干标记时返回 None，该块被丢弃。
        """
        ...


class TaggedParser(BaseParser):
    """以 [TAG] 开头的题型，题干截止于 stop 指定的关键字"""

    stop: str = r"\Z"

    @property
    def marker(self) -> str:
        return f"[{self.question_type.value}]"

    def can_handle(self, block: str) -> bool:
        return self.marker in block

    def _stem(self, block: str) -> str | None:
        pattern = rf"{re.escape(self.marker)}\s*(.*?)(?={self.stop}|\Z)"
        m = re.search(pattern, block, re.DOTALL | re.MULTILINE)
        if not m:
            return None
        return m.group(1).strip()
