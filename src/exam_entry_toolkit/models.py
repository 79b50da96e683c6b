from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

# 图片名 → 图片内容（data URL），由调用方提供，解析器只读
ImageMap = Mapping[str, str]


def new_id() -> str:
    return uuid.uuid4().hex


class QuestionType(str, Enum):
    """题型"""
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    TRUE_FALSE = "TRUE_FALSE"
    FILL_IN_BLANK = "FILL_IN_BLANK"
    MATCHING = "MATCHING"
    SHORT_ANSWER = "SHORT_ANSWER"


class DifficultyLevel(str, Enum):
    """难度，由录入时的选择决定，不从文本推断"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass
class Option:
    """单选题选项，顺序即 A/B/C/D"""
    text: str
    id: str = field(default_factory=new_id)


@dataclass
class Blank:
    """填空题的一个空"""
    answer: str
    alternatives: list[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)


@dataclass
class MatchingPair:
    premise: str
    response: str
    id: str = field(default_factory=new_id)


@dataclass
class Question:
    """统一题目模型，五种题型共用，按 type 填充对应字段"""
    type: QuestionType = QuestionType.MULTIPLE_CHOICE
    text: str = ""                                   # 题干（已去除 latex/image 指令）
    difficulty_level: DifficultyLevel = DifficultyLevel.MEDIUM
    id: str = field(default_factory=new_id)
    latex: str | None = None
    image_path: str | None = None                    # 图片 data URL
    # MULTIPLE_CHOICE
    options: list[Option] = field(default_factory=list)
    correct_option_index: int | None = None          # None = 未标注答案
    # TRUE_FALSE
    correct_answer: bool | None = None
    # FILL_IN_BLANK
    blanks: list[Blank] = field(default_factory=list)
    # MATCHING
    matching_pairs: list[MatchingPair] = field(default_factory=list)
    # SHORT_ANSWER
    keywords: list[str] = field(default_factory=list)
    model_answer: str | None = None
    fingerprint: str = ""                            # 去重指纹，由 dedup 模块填充

    @property
    def correct_letter(self) -> str:
        """单选题正确答案字母，未标注时为空"""
        if self.correct_option_index is None:
            return ""
        return chr(ord("A") + self.correct_option_index)

    @property
    def correct_option(self) -> Option | None:
        idx = self.correct_option_index
        if idx is None or not 0 <= idx < len(self.options):
            return None
        return self.options[idx]
