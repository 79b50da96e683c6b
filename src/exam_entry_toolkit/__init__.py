"""纯文本批量录入题目：解析、预览、入库、导出"""
from exam_entry_toolkit.block_parser import parse_questions
from exam_entry_toolkit.models import (
    Blank, DifficultyLevel, MatchingPair, Option, Question, QuestionType,
)

__version__ = "0.1.0"

__all__ = [
    "parse_questions",
    "Question", "QuestionType", "DifficultyLevel",
    "Option", "Blank", "MatchingPair",
]
