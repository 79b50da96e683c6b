"""
手动录入会话：预览 / 保存两步流程。

解析器本身不抛异常；这里兜底意外错误并转换为面向用户的提示，
结果为空时单独报告“未找到题目”。失败时不向存储端交付任何题目。
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, Iterable
from exam_entry_toolkit.block_parser import parse_questions
from exam_entry_toolkit.images import load_images
from exam_entry_toolkit.models import DifficultyLevel, Question, QuestionType
from exam_entry_toolkit.templates import insert_template

logger = logging.getLogger(__name__)


class EntryError(Exception):
    pass


class ParseFailedError(EntryError):
    def __init__(self, message: str = "题目解析失败，请检查格式"):
        super().__init__(message)


class NoQuestionsFoundError(EntryError):
    def __init__(self, message: str = "未找到有效题目，请检查格式"):
        super().__init__(message)


class ManualEntry:

    def __init__(
        self,
        text: str = "",
        images: dict[str, str] | None = None,
        difficulty: DifficultyLevel = DifficultyLevel.MEDIUM,
    ):
        self.text = text
        self.images: dict[str, str] = dict(images or {})
        self.difficulty = DifficultyLevel(difficulty)
        self.preview_questions: list[Question] = []

    def add_images(self, paths: Iterable[str | Path]) -> int:
        """导入图片，返回新增/覆盖的数量"""
        loaded = load_images(paths)
        self.images.update(loaded)
        return len(loaded)

    def insert_template(self, question_type: QuestionType | str) -> str:
        self.text = insert_template(self.text, question_type)
        return self.text

    def _parse(self) -> list[Question]:
        try:
            # 传入快照，解析期间图片表不会被改动
            return parse_questions(self.text, dict(self.images), self.difficulty)
        except Exception as e:
            logger.exception("解析异常")
            raise ParseFailedError() from e

    def preview(self) -> list[Question]:
        self.preview_questions = self._parse()
        return self.preview_questions

    def submit(self, sink: Callable[[Question], object]) -> list[Question]:
        """有预览结果时直接提交预览，否则重新解析"""
        questions = self.preview_questions or self._parse()
        if not questions:
            raise NoQuestionsFoundError()
        for q in questions:
            sink(q)
        logger.info("已提交 %d 题", len(questions))
        return questions
