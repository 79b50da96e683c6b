"""
批量录入解析
============
把一段纯文本拆成若干题目块，逐块识别题型、提取字段，
再统一处理题干中的 latex / image 指令。

    Q1. 题干            → 单选题
    [TRUE_FALSE] ...    → 判断题
    [FILL_IN_BLANK] ... → 填空题
    [MATCHING] ...      → 匹配题
    [SHORT_ANSWER] ...  → 简答题

无法识别的块静默丢弃，任何输入都不抛异常。
"""
from __future__ import annotations
import logging
import re
from exam_entry_toolkit.directives import strip_directives
from exam_entry_toolkit.models import DifficultyLevel, ImageMap, Question
from exam_entry_toolkit.parsers import select_parser

logger = logging.getLogger(__name__)

# 零宽切分：分隔标记保留在下一块开头
BLOCK_SPLIT_RE = re.compile(
    r"(?=Q\d+\.|\[(?:TRUE_FALSE|FILL_IN_BLANK|MATCHING|SHORT_ANSWER)\])"
)


def split_blocks(text: str) -> list[str]:
    """按题目标记切块，去掉空白块"""
    return [block for block in BLOCK_SPLIT_RE.split(text) if block.strip()]


def parse_block(
    block: str,
    images: ImageMap,
    difficulty: DifficultyLevel | str = DifficultyLevel.MEDIUM,
) -> Question | None:
    parser = select_parser(block)
    q = parser.parse(block)
    if q is None:
        logger.debug("未识别的文本块，跳过: %r", block[:60])
        return None

    # 指令处理对所有题型统一进行
    d = strip_directives(q.text, images)
    q.text = d.text
    q.latex = d.latex
    q.image_path = d.image_path
    q.difficulty_level = DifficultyLevel(difficulty)

    if not q.text:
        logger.debug("题干为空，跳过 %s 块", q.type.value)
        return None
    return q


def parse_questions(
    text: str,
    images: ImageMap | None = None,
    default_difficulty: DifficultyLevel | str = DifficultyLevel.MEDIUM,
) -> list[Question]:
    """
    解析批量录入文本，按原文顺序返回题目列表。

    images: 图片名 → data URL，供 [image: 名称] 指令引用
    default_difficulty: 录入界面当前选择的难度，所有题目共用
    """
    if not text:
        return []
    images = images or {}
    difficulty = DifficultyLevel(default_difficulty)
    questions: list[Question] = []
    for block in split_blocks(text):
        q = parse_block(block, images, difficulty)
        if q is not None:
            questions.append(q)
    logger.debug("解析完成: %d 题", len(questions))
    return questions
