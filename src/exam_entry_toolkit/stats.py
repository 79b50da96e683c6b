"""题目统计"""
from __future__ import annotations
from collections import Counter
import unicodedata
from exam_entry_toolkit.models import DifficultyLevel, Question, QuestionType
from exam_entry_toolkit.templates import TYPE_LABELS

DIFFICULTY_LABELS = {
    DifficultyLevel.EASY: "简单",
    DifficultyLevel.MEDIUM: "中等",
    DifficultyLevel.HARD: "困难",
}


def _display_width(s: str) -> int:
    """计算字符串在终端的显示宽度"""
    return sum(2 if unicodedata.east_asian_width(c) in ("F", "W") else 1 for c in s)


def _pad_right(s: str, width: int) -> str:
    """按显示宽度右补空格"""
    return s + " " * (width - _display_width(s))


def summarize(questions: list[Question]) -> dict:
    by_type = Counter(q.type for q in questions)
    by_difficulty = Counter(q.difficulty_level for q in questions)

    return {
        "total": len(questions),
        "by_type": {
            TYPE_LABELS[t]: by_type[t] for t in QuestionType if by_type.get(t)
        },
        "by_difficulty": {
            DIFFICULTY_LABELS[d]: by_difficulty[d] for d in DifficultyLevel if by_difficulty.get(d)
        },
        "with_latex": sum(1 for q in questions if q.latex),
        "with_image": sum(1 for q in questions if q.image_path),
        "mc_no_answer": sum(
            1 for q in questions
            if q.type == QuestionType.MULTIPLE_CHOICE and q.correct_option_index is None
        ),
        "empty_blanks": sum(
            1 for q in questions for b in q.blanks if not b.answer
        ),
    }


def print_summary(questions: list[Question]) -> None:
    """打印统计摘要到终端"""
    s = summarize(questions)
    total = s["total"] or 1
    print(f"\n{'='*50}")
    print("📊 题目统计")
    print(f"{'='*50}")
    print(f"总题数: {s['total']}")

    def _print_section(title: str, data: dict):
        print(f"\n{title}:")
        if not data:
            print("  (无数据)")
            return
        col_width = max(_display_width(k) for k in data) + 2
        max_count = max(data.values())
        for key, count in data.items():
            bar = "■" * round(count / max_count * 20)
            print(f"  {_pad_right(key, col_width)} {count:>5d} ({count / total * 100:>5.1f}%) {bar}")

    _print_section("按题型", s["by_type"])
    _print_section("按难度", s["by_difficulty"])

    print(f"\n含公式: {s['with_latex']}    含图片: {s['with_image']}")
    if s["mc_no_answer"]:
        print(f"⚠️  未标注答案的单选题: {s['mc_no_answer']} 道")
    if s["empty_blanks"]:
        print(f"⚠️  缺少答案的填空: {s['empty_blanks']} 个")
    print(f"{'='*50}\n")
