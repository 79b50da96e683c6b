"""各题型录入模板与格式说明"""
from __future__ import annotations
from exam_entry_toolkit.models import QuestionType

TEMPLATES: dict[QuestionType, str] = {
    QuestionType.MULTIPLE_CHOICE: (
        "Q1. What is the capital of France?\n"
        "A. Berlin\n"
        "B. Paris\n"
        "C. London\n"
        "D. Madrid\n"
        "Answer: B"
    ),
    QuestionType.TRUE_FALSE: (
        "[TRUE_FALSE] The Earth is flat.\n"
        "Answer: false"
    ),
    QuestionType.FILL_IN_BLANK: (
        "[FILL_IN_BLANK] The process of photosynthesis occurs in the [___] of plant cells.\n"
        "Answer: chloroplasts\n"
        "Alternatives: chloroplast, Chloroplasts"
    ),
    QuestionType.MATCHING: (
        "[MATCHING] Match the following elements with their properties:\n"
        "1. Oxygen | Essential for breathing\n"
        "2. Hydrogen | Lightest element\n"
        "3. Carbon | Basic building block of life\n"
        "4. Nitrogen | Main component of air"
    ),
    QuestionType.SHORT_ANSWER: (
        "[SHORT_ANSWER] Explain the process of photosynthesis.\n"
        "Keywords: sunlight, chlorophyll, carbon dioxide, water, glucose, oxygen\n"
        "Model Answer: Photosynthesis is the process where plants use sunlight, "
        "chlorophyll, carbon dioxide, and water to produce glucose and oxygen."
    ),
}

TYPE_LABELS = {
    QuestionType.MULTIPLE_CHOICE: "单选题",
    QuestionType.TRUE_FALSE: "判断题",
    QuestionType.FILL_IN_BLANK: "填空题",
    QuestionType.MATCHING: "匹配题",
    QuestionType.SHORT_ANSWER: "简答题",
}


def get_template(question_type: QuestionType | str) -> str:
    """未知题型回退到单选题模板"""
    try:
        qtype = QuestionType(question_type)
    except ValueError:
        qtype = QuestionType.MULTIPLE_CHOICE
    return TEMPLATES[qtype]


def insert_template(current: str, question_type: QuestionType | str) -> str:
    """在已有文本后追加模板，中间空一行"""
    sep = "\n\n" if current else ""
    return current + sep + get_template(question_type)


def _guide() -> str:
    lines = ["格式说明", "=" * 40]
    for qtype, tpl in TEMPLATES.items():
        lines.append(f"\n【{TYPE_LABELS[qtype]}】")
        lines.extend(f"  {line}" for line in tpl.splitlines())
    lines += [
        "",
        "• 公式: [latex: \\frac{x}{2}]",
        "• 图片: [image: filename.png]（需先导入图片）",
    ]
    return "\n".join(lines)


FORMAT_GUIDE = _guide()
