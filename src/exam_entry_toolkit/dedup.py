from __future__ import annotations
import hashlib
import logging
import re
from exam_entry_toolkit.models import Question, QuestionType

logger = logging.getLogger(__name__)


def _normalize_text(text: str | None) -> str:
    """去除空白，统一中英文标点和大小写，用于指纹计算"""
    text = re.sub(r"\s+", "", text or "")
    text = text.replace("，", ",").replace("。", ".").replace("；", ";")
    text = text.replace("：", ":").replace("（", "(").replace("）", ")")
    return text.lower()


def _answer_parts(q: Question) -> list[str]:
    """各题型参与指纹的答案内容"""
    if q.type == QuestionType.MULTIPLE_CHOICE:
        # 选项排序 + 正确选项文本，消除选项顺序差异
        parts = sorted(_normalize_text(o.text) for o in q.options)
        correct = q.correct_option
        parts.append(_normalize_text(correct.text) if correct else "")
        return parts
    if q.type == QuestionType.TRUE_FALSE:
        return [str(bool(q.correct_answer))]
    if q.type == QuestionType.FILL_IN_BLANK:
        return [_normalize_text(b.answer) for b in q.blanks]
    if q.type == QuestionType.MATCHING:
        return sorted(
            f"{_normalize_text(p.premise)}={_normalize_text(p.response)}"
            for p in q.matching_pairs
        )
    return sorted(_normalize_text(k) for k in q.keywords)


def compute_fingerprint(q: Question) -> str:
    parts = [q.type.value, _normalize_text(q.text), _normalize_text(q.latex)]
    parts.extend(_answer_parts(q))
    raw_str = "|".join(parts)
    return hashlib.sha256(raw_str.encode("utf-8")).hexdigest()[:16]


def deduplicate(questions: list[Question]) -> list[Question]:
    """
    去重，返回去重后的列表。
    保留首次出现的题目，后续重复的丢弃。
    """
    seen: dict[str, Question] = {}
    for q in questions:
        fp = compute_fingerprint(q)
        q.fingerprint = fp
        seen.setdefault(fp, q)

    result = list(seen.values())
    if len(result) != len(questions):
        logger.info("去重: %d -> %d", len(questions), len(result))
    return result
