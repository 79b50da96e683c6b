import tempfile
from pathlib import Path

import pytest

from exam_entry_toolkit import entry as entry_module
from exam_entry_toolkit.block_parser import parse_questions
from exam_entry_toolkit.entry import ManualEntry, NoQuestionsFoundError, ParseFailedError
from exam_entry_toolkit.formatter import to_text, to_text_all
from exam_entry_toolkit.images import decode_data_url, encode_image, load_images
from exam_entry_toolkit.models import DifficultyLevel, QuestionType
from exam_entry_toolkit.preview import render_preview
from exam_entry_toolkit.stats import summarize
from exam_entry_toolkit.templates import FORMAT_GUIDE, TEMPLATES, get_template, insert_template

# 1x1 PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108020000009077"
    "53de0000000c4944415408d763f8cfc000000301010018dd8db00000000049454e44ae426082"
)


def _fields(q):
    """除 id 外的全部可比较字段"""
    return (
        q.type, q.text, q.latex, q.image_path,
        [o.text for o in q.options], q.correct_option_index, q.correct_answer,
        [(b.answer, b.alternatives) for b in q.blanks],
        [(p.premise, p.response) for p in q.matching_pairs],
        q.keywords, q.model_answer, q.difficulty_level,
    )


def _all_templates() -> str:
    text = ""
    for qtype in QuestionType:
        text = insert_template(text, qtype)
    return text


def test_every_template_parses_to_its_type():
    for qtype in QuestionType:
        [q] = parse_questions(get_template(qtype))
        assert q.type == qtype


def test_insert_template_separator():
    first = insert_template("", QuestionType.TRUE_FALSE)
    assert first == TEMPLATES[QuestionType.TRUE_FALSE]
    second = insert_template(first, QuestionType.MATCHING)
    assert second == first + "\n\n" + TEMPLATES[QuestionType.MATCHING]
    assert "[latex:" in FORMAT_GUIDE and "[image:" in FORMAT_GUIDE


def test_unknown_template_falls_back_to_multiple_choice():
    assert get_template("ESSAY") == TEMPLATES[QuestionType.MULTIPLE_CHOICE]


def test_reparse_reconstruction_is_field_equivalent():
    original = parse_questions(_all_templates() + "\n\nQ9. 2+2=? [latex: 2+2]\nA. 3\nB. 4\nAnswer: B")
    again = parse_questions(to_text_all(original))
    assert len(again) == len(original) == 6
    assert [_fields(q) for q in again] == [_fields(q) for q in original]
    assert again[0].id != original[0].id

    # 无 Keywords 的简答题、无选项的单选题：题干延伸到块尾，不重复追加
    for source in ("[SHORT_ANSWER] Why?\nModel Answer: because", "Q1. Pick one\nAnswer: B"):
        [q] = parse_questions(source)
        assert to_text(q) == source
        [again] = parse_questions(to_text_all([q]))
        assert _fields(again) == _fields(q)


def test_reconstruction_restores_image_directive():
    images = {"cell.png": "data:image/png;base64,AAAA"}
    [q] = parse_questions("[TRUE_FALSE] A cell [image: cell.png]\nAnswer: true", images)
    text = to_text(q, image_names={v: k for k, v in images.items()})
    assert text == "[TRUE_FALSE] A cell [image: cell.png]\nAnswer: true"
    [again] = parse_questions(text, images)
    assert _fields(again) == _fields(q)


def test_load_images_and_encode():
    with tempfile.TemporaryDirectory() as tmpdir:
        d = Path(tmpdir)
        (d / "a.png").write_bytes(PNG_BYTES)
        (d / "notes.txt").write_text("not an image", encoding="utf-8")
        images = load_images([d])
        assert list(images) == ["a.png"]
        assert images["a.png"].startswith("data:image/png;base64,")
        assert decode_data_url(images["a.png"]) == PNG_BYTES
        assert encode_image(d / "a.png") == images["a.png"]


def test_missing_image_file_is_skipped():
    with tempfile.TemporaryDirectory() as tmpdir:
        images = load_images([Path(tmpdir) / "gone.png"])
        assert images == {}


def test_entry_preview_and_submit():
    e = ManualEntry(difficulty=DifficultyLevel.EASY)
    e.insert_template(QuestionType.MULTIPLE_CHOICE)
    e.insert_template(QuestionType.SHORT_ANSWER)

    preview = e.preview()
    assert len(preview) == 2

    # 预览后修改文本，提交的仍是预览结果
    e.text = ""
    received = []
    result = e.submit(received.append)
    assert [q.id for q in result] == [q.id for q in preview]
    assert received == result
    assert all(q.difficulty_level == DifficultyLevel.EASY for q in received)


def test_entry_submit_without_preview_parses():
    e = ManualEntry(get_template(QuestionType.TRUE_FALSE))
    received = []
    e.submit(received.append)
    assert len(received) == 1


def test_entry_no_questions_found():
    e = ManualEntry("nothing to see here")
    received = []
    with pytest.raises(NoQuestionsFoundError):
        e.submit(received.append)
    assert received == []


def test_entry_unexpected_failure_is_reported(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(entry_module, "parse_questions", boom)
    e = ManualEntry("Q1. x")
    with pytest.raises(ParseFailedError) as info:
        e.preview()
    assert "请检查格式" in str(info.value)
    received = []
    with pytest.raises(ParseFailedError):
        e.submit(received.append)
    assert received == []


def test_entry_add_images_resolves_directive():
    with tempfile.TemporaryDirectory() as tmpdir:
        fp = Path(tmpdir) / "diagram.png"
        fp.write_bytes(PNG_BYTES)
        e = ManualEntry("[TRUE_FALSE] See [image: diagram.png]\nAnswer: false")
        assert e.add_images([fp]) == 1
        [q] = e.preview()
        assert q.text == "See"
        assert q.image_path.startswith("data:image/png")


def test_preview_marks_correct_answers():
    questions = parse_questions(_all_templates())
    lines = render_preview(questions)
    assert "     B. Paris ✅" in lines
    assert "     False ✅" in lines
    assert any("Oxygen  →  Essential for breathing" in line for line in lines)
    assert lines[0].startswith("Q1. ")


def test_summarize_counts():
    questions = parse_questions(_all_templates() + "\n\nQ2. Unanswered?\nA. x\nB. y")
    s = summarize(questions)
    assert s["total"] == 6
    assert s["by_type"]["单选题"] == 2
    assert s["by_difficulty"] == {"中等": 6}
    assert s["mc_no_answer"] == 1
    assert s["with_latex"] == 0


if __name__ == "__main__":
    import sys
    sys.exit(pytest.main([__file__]))
