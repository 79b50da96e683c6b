import json
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy import create_engine, text

from exam_entry_toolkit.bank import append_to_bank, load_bank, read_meta, save_bank
from exam_entry_toolkit.block_parser import parse_questions
from exam_entry_toolkit.cli import cli
from exam_entry_toolkit.config import EntryConfig
from exam_entry_toolkit.dedup import compute_fingerprint, deduplicate
from exam_entry_toolkit.exporters import discover as discover_exporters, get_exporter
from exam_entry_toolkit.exporters.base import BaseExporter
from exam_entry_toolkit.models import DifficultyLevel

SAMPLE = """Q1. What is the capital of France?
A. Berlin
B. Paris
Answer: B

[TRUE_FALSE] The Earth is flat. [latex: E = mc^2]
Answer: false

[FILL_IN_BLANK] Photosynthesis occurs in the [___].
Answer: chloroplasts
Alternatives: chloroplast

[MATCHING] Match:
1. Oxygen | Breathing
2. Hydrogen | Lightest

[SHORT_ANSWER] Explain osmosis.
Keywords: water, membrane
Model Answer: Movement of water across a membrane.
"""

# 1x1 PNG
PNG_DATA_URL = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAIAAACQd1PeAAAADElEQVQI12P4"
    "z8AAAAMBAQAY3Y2wAAAAAElFTkSuQmCC"
)


def _questions():
    return parse_questions(SAMPLE)


def test_fingerprint_ignores_ids_and_option_order():
    a = parse_questions("Q1. Pick\nA. x\nB. y\nAnswer: A")[0]
    b = parse_questions("Q7. Pick\nA. y\nB. x\nAnswer: B")[0]
    assert a.id != b.id
    assert compute_fingerprint(a) == compute_fingerprint(b)
    c = parse_questions("Q1. Pick\nA. x\nB. y\nAnswer: B")[0]
    assert compute_fingerprint(a) != compute_fingerprint(c)


def test_dedup_keeps_first():
    qs = _questions() + _questions()
    result = deduplicate(qs)
    assert len(result) == 5
    assert result[0] is qs[0]
    assert all(len(q.fingerprint) == 16 for q in result)


def test_bank_round_trip_plain():
    with tempfile.TemporaryDirectory() as tmpdir:
        fp = save_bank(_questions(), Path(tmpdir) / "bank")
        assert fp.suffix == ".qeb"
        assert read_meta(fp)["count"] == 5
        loaded = load_bank(fp)
        assert [q.type for q in loaded] == [q.type for q in _questions()]
        assert loaded[1].latex == "E = mc^2"


def test_bank_encrypted():
    with tempfile.TemporaryDirectory() as tmpdir:
        fp = save_bank(_questions(), Path(tmpdir) / "secret", password="pw")
        assert len(load_bank(fp, "pw")) == 5
        with pytest.raises(ValueError):
            load_bank(fp)
        with pytest.raises(ValueError):
            load_bank(fp, "wrong")


def test_bank_rejects_foreign_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        fp = Path(tmpdir) / "other.qeb"
        fp.write_bytes(b"nope")
        with pytest.raises(ValueError):
            load_bank(fp)


def test_append_to_bank_dedups():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bank.qeb"
        combined, added = append_to_bank(_questions(), path)
        assert (len(combined), added) == (5, 5)
        combined, added = append_to_bank(_questions(), path)
        assert (len(combined), added) == (5, 0)
        extra = parse_questions("[TRUE_FALSE] New one.\nAnswer: true")
        combined, added = append_to_bank(extra, path)
        assert (len(combined), added) == (6, 1)
        assert len(load_bank(path)) == 6


def test_flatten_columns():
    rows, columns = BaseExporter.flatten(_questions())
    assert len(rows) == 5
    assert "answer" in columns
    mc, tf, fib, match, sa = rows
    assert mc["answer"] == "B"
    assert mc["options"] == "A. Berlin | B. Paris"
    assert tf["answer"] == "false"
    assert tf["latex"] == "E = mc^2"
    assert fib["alternatives"] == "chloroplast"
    assert match["matching_pairs"] == "Oxygen = Breathing | Hydrogen = Lightest"
    assert sa["keywords"] == "water, membrane"


def test_json_and_csv_export():
    discover_exporters()
    with tempfile.TemporaryDirectory() as tmpdir:
        out = Path(tmpdir) / "output" / "questions"
        get_exporter("json").export(_questions(), out)
        data = json.loads(out.with_suffix(".json").read_text(encoding="utf-8"))
        assert len(data) == 5
        assert data[0]["type"] == "MULTIPLE_CHOICE"
        assert data[0]["correct_option_index"] == 1
        assert data[2]["blanks"][0]["answer"] == "chloroplasts"

        get_exporter("csv").export(_questions(), out)
        content = out.with_suffix(".csv").read_text(encoding="utf-8-sig")
        assert content.splitlines()[0].startswith("fingerprint,id,type")


def test_xlsx_export():
    discover_exporters()
    with tempfile.TemporaryDirectory() as tmpdir:
        out = Path(tmpdir) / "questions"
        get_exporter("xlsx").export(_questions(), out)

        from openpyxl import load_workbook
        wb = load_workbook(out.with_suffix(".xlsx"))
        ws = wb.active
        headers = [cell.value for cell in ws[1]]
        assert "题目" in headers and "答案" in headers
        # has_image 全空，被隐藏
        assert "图片" not in headers
        assert ws.max_row == 6


def test_docx_and_pdf_export():
    discover_exporters()
    questions = _questions()
    questions[0].image_path = PNG_DATA_URL
    with tempfile.TemporaryDirectory() as tmpdir:
        out = Path(tmpdir) / "questions"
        get_exporter("docx").export(questions, out, title="测试")
        assert out.with_suffix(".docx").stat().st_size > 0
        get_exporter("pdf").export(_questions(), out, show_answers=False)
        assert out.with_suffix(".pdf").read_bytes().startswith(b"%PDF")


def test_db_export_inserts_once():
    discover_exporters()
    with tempfile.TemporaryDirectory() as tmpdir:
        out = Path(tmpdir) / "questions"
        db_url = f"sqlite:///{out.with_suffix('.db')}"
        questions = deduplicate(_questions())
        get_exporter("db").export(questions, out, db_url=db_url)
        get_exporter("db").export(questions, out, db_url=db_url)

        engine = create_engine(db_url)
        with engine.connect() as conn:
            count = conn.execute(text("SELECT COUNT(*) FROM questions")).scalar()
        engine.dispose()
        assert count == 5


def test_unknown_exporter():
    with pytest.raises(KeyError):
        get_exporter("pptx")


def test_cli_parse_and_save():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("input.txt").write_text(SAMPLE, encoding="utf-8")
        Path("empty.txt").write_text("no questions here", encoding="utf-8")

        result = runner.invoke(cli, ["parse", "input.txt"])
        assert result.exit_code == 0, result.output
        assert "Q1. What is the capital of France?" in result.output

        result = runner.invoke(cli, ["save", "input.txt", "-o", "bank.qeb"])
        assert result.exit_code == 0, result.output
        assert len(load_bank(Path("bank.qeb"))) == 5

        result = runner.invoke(cli, ["save", "empty.txt", "-o", "bank.qeb"])
        assert result.exit_code == 1
        assert "未找到有效题目" in result.output

        result = runner.invoke(cli, ["export", "--bank", "bank.qeb", "-f", "json", "-o", "out"])
        assert result.exit_code == 0, result.output
        assert Path("out/questions.json").exists()


def test_cli_template():
    result = CliRunner().invoke(cli, ["template", "true_false"])
    assert result.exit_code == 0
    assert result.output.startswith("[TRUE_FALSE]")


def test_cli_info_shows_bank_meta():
    runner = CliRunner()
    with runner.isolated_filesystem():
        save_bank(_questions(), Path("bank.qeb"), password="pw")
        result = runner.invoke(cli, ["info", "--bank", "bank.qeb", "--password", "pw"])
        assert result.exit_code == 0, result.output
        assert "共 5 题" in result.output and "已加密" in result.output

        Path("other.qeb").write_bytes(b"nope")
        result = runner.invoke(cli, ["info", "--bank", "other.qeb"])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output


def test_config_null_values_use_defaults():
    cfg = EntryConfig.from_dict({"bank": None, "output_dir": None, "export": {"formats": None}})
    assert cfg.bank == EntryConfig().bank
    assert cfg.output_dir == EntryConfig().output_dir
    assert cfg.formats == ["json"]
    assert EntryConfig.from_dict({"difficulty": "HARD"}).difficulty == DifficultyLevel.HARD


def test_cli_rejects_invalid_config():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("input.txt").write_text(SAMPLE, encoding="utf-8")
        Path("bad.yaml").write_text("difficulty: extreme\n", encoding="utf-8")
        result = runner.invoke(cli, ["-c", "bad.yaml", "parse", "input.txt"])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output and "extreme" in result.output

        Path("broken.yaml").write_text("bank: [unclosed\n", encoding="utf-8")
        result = runner.invoke(cli, ["-c", "broken.yaml", "template", "true_false"])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output


if __name__ == "__main__":
    import sys
    sys.exit(pytest.main([__file__]))
