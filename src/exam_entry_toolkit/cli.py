from __future__ import annotations
import click
import json as _json
import logging
import sys
from pathlib import Path
from exam_entry_toolkit.bank import append_to_bank, load_bank, read_meta
from exam_entry_toolkit.config import EntryConfig
from exam_entry_toolkit.entry import EntryError, ManualEntry
from exam_entry_toolkit.exporters import discover as discover_exporters, get_exporter
from exam_entry_toolkit.exporters.json_exporter import question_to_dict
from exam_entry_toolkit.models import DifficultyLevel, QuestionType
from exam_entry_toolkit.preview import render_preview
from exam_entry_toolkit.stats import print_summary
from exam_entry_toolkit.templates import FORMAT_GUIDE, get_template

_DIFFICULTIES = [d.value for d in DifficultyLevel]
_TYPES = [t.value for t in QuestionType]


def _make_entry(cfg: EntryConfig, input_file: str, images: tuple, difficulty: str | None) -> ManualEntry:
    text = Path(input_file).read_text(encoding="utf-8")
    entry = ManualEntry(text, difficulty=DifficultyLevel(difficulty or cfg.difficulty))
    image_paths = list(cfg.image_dirs) + list(images)
    if image_paths:
        n = entry.add_images(image_paths)
        click.echo(f"🖼  已导入图片 {n} 张")
    return entry


@click.group()
@click.option("-c", "--config", "config_path", default="config.yaml", help="配置文件路径")
@click.option("-v", "--verbose", is_flag=True, help="输出调试日志")
@click.pass_context
def cli(ctx, config_path, verbose):
    """纯文本批量录入题目：解析、预览、入库、导出"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = EntryConfig.load(config_path)
    except ValueError as e:
        click.echo(f"[ERROR] {e}")
        sys.exit(1)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--image", "images", multiple=True, type=click.Path(exists=True), help="图片文件或目录 (可多选)")
@click.option("--difficulty", default=None, type=click.Choice(_DIFFICULTIES), help="题目难度")
@click.option("--json", "as_json", is_flag=True, help="以 JSON 输出解析结果")
@click.option("--stats/--no-stats", default=False, help="是否显示统计")
@click.pass_context
def parse(ctx, input_file, images, difficulty, as_json, stats):
    """解析录入文本并预览"""
    cfg = ctx.obj["config"]
    entry = _make_entry(cfg, input_file, images, difficulty)

    try:
        questions = entry.preview()
    except EntryError as e:
        click.echo(f"[ERROR] {e}")
        sys.exit(1)

    if not questions:
        click.echo("未找到有效题目，请检查格式。")
        return

    if as_json:
        data = [question_to_dict(q) for q in questions]
        click.echo(_json.dumps(data, ensure_ascii=False, indent=2))
        return

    for line in render_preview(questions):
        click.echo(line)
    if stats:
        print_summary(questions)


@cli.command()
@click.argument("question_type", type=click.Choice(_TYPES, case_sensitive=False))
def template(question_type):
    """输出指定题型的录入模板"""
    click.echo(get_template(question_type.upper()))


@cli.command()
def guide():
    """输出录入格式说明"""
    click.echo(FORMAT_GUIDE)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", default=None, help="题库路径 (.qeb)")
@click.option("--image", "images", multiple=True, type=click.Path(exists=True), help="图片文件或目录 (可多选)")
@click.option("--difficulty", default=None, type=click.Choice(_DIFFICULTIES), help="题目难度")
@click.option("--password", default=None, help="题库加密密码")
@click.pass_context
def save(ctx, input_file, output, images, difficulty, password):
    """解析录入文本并追加到题库, 已有题目自动去重"""
    cfg = ctx.obj["config"]
    bank_path = Path(output or cfg.bank)
    entry = _make_entry(cfg, input_file, images, difficulty)

    accepted = []
    try:
        entry.submit(accepted.append)
        combined, added = append_to_bank(accepted, bank_path, password)
    except (EntryError, ValueError) as e:
        click.echo(f"[ERROR] {e}")
        sys.exit(1)

    click.echo(f"\n{'='*40}")
    click.echo(f"  解析: {len(accepted)} 题")
    click.echo(f"  新增: {added} 题")
    click.echo(f"  重复跳过: {len(accepted) - added} 题")
    click.echo(f"  总计: {len(combined)} 题")
    click.echo(f"{'='*40}")
    click.echo("✅ 已保存")


@cli.command()
@click.option("--bank", default=None, help="题库路径 (.qeb)")
@click.option("-o", "--output-dir", default=None, help="输出目录")
@click.option("-f", "--format", "formats", multiple=True, help="导出格式: json/csv/xlsx/docx/pdf/db")
@click.option("--db-url", default=None, help="数据库连接字符串")
@click.option("--title", default="题目汇编", help="docx/pdf 标题")
@click.option("--show-answers/--hide-answers", default=True, help="pdf 中是否显示答案")
@click.option("--password", default=None, help="题库解密密码")
@click.pass_context
def export(ctx, bank, output_dir, formats, db_url, title, show_answers, password):
    """从题库导出多种格式"""
    cfg = ctx.obj["config"]
    bank_path = Path(bank or cfg.bank)
    output_path = Path(output_dir or cfg.output_dir)
    formats = formats or cfg.formats
    db_url = db_url or cfg.db_url

    if not bank_path.exists():
        click.echo(f"[ERROR] 题库不存在: {bank_path}")
        sys.exit(1)
    try:
        questions = load_bank(bank_path, password)
    except ValueError as e:
        click.echo(f"[ERROR] {e}")
        sys.exit(1)

    if not questions:
        click.echo("题库为空。")
        return

    discover_exporters()
    base_name = output_path / "questions"

    for fmt in formats:
        click.echo(f"📤 导出 {fmt.upper()}...")
        try:
            exporter = get_exporter(fmt)
            extra_kwargs = {"title": title, "show_answers": show_answers}
            if fmt == "db" and db_url:
                extra_kwargs["db_url"] = db_url
            exporter.export(questions, base_name, **extra_kwargs)
        except KeyError as e:
            click.echo(f"[ERROR] {e}")
        except Exception as e:
            click.echo(f"[ERROR] 导出 {fmt} 失败: {e}")

    click.echo(f"✅ 完成! 共 {len(questions)} 题")


@cli.command()
@click.option("--bank", default=None, help="题库路径 (.qeb)")
@click.option("--password", default=None, help="题库密码")
@click.pass_context
def info(ctx, bank, password):
    """查看题库统计信息"""
    cfg = ctx.obj["config"]
    bank_path = Path(bank or cfg.bank)
    if not bank_path.exists():
        click.echo("题库为空。")
        return
    try:
        meta = read_meta(bank_path)
        click.echo(f"📦 {bank_path}  共 {meta['count']} 题" + ("  (已加密)" if meta.get("encrypted") else ""))
        questions = load_bank(bank_path, password)
    except ValueError as e:
        click.echo(f"[ERROR] {e}")
        sys.exit(1)

    if questions:
        print_summary(questions)
    else:
        click.echo("题库为空。")


def main():
    cli()


if __name__ == "__main__":
    main()
