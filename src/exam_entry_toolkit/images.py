"""图片导入：文件 → data URL，构建解析器使用的图片表"""
from __future__ import annotations
import base64
import logging
import mimetypes
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".svg"}


def encode_image(path: str | Path) -> str:
    fp = Path(path)
    mime, _ = mimetypes.guess_type(fp.name)
    data = base64.b64encode(fp.read_bytes()).decode("ascii")
    return f"data:{mime or 'application/octet-stream'};base64,{data}"


def decode_data_url(data_url: str) -> bytes | None:
    """解析 data URL，非 base64 data URL 返回 None"""
    if not data_url.startswith("data:") or ";base64," not in data_url:
        return None
    try:
        return base64.b64decode(data_url.split(";base64,", 1)[1], validate=True)
    except ValueError:
        return None


def _iter_files(paths: Iterable[str | Path]) -> Iterable[Path]:
    for p in paths:
        p = Path(p)
        if p.is_dir():
            for fp in sorted(p.iterdir()):
                if fp.is_file() and fp.suffix.lower() in IMAGE_SUFFIXES:
                    yield fp
        else:
            yield p


def load_images(paths: Iterable[str | Path]) -> dict[str, str]:
    """
    文件名 → data URL。

    目录按后缀筛选图片；读取失败的文件跳过并警告，
    对应的 [image: ...] 指令会保留在题干中。同名文件后者覆盖前者。
    """
    images: dict[str, str] = {}
    for fp in _iter_files(paths):
        try:
            images[fp.name] = encode_image(fp)
        except OSError as e:
            logger.warning("图片读取失败，跳过 %s: %s", fp, e)
    if images:
        logger.info("已导入图片 %d 张", len(images))
    return images
