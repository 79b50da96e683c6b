"""题干内嵌指令：[latex: ...] 与 [image: ...]"""
from __future__ import annotations
import re
from typing import NamedTuple
from exam_entry_toolkit.models import ImageMap

# 非贪婪到第一个 ]，指令内容本身不能含 ]
LATEX_RE = re.compile(r"\[latex:\s*([^\]]+)\]")
IMAGE_RE = re.compile(r"\[image:\s*([^\]]+)\]")


class Directives(NamedTuple):
    text: str
    latex: str | None
    image_path: str | None


def strip_directives(text: str, images: ImageMap) -> Directives:
    """
    各取第一个 latex / image 指令。

    latex 指令总是移除；image 指令仅在图片名能在 images 中找到时移除，
    找不到则原样留在题干里。
    """
    latex = image_path = None

    m = LATEX_RE.search(text)
    if m:
        latex = m.group(1).strip()
        text = text.replace(m.group(0), "", 1).strip()

    m = IMAGE_RE.search(text)
    if m:
        name = m.group(1).strip()
        if name in images:
            image_path = images[name]
            text = text.replace(m.group(0), "", 1).strip()

    return Directives(text, latex, image_path)
