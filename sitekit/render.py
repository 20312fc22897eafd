from __future__ import annotations

import re
import shutil
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

import markdown

if TYPE_CHECKING:
    from .config import SiteConfig

TAG_RE = re.compile(r"<[^>]*>")
SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
SLUG_SPACE_RE = re.compile(r"\s+")


def slugify_heading(value: str, separator: str = "-") -> str:
    value = SLUG_STRIP_RE.sub("", value.lower())
    return SLUG_SPACE_RE.sub(separator, value)


def create_markdown(config: SiteConfig) -> markdown.Markdown:
    return markdown.Markdown(
        extensions=["extra", "codehilite", "toc"],
        extension_configs={
            "codehilite": {
                "css_class": config.highlight_class,
                "guess_lang": False,
                "use_pygments": True,
            },
            "toc": {
                "marker": config.toc_marker,
                "slugify": slugify_heading,
                "permalink": False,
            },
        },
    )


def render_markdown(md: markdown.Markdown, text: str) -> str:
    html_content = md.convert(text)
    md.reset()
    return html_content


def strip_tags(html_text: str) -> str:
    return TAG_RE.sub("", html_text)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_passthrough(input_dir: Path, output_dir: Path, paths: Iterable[str]) -> int:
    copied = 0
    for rel in paths:
        item = input_dir / rel
        if not item.exists():
            print(f"Passthrough not found: {item}", file=sys.stderr)
            continue
        dest = output_dir / rel
        dest.parent.mkdir(parents=True, exist_ok=True)
        if item.is_dir():
            if dest.exists():
                shutil.rmtree(dest)
            shutil.copytree(item, dest)
        else:
            shutil.copy2(item, dest)
        copied += 1
    return copied
