from __future__ import annotations

import datetime as dt
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Mapping, Union

import yaml

from .dates import to_datetime
from .render import render_markdown
from .utils import relative_url

if TYPE_CHECKING:
    import markdown

    from .config import SiteConfig

MetaValue = Union[str, int, float, list[str], dt.datetime, dt.date]

FILENAME_DATE_RE = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-")
LIST_KEYS = {"tags"}


@dataclass(frozen=True)
class ContentItem:
    input_path: str
    url: str
    raw: str
    html: str = ""
    data: Mapping[str, MetaValue] = field(default_factory=dict)
    date: dt.datetime | dt.date | None = None

    def get_list(self, key: str) -> list[str]:
        value = self.data.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return [str(value)]


def parse_list(value: str) -> list[str]:
    value = value.strip()
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        items = [item.strip().strip("'\"") for item in inner.split(",")]
    else:
        items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def parse_value(key: str, value: object) -> MetaValue:
    if key in LIST_KEYS and isinstance(value, str):
        return parse_list(value)
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    if key == "date" and not isinstance(value, (dt.datetime, dt.date)):
        parsed = to_datetime(str(value))
        if parsed is None:
            print(f"Unreadable date in front matter: {value!r}", file=sys.stderr)
            return str(value)
        return parsed
    return value


def parse_front_matter(text: str) -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        return {}, clean_text

    body = "\n".join(lines[end + 1 :])
    try:
        data = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as exc:
        print(f"Invalid YAML front matter: {exc}", file=sys.stderr)
        return {}, body
    if data is None:
        return {}, body
    if not isinstance(data, dict):
        print("Front matter must be a mapping.", file=sys.stderr)
        return {}, body
    meta = {}
    for key, value in data.items():
        if value is None:
            continue
        key = str(key)
        meta[key] = parse_value(key, value)
    return meta, body


def extract_title(meta: dict, body: str) -> str:
    if meta.get("title"):
        return str(meta["title"])
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip() or "Untitled"
        if stripped:
            break
    return "Untitled"


def resolve_date(meta: dict, file_path: Path) -> dt.datetime | dt.date:
    value = meta.get("date")
    if isinstance(value, (dt.datetime, dt.date)):
        return value
    match = FILENAME_DATE_RE.match(file_path.name)
    if match:
        try:
            return dt.date.fromisoformat(match.group("date"))
        except ValueError:
            pass
    return dt.datetime.fromtimestamp(file_path.stat().st_mtime)


def item_url(rel: PurePosixPath, meta: dict) -> str:
    permalink = meta.get("permalink")
    if permalink is not None and not isinstance(permalink, bool) and str(permalink).strip():
        permalink = str(permalink).strip()
        if ".." in permalink.split("/"):
            print(f"Ignoring permalink outside the output directory: {permalink}", file=sys.stderr)
        else:
            return relative_url(permalink)
    parts = list(rel.with_suffix("").parts)
    if parts and parts[-1] == "index":
        parts = parts[:-1]
    if not parts:
        return "/"
    return relative_url("/".join(parts) + "/")


def is_content_file(rel: PurePosixPath, skip_dirs: set[str]) -> bool:
    if rel.parts[0] in skip_dirs:
        return False
    if any(part.startswith(".") for part in rel.parts):
        return False
    if rel.name.startswith("_") or rel.name.lower() == "readme.md":
        return False
    return True


def discover(input_dir: Path, config: SiteConfig) -> list[PurePosixPath]:
    skip_dirs = {config.output_dir, config.includes_dir, config.layouts_dir}
    skip_dirs = {PurePosixPath(d).parts[0] for d in skip_dirs if d and d != "."}
    paths = []
    for md_file in input_dir.rglob("*.md"):
        rel = PurePosixPath(md_file.relative_to(input_dir).as_posix())
        if is_content_file(rel, skip_dirs):
            paths.append(rel)
    return sorted(paths, key=lambda p: p.as_posix())


def load_item(input_dir: Path, rel: PurePosixPath, md: markdown.Markdown) -> ContentItem:
    file_path = input_dir / rel
    meta, body = parse_front_matter(file_path.read_text(encoding="utf-8"))
    meta.setdefault("title", extract_title(meta, body))
    return ContentItem(
        input_path=rel.as_posix(),
        url=item_url(rel, meta),
        raw=body,
        html=render_markdown(md, body),
        data=meta,
        date=resolve_date(meta, file_path),
    )


def load_items(input_dir: Path, config: SiteConfig, md: markdown.Markdown) -> list[ContentItem]:
    return [load_item(input_dir, rel, md) for rel in discover(input_dir, config)]
