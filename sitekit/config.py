from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .collection import COLLECTIONS, POSTS_GLOB
from .filters import FILTERS

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

PASSTHROUGH = (
    "assets/favicon-32x32.png",
    "assets/favicon-16x16.png",
    "assets/apple-touch-icon.png",
    "assets/logo.png",
    "assets/images",
    "assets/js",
    "favicon.ico",
)


@dataclass
class SiteConfig:
    """Everything a build needs, assembled once at startup.

    ``filters`` and ``collections`` are private copies of the known tables,
    narrowed to whatever the config file enables.
    """

    input_dir: str = "."
    output_dir: str = "_site"
    includes_dir: str = "_includes"
    layouts_dir: str = "_layouts"
    posts_glob: str = POSTS_GLOB
    passthrough: list[str] = field(default_factory=lambda: list(PASSTHROUGH))
    filters: dict[str, Callable] = field(default_factory=lambda: dict(FILTERS))
    collections: dict[str, Callable] = field(default_factory=lambda: dict(COLLECTIONS))
    toc_marker: str = "[[toc]]"
    highlight_class: str = "highlight"


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        if toml is None:
            print("TOML config requires tomllib (Python 3.11+) or tomli.", file=sys.stderr)
            sys.exit(1)
        try:
            data = toml.loads(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(data, dict):
            print(f"TOML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        if yaml is None:
            print("YAML config requires PyYAML.", file=sys.stderr)
            sys.exit(1)
        try:
            data = yaml.safe_load(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)


def select(known: dict[str, Callable], names: object, kind: str) -> dict[str, Callable]:
    if names is None:
        return dict(known)
    if isinstance(names, str):
        names = [names]
    selected = {}
    for name in names:
        if name not in known:
            print(f"Unknown {kind}: {name}", file=sys.stderr)
            sys.exit(1)
        selected[name] = known[name]
    return selected


def build_config(data: dict) -> SiteConfig:
    dirs = data.get("dir") or {}
    config = SiteConfig()

    def cfg_str(key: str, default: str) -> str:
        value = data.get(key, dirs.get(key))
        return default if value is None else str(value)

    config.input_dir = cfg_str("input", config.input_dir)
    config.output_dir = cfg_str("output", config.output_dir)
    config.includes_dir = cfg_str("includes", config.includes_dir)
    config.layouts_dir = cfg_str("layouts", config.layouts_dir)
    config.posts_glob = cfg_str("posts_glob", config.posts_glob)
    config.toc_marker = cfg_str("toc_marker", config.toc_marker)
    config.highlight_class = cfg_str("highlight_class", config.highlight_class)
    passthrough = data.get("passthrough")
    if passthrough is not None:
        config.passthrough = [passthrough] if isinstance(passthrough, str) else [str(p) for p in passthrough]
    config.filters = select(FILTERS, data.get("filters"), "filter")
    config.collections = select(COLLECTIONS, data.get("collections"), "collection")
    return config
