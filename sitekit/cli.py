from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

from .collection import build_collections
from .config import SiteConfig, build_config, load_config
from .content import load_items
from .render import copy_passthrough, create_markdown, write_text
from .utils import clean_output_dir, parse_bool, url_to_path


def collections_index(collections: dict[str, list], items: list, config: SiteConfig) -> dict:
    index = {}
    for name, values in collections.items():
        index[name] = [getattr(value, "url", value) for value in values]
    group_by = config.filters.get("groupby")
    if group_by is not None:
        index["groupby"] = {tag: [item.url for item in group] for tag, group in group_by(items, "tags")}
    return index


def write_pages(items: list, output_dir: Path) -> None:
    written = {}
    for item in items:
        if item.url in written:
            print(
                f"Duplicate URL {item.url}: {item.input_path} overwrites {written[item.url]}",
                file=sys.stderr,
            )
        written[item.url] = item.input_path
        write_text(url_to_path(output_dir, item.url), item.html)


def build_site(args: argparse.Namespace, config: SiteConfig) -> int:
    project_root = Path.cwd()
    input_dir = Path(args.input)
    output_dir = Path(args.output)
    config.input_dir = args.input
    config.output_dir = args.output

    if not input_dir.is_dir():
        print(f"Input directory not found: {input_dir}", file=sys.stderr)
        sys.exit(1)

    if args.clean:
        clean_output_dir(output_dir, project_root)
    output_dir.mkdir(parents=True, exist_ok=True)

    md = create_markdown(config)
    items = load_items(input_dir, config, md)
    write_pages(items, output_dir)

    copied = copy_passthrough(input_dir, output_dir, config.passthrough)

    collections = build_collections(items, config)
    index = collections_index(collections, items, config)
    write_text(output_dir / "collections.json", json.dumps(index, indent=2, ensure_ascii=False))

    print(f"Rendered {len(items)} pages, copied {copied} passthrough entries.")
    for name, values in collections.items():
        print(f"Collection {name}: {len(values)} entries")
    return len(items)


def main(argv: list[str] | None = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    data = load_config(Path(pre_args.config))
    config = build_config(data)

    parser = argparse.ArgumentParser(description="Build the blog content and collections.")
    parser.add_argument("command", nargs="?", default="build", choices=["build"], help="Command to run.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--input", default=config.input_dir, help="Directory containing the site content.")
    parser.add_argument("--output", default=config.output_dir, help="Output directory for the site.")
    parser.add_argument(
        "--clean",
        action=argparse.BooleanOptionalAction,
        default=parse_bool(data.get("clean", False)),
        help="Clean output directory before build.",
    )
    args = parser.parse_args(argv)
    start = time.perf_counter()
    build_site(args, config)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Site generated in: {args.output}")
