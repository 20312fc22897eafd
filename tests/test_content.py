import datetime as dt
import os
from pathlib import PurePosixPath

from sitekit.config import build_config
from sitekit.content import extract_title, item_url, load_items, parse_front_matter, parse_list
from sitekit.render import create_markdown
from sitekit.utils import url_to_path


def test_parse_list_forms():
    assert parse_list("[a, 'b', \"c\"]") == ["a", "b", "c"]
    assert parse_list("a, b,") == ["a", "b"]
    assert parse_list("") == []


def test_front_matter_typed_values():
    text = "---\ntitle: Hello\ntags: [python, web]\ndate: 2024-01-05\nweight: 3\nscore: 1.5\ncode: \"007\"\n---\nBody"
    meta, body = parse_front_matter(text)
    assert body == "Body"
    assert meta["title"] == "Hello"
    assert meta["tags"] == ["python", "web"]
    assert meta["date"] == dt.date(2024, 1, 5)
    assert meta["weight"] == 3
    assert meta["score"] == 1.5
    assert meta["code"] == "007"


def test_front_matter_block_list_tags():
    meta, body = parse_front_matter("---\ntitle: Hi\ntags:\n  - python\n  - web\n---\nBody")
    assert meta["tags"] == ["python", "web"]
    assert body == "Body"


def test_front_matter_scalar_and_numeric_tags():
    meta, _ = parse_front_matter("---\ntags: python, web\n---\n")
    assert meta["tags"] == ["python", "web"]
    meta, _ = parse_front_matter("---\ntags:\n  - 2024\n  - notes\n---\n")
    assert meta["tags"] == ["2024", "notes"]


def test_front_matter_invalid_yaml_is_reported(capsys):
    meta, body = parse_front_matter("---\ntags: [unclosed\n---\nBody")
    assert meta == {}
    assert body == "Body"
    assert "Invalid YAML front matter" in capsys.readouterr().err


def test_front_matter_bad_date_is_kept_as_text(capsys):
    meta, _ = parse_front_matter("---\ndate: someday\n---\n")
    assert meta["date"] == "someday"
    assert "Unreadable date" in capsys.readouterr().err


def test_missing_or_unclosed_front_matter():
    assert parse_front_matter("# Title\n") == ({}, "# Title\n")
    assert parse_front_matter("---\ntitle: x\n") == ({}, "---\ntitle: x\n")


def test_extract_title():
    assert extract_title({"title": "Given"}, "# Other") == "Given"
    assert extract_title({}, "\n# From Heading\ntext") == "From Heading"
    assert extract_title({}, "plain text") == "Untitled"


def test_item_url():
    assert item_url(PurePosixPath("_posts/hello.md"), {}) == "/_posts/hello/"
    assert item_url(PurePosixPath("index.md"), {}) == "/"
    assert item_url(PurePosixPath("docs/index.md"), {}) == "/docs/"
    assert item_url(PurePosixPath("about.md"), {"permalink": "me/"}) == "/me/"
    assert item_url(PurePosixPath("about.md"), {"permalink": 2024}) == "/2024"


def test_item_url_rejects_parent_segments(capsys):
    assert item_url(PurePosixPath("about.md"), {"permalink": "../../etc/"}) == "/about/"
    assert "Ignoring permalink" in capsys.readouterr().err


def test_url_to_path_stays_in_output(tmp_path):
    assert url_to_path(tmp_path, "/") == tmp_path / "index.html"
    assert url_to_path(tmp_path, "/a/../b/") == tmp_path / "a" / "b" / "index.html"
    assert url_to_path(tmp_path, "/feed.xml") == tmp_path / "feed.xml"


def test_item_get_list_defaults(make_item):
    assert make_item().get_list("tags") == []
    assert make_item(tags="solo").get_list("tags") == ["solo"]


def test_load_items_discovery(tmp_path):
    (tmp_path / "_posts").mkdir()
    (tmp_path / "_includes").mkdir()
    (tmp_path / "_site").mkdir()
    (tmp_path / "_posts" / "2024-02-01-second.md").write_text("---\ntags: [b]\n---\nSecond", encoding="utf-8")
    (tmp_path / "_posts" / "2024-01-01-first.md").write_text("# First\n\nHello <!--more--> rest", encoding="utf-8")
    (tmp_path / "_includes" / "partial.md").write_text("skip", encoding="utf-8")
    (tmp_path / "_site" / "old.md").write_text("skip", encoding="utf-8")
    (tmp_path / "README.md").write_text("skip", encoding="utf-8")
    (tmp_path / "about.md").write_text("---\ndate: 2020-05-05\n---\nAbout", encoding="utf-8")
    undated = tmp_path / "_posts" / "undated.md"
    undated.write_text("Undated", encoding="utf-8")
    os.utime(undated, (1700000000, 1700000000))

    config = build_config({})
    items = load_items(tmp_path, config, create_markdown(config))

    assert [item.input_path for item in items] == [
        "_posts/2024-01-01-first.md",
        "_posts/2024-02-01-second.md",
        "_posts/undated.md",
        "about.md",
    ]
    first, second, undated_item, about = items
    assert first.data["title"] == "First"
    assert first.date == dt.date(2024, 1, 1)
    assert "<!--more-->" in first.raw
    assert '<h1 id="first">First</h1>' in first.html
    assert second.get_list("tags") == ["b"]
    assert undated_item.date == dt.datetime.fromtimestamp(1700000000)
    assert about.date == dt.date(2020, 5, 5)
    assert about.url == "/about/"
