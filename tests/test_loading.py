from __future__ import annotations

import json
from pathlib import Path

import pytest

from seometa.adapters.loading.filesystem import FilesystemScanner
from seometa.adapters.loading.records import (
    FrontmatterRecordLoader,
    JsonRecordLoader,
    YamlRecordLoader,
    split_frontmatter,
)
from seometa.domain.errors import MetadataShapeError, RecordLoadError


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# -------------------------
# Record loaders
# -------------------------

def test_json_single_record_and_list(tmp_path):
    one = write(tmp_path / "about.json", json.dumps({"title": "About", "slug": "about"}))
    many = write(tmp_path / "pages.json", json.dumps([{"title": "A"}, {"title": "B", "lang": "en"}]))

    assert [p.title for p in JsonRecordLoader().load(one)] == ["About"]
    pages = JsonRecordLoader().load(many)
    assert [p.title for p in pages] == ["A", "B"]
    assert pages[1].lang == "en"


def test_json_with_bom(tmp_path):
    path = tmp_path / "bom.json"
    path.write_bytes(b"\xef\xbb\xbf" + json.dumps({"title": "Bom"}).encode("utf-8"))
    assert JsonRecordLoader().load(path)[0].title == "Bom"


def test_json_syntax_error(tmp_path):
    path = write(tmp_path / "broken.json", '{"title": ')
    with pytest.raises(RecordLoadError, match="Invalid JSON"):
        JsonRecordLoader().load(path)


def test_json_unknown_field_names_the_record(tmp_path):
    path = write(tmp_path / "pages.json", json.dumps([{"title": "A"}, {"headline": "B"}]))
    with pytest.raises(MetadataShapeError, match="record 1"):
        JsonRecordLoader().load(path)


def test_oversized_file_is_refused(tmp_path):
    path = write(tmp_path / "big.json", json.dumps({"description": "x" * 100}))
    with pytest.raises(RecordLoadError, match="limit"):
        JsonRecordLoader(max_bytes=10).load(path)


def test_yaml_timestamps_stay_as_written(tmp_path):
    path = write(
        tmp_path / "post.yaml",
        "title: Release notes\nupdated: 2025-05-20T12:30:00Z\nkeywords: [seo, metadata, yaml]\n",
    )
    page = YamlRecordLoader().load(path)[0]
    assert page.updated == "2025-05-20T12:30:00Z"
    assert page.keywords == "seo, metadata, yaml"


def test_yaml_plain_scalars_load_as_text(tmp_path):
    path = write(
        tmp_path / "no.yaml",
        "title: Hei\nlang: no\nslug: 2024\ndescription: 1.5\nauthor: yes\nog_image: ~\nkeywords: [2024, on, seo]\n",
    )
    page = YamlRecordLoader().load(path)[0]

    assert page.lang == "no"
    assert page.slug == "2024"
    assert page.description == "1.5"
    assert page.author == "yes"
    assert page.og_image is None
    assert page.keywords == "2024, on, seo"


def test_frontmatter_plain_scalars_load_as_text(tmp_path):
    path = write(tmp_path / "post.md", "---\ntitle: Hei\nlang: no\nslug: 2024\nupdated: 2025-05-20\n---\n")
    page = FrontmatterRecordLoader().load(path)[0]
    assert (page.lang, page.slug, page.updated) == ("no", "2024", "2025-05-20")


def test_empty_yaml_has_no_records(tmp_path):
    assert YamlRecordLoader().load(write(tmp_path / "empty.yml", "")) == []


def test_split_frontmatter():
    fm, body = split_frontmatter("---\ntitle: Hello\n---\n\n# Body\n")
    assert fm == {"title": "Hello"}
    assert body == "# Body\n"

    assert split_frontmatter("# No frontmatter\n") == ({}, "# No frontmatter\n")
    assert split_frontmatter("---\ntitle: unclosed\n")[0] == {}

    with pytest.raises(RecordLoadError):
        split_frontmatter("---\n- a\n- b\n---\n")


def test_frontmatter_top_level_ignores_other_keys(tmp_path):
    path = write(
        tmp_path / "note.md",
        "---\ntitle: Note\ntags: [a, b]\naliases: [n]\ncontent_type: post\n---\nBody\n",
    )
    pages = FrontmatterRecordLoader().load(path)
    assert len(pages) == 1
    assert pages[0].title == "Note"
    assert pages[0].content_type == "post"


def test_frontmatter_nested_seo_section_is_strict(tmp_path):
    ok = write(tmp_path / "ok.md", "---\ntags: [a]\nseo:\n  title: Nested\n  lang: en\n---\n")
    assert FrontmatterRecordLoader().load(ok)[0].title == "Nested"

    bad = write(tmp_path / "bad.md", "---\nseo:\n  headline: Nope\n---\n")
    with pytest.raises(MetadataShapeError):
        FrontmatterRecordLoader().load(bad)


def test_markdown_without_metadata_has_no_records(tmp_path):
    assert FrontmatterRecordLoader().load(write(tmp_path / "plain.md", "# Just text\n")) == []
    assert FrontmatterRecordLoader().load(write(tmp_path / "tags.md", "---\ntags: [a]\n---\n")) == []


# -------------------------
# Scanner
# -------------------------

def test_scanner_reads_supported_files(tmp_path):
    write(tmp_path / "a.json", json.dumps({"title": "A"}))
    write(tmp_path / "posts" / "b.yaml", "title: B\n")
    write(tmp_path / "posts" / "c.md", "---\ntitle: C\n---\n")
    write(tmp_path / "notes.txt", "ignored")
    write(tmp_path / ".drafts" / "d.json", json.dumps({"title": "D"}))

    records, report = FilesystemScanner().scan([str(tmp_path)])

    assert [page.title for _, page in records] == ["A", "B", "C"]
    assert report.scanned == 5
    assert report.loaded == 3
    assert report.skipped_hidden == 1
    assert report.skipped_extension == 1
    assert report.failed == 0
    assert report.by_extension == {".json": 1, ".yaml": 1, ".md": 1}


def test_scanner_include_hidden_and_no_recursion(tmp_path):
    write(tmp_path / "a.json", json.dumps({"title": "A"}))
    write(tmp_path / ".hidden.json", json.dumps({"title": "H"}))
    write(tmp_path / "sub" / "b.json", json.dumps({"title": "B"}))

    records, _ = FilesystemScanner(recursive=False, skip_hidden=False).scan([str(tmp_path)])
    assert sorted(page.title for _, page in records) == ["A", "H"]


def test_scanner_multi_record_sources(tmp_path):
    path = write(tmp_path / "pages.json", json.dumps([{"title": "A"}, {"title": "B"}]))
    records, _ = FilesystemScanner().scan([str(path)])
    assert [source for source, _ in records] == [f"{path.resolve()}#0", f"{path.resolve()}#1"]


def test_scanner_records_failures_and_continues(tmp_path):
    write(tmp_path / "bad.json", "{")
    write(tmp_path / "unknown.json", json.dumps({"headline": "x"}))
    write(tmp_path / "good.json", json.dumps({"title": "Good"}))

    records, report = FilesystemScanner().scan([str(tmp_path)])

    assert [page.title for _, page in records] == ["Good"]
    assert report.failed == 2
    assert sorted(Path(p).name for p, _ in report.failures) == ["bad.json", "unknown.json"]


def test_scanner_missing_input(tmp_path):
    records, report = FilesystemScanner().scan([str(tmp_path / "nope")])
    assert records == []
    assert report.scanned == 0
