import dataclasses

import pytest

from post_cards.models import FAILED_EXCERPT, FAILED_PARAGRAPH, NO_PREVIEW
from post_cards.parser import (
    build_paragraphs,
    failed_post,
    parse_header_line,
    parse_post,
    resolve_excerpt,
    split_header,
    strip_heading,
)


def test_parse_header_line():
    assert parse_header_line("Title: Hello") == ("title", "Hello")
    assert parse_header_line("  AUTHOR :  Sam Lee  ") == ("author", "Sam Lee")
    assert parse_header_line("readtime:5 min") == ("readtime", "5 min")
    assert parse_header_line("Written: 2024-01-02 10:30") == ("written", "2024-01-02 10:30")
    assert parse_header_line("Empty:") == ("empty", "")
    assert parse_header_line("no colon here") is None
    assert parse_header_line("two words: x") is None
    assert parse_header_line("2019: y") is None
    assert parse_header_line(": nothing") is None


def test_split_header():
    meta, body = split_header("Title: A\n\nAuthor: B\ncontent:\n\n  Body here  \n\n")
    assert meta == {"title": "A", "author": "B"}
    assert body == "Body here"


def test_terminator_case_and_whitespace():
    meta, body = split_header("Title: A\n   CONTENT:  \nBody")
    assert meta == {"title": "A"}
    assert body == "Body"


def test_terminator_must_stand_alone():
    meta, body = split_header("content: inline\nBody")
    assert meta == {"content": "inline"}
    assert body == ""


def test_last_header_value_wins():
    post = parse_post("a.txt", "Title: First\ntitle: Second\ncontent:\nBody")
    assert post.meta["title"] == "Second"
    assert post.title == "Second"


def test_malformed_header_lines_ignored():
    text = "not a header\nkey with space: x\n2019: y\nAuthor : Sam\nMood: fine\ncontent:\nbody"
    post = parse_post("a.txt", text)
    assert dict(post.meta) == {"author": "Sam", "mood": "fine"}
    assert post.paragraphs == (("body",),)


def test_crlf_line_endings():
    post = parse_post("a.txt", "Title: A\r\ncontent:\r\nline1\r\nline2\r\n\r\nline3\r\n")
    assert post.paragraphs == (("line1", "line2"), ("line3",))


def test_no_content_line():
    post = parse_post("a.txt", "Title: T\nAuthor: A\nJust some text")
    assert post.title == "T"
    assert post.paragraphs == ()
    assert post.excerpt == NO_PREVIEW
    assert post.failed is False


def test_build_paragraphs():
    body = "a\nb  \n\n\n   \nc\n\t\nd\ne"
    assert build_paragraphs(body) == (("a", "b"), ("c",), ("d", "e"))
    assert build_paragraphs("") == ()
    assert build_paragraphs("   \n\n  ") == ()


def test_build_paragraphs_limit():
    assert build_paragraphs("a\n\nb\n\nc", limit=1) == (("a",),)
    assert build_paragraphs("a\n\nb\n\nc", limit=2) == (("a",), ("b",))
    assert build_paragraphs("a\n\nb", limit=5) == (("a",), ("b",))


def test_paragraph_keeps_leading_indent():
    assert build_paragraphs("  indented\nnext") == (("  indented", "next"),)


def test_strip_heading():
    assert strip_heading("# Hello") == "Hello"
    assert strip_heading("###Hello") == "Hello"
    assert strip_heading("  ## Hello  ") == "Hello"
    assert strip_heading("Hello #1") == "Hello #1"
    assert strip_heading("#") == ""


def test_title_dedup_removes_heading():
    post = parse_post("a.txt", "Title: Hello\ncontent:\n# Hello\n\nBody text")
    assert post.title == "Hello"
    assert post.paragraphs == (("Body text",),)
    assert post.excerpt == "Body text"


def test_title_dedup_plain_line():
    post = parse_post("a.txt", "Title: Hello\ncontent:\nHello\nBody text")
    assert post.paragraphs == (("Body text",),)


def test_title_dedup_exact_match_only():
    post = parse_post("a.txt", "Title: Hello\ncontent:\nHello world\n\nMore")
    assert post.paragraphs == (("Hello world",), ("More",))
    post = parse_post("a.txt", "Title: Hello\ncontent:\n# hello\n\nMore")
    assert post.paragraphs[0] == ("# hello",)


def test_title_from_body():
    post = parse_post("a.txt", "content:\nFirst line\n\nSecond paragraph")
    assert post.title == "First line"
    assert post.paragraphs == (("First line",), ("Second paragraph",))


def test_title_from_body_heading():
    post = parse_post("a.txt", "content:\n## A Heading\ntext")
    assert post.title == "A Heading"


def test_title_from_filename():
    assert parse_post("post-3.txt", "").title == "post-3"
    assert parse_post("posts/post-3.txt", "content:\n").title == "post-3"
    assert parse_post("notes", "content:\n#\n\ntext").title == "notes"


def test_blank_title_header_falls_back():
    post = parse_post("a.txt", "Title:   \ncontent:\nFrom body")
    assert post.title == "From body"


def test_excerpt_truncation():
    post = parse_post("a.txt", "content:\n" + "x" * 200)
    assert len(post.excerpt) <= 161
    assert post.excerpt.endswith("…")
    assert post.excerpt == "x" * 157 + "…"


def test_excerpt_exact_limit_not_truncated():
    post = parse_post("a.txt", "content:\n" + "y" * 160)
    assert post.excerpt == "y" * 160


def test_excerpt_joins_line_breaks():
    post = parse_post("a.txt", "content:\nfoo\nbar\n\nbaz")
    assert post.excerpt == "foo bar"


def test_excerpt_previewtext_passthrough():
    text = "PreviewText:  Short teaser \ncontent:\n" + "z" * 500
    post = parse_post("a.txt", text)
    assert post.excerpt == "Short teaser"


def test_excerpt_empty_body():
    assert resolve_excerpt({}, "") == NO_PREVIEW
    assert resolve_excerpt({"previewtext": ""}, "") == NO_PREVIEW


def test_parse_is_idempotent():
    text = "Title: T\nAuthor: A\ncontent:\n# T\n\nOne\ntwo\n\nThree"
    assert parse_post("t.txt", text) == parse_post("t.txt", text)


def test_failed_post():
    post = failed_post("missing.txt")
    assert post.title == "missing.txt"
    assert post.failed is True
    assert dict(post.meta) == {}
    assert post.excerpt == FAILED_EXCERPT
    assert post.paragraphs == (FAILED_PARAGRAPH,)


def test_record_is_immutable():
    post = parse_post("a.txt", "Title: T\ncontent:\nBody")
    with pytest.raises(dataclasses.FrozenInstanceError):
        post.title = "other"
    with pytest.raises(TypeError):
        post.meta["title"] = "other"


def test_byline():
    post = parse_post("a.txt", "Author: Sam\nWritten: 2024-01-01\nReadTime: 3 min\ncontent:\nx")
    assert post.byline == "By Sam · Written 2024-01-01 · 3 min read"
    assert parse_post("b.txt", "content:\nx").byline == ""


def test_leading_bom_is_ignored():
    post = parse_post("a.txt", "\ufeffcontent:\nHello body")
    assert post.paragraphs == (("Hello body",),)
    post = parse_post("b.txt", "\ufeffTitle: Hi\r\ncontent:\r\nbody")
    assert post.title == "Hi"
    assert dict(post.meta) == {"title": "Hi"}


def test_records_are_hashable():
    text = "Title: T\nAuthor: A\ncontent:\nBody"
    records = {parse_post("t.txt", text), parse_post("t.txt", text), failed_post("t.txt")}
    assert len(records) == 2
    assert hash(parse_post("t.txt", text)) == hash(parse_post("t.txt", text))
