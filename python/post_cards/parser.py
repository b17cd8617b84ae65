"""Plain-text post parser.

A post file is an optional block of ``key: value`` header lines, a line
reading ``content:``, and then free-form body text::

    Title: Hello
    Author: Sam
    content:
    # Hello

    First paragraph,
    still the first paragraph.

    Second paragraph.

Parsing never fails. Header lines that don't look like ``key: value`` are
ignored, a file without ``content:`` has an empty body, and the title and
excerpt fall back to the body or the filename when the header is silent.
"""

import os

from .models import (
    ELLIPSIS,
    EXCERPT_CUT,
    EXCERPT_LIMIT,
    FAILED_EXCERPT,
    FAILED_PARAGRAPH,
    NO_PREVIEW,
    PostRecord,
)
from .utils import debug_print

TERMINATOR = "content:"


def normalize_newlines(text):
    """Drop a leading BOM and carriage returns so CRLF files parse like LF files."""
    return text.lstrip("\ufeff").replace("\r", "")


def parse_header_line(line):
    """Split a ``key: value`` header line.

    Returns:
        ``(key, value)`` with the key lowercased, or None when the line is
        not a header line.
    """
    line = line.strip()
    if ":" not in line:
        return None
    key, value = line.split(":", 1)
    key = key.rstrip()
    if not key or not key.isascii() or not key.isalpha():
        return None
    return key.lower(), value.strip()


def is_terminator(line):
    return line.strip().lower() == TERMINATOR


def split_header(text):
    """Split raw post text into metadata and body.

    Header lines are read until the ``content:`` line; blank lines among
    them are skipped and later duplicates of a key overwrite earlier ones.
    Without a terminator the whole file is header and the body is empty.

    Returns:
        ``(meta, body)`` where body is trimmed.
    """
    lines = normalize_newlines(text).split("\n")
    meta = {}
    body_start = len(lines)
    for i, line in enumerate(lines):
        if not line.strip():
            continue
        if is_terminator(line):
            body_start = i + 1
            break
        parsed = parse_header_line(line)
        if parsed is None:
            debug_print(f"Ignoring header line: {line!r}")
            continue
        key, value = parsed
        meta[key] = value
    else:
        debug_print("No content: line found, body is empty")

    body = "\n".join(lines[body_start:]).strip()
    return meta, body


def strip_heading(line):
    """Remove leading ``#`` heading markers and the whitespace after them."""
    line = line.strip()
    if line.startswith("#"):
        line = line.lstrip("#").lstrip()
    return line


def filename_stem(filename):
    """``posts/post-3.txt`` -> ``post-3``."""
    return os.path.splitext(os.path.basename(filename))[0]


def _first_nonblank(lines):
    for i, line in enumerate(lines):
        if line.strip():
            return i
    return None


def resolve_title(meta, body, filename):
    """Work out the post title, removing a duplicate title line from the body.

    Returns:
        ``(title, body)``; body is unchanged unless it opened with the
        header title.
    """
    title = (meta.get("title") or "").strip()
    if title:
        lines = body.split("\n")
        idx = _first_nonblank(lines)
        if idx is not None and strip_heading(lines[idx]) == title:
            debug_print(f"Dropping duplicate title line from body: {title!r}")
            body = "\n".join(lines[:idx] + lines[idx + 1:]).lstrip()
        return title, body

    if body:
        first = strip_heading(body.split("\n", 1)[0])
        if first:
            return first, body
    return filename_stem(filename), body


def build_paragraphs(body, limit=None):
    """Split body text into paragraphs of line-break segments.

    Paragraphs are separated by one or more whitespace-only lines. Each
    remaining line of a paragraph becomes one segment.

    Args:
        body: Body text.
        limit: Stop after this many paragraphs (None for all).

    Returns:
        Tuple of paragraphs, each a tuple of strings.
    """
    paragraphs = []
    block = []

    def flush():
        text = "\n".join(block).rstrip()
        if text:
            paragraphs.append(tuple(text.split("\n")))

    for line in body.split("\n"):
        if line.strip():
            block.append(line)
            continue
        if block:
            flush()
            block = []
        if limit is not None and len(paragraphs) >= limit:
            break
    if block:
        flush()
    return tuple(paragraphs)


def flatten_paragraph(paragraph):
    """Plain text of a paragraph, line breaks shown as spaces."""
    return " ".join(segment.strip() for segment in paragraph)


def truncate(text, limit=EXCERPT_LIMIT, cut=EXCERPT_CUT):
    """Shorten text to ``cut`` characters plus an ellipsis when over ``limit``."""
    if len(text) <= limit:
        return text
    return text[:cut].rstrip() + ELLIPSIS


def resolve_excerpt(meta, body):
    """Preview text: ``previewtext`` header, else the start of the body."""
    preview = (meta.get("previewtext") or "").strip()
    if preview:
        return preview
    first = build_paragraphs(body, limit=1)
    if not first:
        return NO_PREVIEW
    return truncate(flatten_paragraph(first[0]))


def parse_post(filename, content):
    """Parse one post file into a PostRecord."""
    meta, body = split_header(content)
    title, body = resolve_title(meta, body, filename)
    record = PostRecord(
        filename=filename,
        title=title,
        meta=meta,
        excerpt=resolve_excerpt(meta, body),
        paragraphs=build_paragraphs(body),
    )
    debug_print(f"Parsed {filename}: title={title!r}, "
                f"paragraphs={len(record.paragraphs)}, keys={sorted(meta)}")
    return record


def failed_post(filename):
    """Placeholder record for a post file that could not be fetched."""
    return PostRecord(
        filename=filename,
        title=filename,
        meta={},
        excerpt=FAILED_EXCERPT,
        paragraphs=(FAILED_PARAGRAPH,),
        failed=True,
    )
