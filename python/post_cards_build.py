#!/usr/bin/env python3
"""
Post Cards Builder

Read an index of plain-text post files from a directory or web server and
render them as a page of collapsible cards (HTML) or as a PDF book.

Usage:
    # Local directory containing index.txt and the post files
    python post_cards_build.py --source ./posts --output cards.html

    # Posts served over HTTP, rendered as a PDF book
    python post_cards_build.py --source https://example.com/posts \\
        --output book.pdf --title "Collected Posts" --paper-size a5

    # Also export the parsed posts
    python post_cards_build.py --source ./posts --save posts.json

Post file format:
    Title: Hello
    Author: Sam
    Written: 2024-03-01
    content:
    Body text, paragraphs separated by blank lines.

Requires:
    - requests, reportlab, PyYAML
    - POST_CARDS_SOURCE env var may be used instead of --source
"""

import argparse
import os

from post_cards import (
    PAPER_SIZES,
    BookRenderer,
    CardRenderer,
    IndexLoadError,
    PostFetcher,
    save_posts,
    set_debug,
)
from post_cards.fetcher import DEFAULT_INDEX


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Render plain-text posts as HTML cards or a PDF book.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--source",
        help="Directory or http(s) URL holding the index and posts "
             "(overrides POST_CARDS_SOURCE env var).",
    )
    parser.add_argument(
        "--index", default=DEFAULT_INDEX,
        help=f"Index file name, relative to the source (default: {DEFAULT_INDEX}).",
    )
    parser.add_argument(
        "--title", default="Posts",
        help="Page or book title (default: Posts).",
    )
    parser.add_argument(
        "--output", default="cards.html",
        help="Output file path (default: cards.html).",
    )
    parser.add_argument(
        "--format", choices=["html", "pdf"],
        help="Output format (default: inferred from --output extension).",
    )
    parser.add_argument(
        "--paper-size", default="letter", choices=sorted(PAPER_SIZES),
        help="Paper size for PDF output (default: letter).",
    )
    parser.add_argument(
        "--save",
        help="Also save parsed posts to a .json, .yaml or .csv file.",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Print debug output.",
    )
    return parser.parse_args(argv)


def output_format(args):
    if args.format:
        return args.format
    ext = os.path.splitext(args.output)[1].lower()
    if ext == ".pdf":
        return "pdf"
    if ext in (".html", ".htm"):
        return "html"
    print(f"Error: Cannot infer output format from '{args.output}'. Use --format.")
    raise SystemExit(1)


def main(argv=None):
    args = parse_args(argv)
    set_debug(args.debug)

    source = args.source or os.environ.get("POST_CARDS_SOURCE")
    if not source:
        print("Error: --source or POST_CARDS_SOURCE is required.")
        raise SystemExit(1)
    fmt = output_format(args)

    print(f"Loading posts from {source}...")
    fetcher = PostFetcher(source, index_name=args.index)
    try:
        posts = fetcher.fetch_posts()
    except IndexLoadError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    if args.save:
        save_posts(posts, args.save)

    if not posts:
        print("No posts listed in the index.")
        raise SystemExit(0)

    if fmt == "pdf":
        renderer = BookRenderer(title=args.title, output_path=args.output,
                                paper_size=args.paper_size)
    else:
        renderer = CardRenderer(title=args.title, output_path=args.output)
    renderer.render(posts)


if __name__ == "__main__":
    main()
