"""Post cards library.

Parses plain-text post files (``key: value`` header, ``content:`` line,
free-form body) into structured records and renders them as collapsible
HTML cards or a PDF book.
"""

from .models import PostRecord, PAPER_SIZES
from .utils import debug_print, set_debug
from .parser import parse_post, failed_post, split_header, build_paragraphs
from .fetcher import PostFetcher, IndexLoadError, parse_index, load_posts
from .cards import CardRenderer
from .renderer import BookRenderer
from .storage import save_posts, load_posts_from_file

__all__ = [
    "PostRecord",
    "PAPER_SIZES",
    "debug_print",
    "set_debug",
    "parse_post",
    "failed_post",
    "split_header",
    "build_paragraphs",
    "PostFetcher",
    "IndexLoadError",
    "parse_index",
    "load_posts",
    "CardRenderer",
    "BookRenderer",
    "save_posts",
    "load_posts_from_file",
]
