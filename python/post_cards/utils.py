"""Shared utilities: debug output, source and slug helpers."""

import re
import unicodedata

DEBUG = False


def set_debug(enabled):
    """Set the module-level DEBUG flag."""
    global DEBUG
    DEBUG = enabled


def debug_print(*args):
    """Print debug messages when DEBUG mode is enabled."""
    if DEBUG:
        print("[DEBUG]", *args)


def is_url(source):
    return source.lower().startswith(("http://", "https://"))


def slugify(text, max_length=80):
    """Make an id-safe slug, e.g. ``"Hello, World.txt"`` -> ``hello-world-txt``."""
    # Normalize Unicode (e.g. math-styled letters) before sanitizing
    normalized = unicodedata.normalize("NFKD", text)
    slug = re.sub(r'[^a-z0-9]+', '-', normalized.lower()).strip('-')[:max_length]
    return slug or "post"
