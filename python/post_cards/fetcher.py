"""Load the post index and post files from a directory or a web server."""

import os
from urllib.parse import urljoin

import requests

from .parser import failed_post, parse_post
from .utils import debug_print, is_url

DEFAULT_INDEX = "index.txt"


class IndexLoadError(Exception):
    """The index file listing the posts could not be read."""


def parse_index(text):
    """Return post filenames from index text, in order.

    Blank lines and lines starting with ``#`` are skipped.
    """
    names = []
    for line in text.replace("\r", "").split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        names.append(line)
    return names


class PostFetcher:
    """Fetch post files listed in an index.

    ``source`` is either a local directory or an http(s) base URL; the
    index and post names are resolved relative to it.
    """

    def __init__(self, source, index_name=DEFAULT_INDEX, session=None):
        self.source = source
        self.index_name = index_name
        self.remote = is_url(source)
        self.session = None
        if self.remote:
            self.session = session or requests.Session()
            self.session.headers.update({
                "User-Agent": "Mozilla/5.0 (compatible; post-cards/1.0)"
            })

    def _location(self, name):
        if self.remote:
            return urljoin(self.source.rstrip("/") + "/", name)
        return os.path.join(self.source, name)

    def fetch_text(self, name):
        """Return the text of one file.

        Raises:
            requests.RequestException: remote fetch failed or was not 2xx.
            OSError: local file could not be read.
        """
        location = self._location(name)
        debug_print(f"Fetching {location}")
        if self.remote:
            resp = self.session.get(location)
            resp.raise_for_status()
            return resp.text
        with open(location, "r", encoding="utf-8") as f:
            return f.read()

    def load_index(self):
        """Read the index and return the ordered list of post filenames."""
        try:
            text = self.fetch_text(self.index_name)
        except (requests.RequestException, OSError, UnicodeDecodeError, ValueError) as e:
            raise IndexLoadError(
                f"Could not load index {self._location(self.index_name)}: {e}"
            ) from e
        names = parse_index(text)
        debug_print(f"Index lists {len(names)} posts")
        return names

    def fetch_post(self, name):
        """Fetch and parse one post; a failed fetch gives a placeholder record."""
        try:
            content = self.fetch_text(name)
        except (requests.RequestException, OSError, UnicodeDecodeError, ValueError) as e:
            print(f"Warning: Could not load post {name}: {e}")
            return failed_post(name)
        return parse_post(name, content)

    def fetch_posts(self, names=None):
        """Fetch every post in index order.

        Raises:
            IndexLoadError: only when ``names`` is None and the index can't
                be read. Individual post failures never raise.
        """
        if names is None:
            names = self.load_index()
        posts = []
        for i, name in enumerate(names):
            print(f"Loading post {i+1}/{len(names)}: {name}")
            posts.append(self.fetch_post(name))
        failed = sum(1 for p in posts if p.failed)
        if failed:
            print(f"Loaded {len(posts)} posts ({failed} failed).")
        else:
            print(f"Loaded {len(posts)} posts.")
        return posts


def load_posts(source, index_name=DEFAULT_INDEX):
    """Load and parse every post listed in ``source``'s index."""
    return PostFetcher(source, index_name=index_name).fetch_posts()
