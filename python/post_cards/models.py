"""Data models and constants for post card generation."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from reportlab.lib.pagesizes import letter, A4, legal, A3, A5, TABLOID

PAPER_SIZES = {
    "letter": letter,
    "a4": A4,
    "legal": legal,
    "a3": A3,
    "a5": A5,
    "tabloid": TABLOID,
}

EXCERPT_LIMIT = 160
EXCERPT_CUT = 157
ELLIPSIS = "…"
NO_PREVIEW = "(No preview)"
FAILED_EXCERPT = "Failed to load this post."
FAILED_PARAGRAPH = ("This post could not be loaded.",)

# A paragraph is a tuple of line-break segments.
Paragraph = Tuple[str, ...]


@dataclass(frozen=True)
class PostRecord:
    """One parsed post file."""
    filename: str
    title: str
    meta: Mapping[str, str] = field(default_factory=dict)
    excerpt: str = ""
    paragraphs: Tuple[Paragraph, ...] = ()
    failed: bool = False

    def __post_init__(self):
        # Freeze the containers so a record can't be changed after parsing.
        object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))
        object.__setattr__(
            self, "paragraphs", tuple(tuple(p) for p in self.paragraphs))

    def __hash__(self):
        # meta is a mappingproxy, which has no hash of its own.
        return hash((self.filename, self.title, tuple(sorted(self.meta.items())),
                     self.excerpt, self.paragraphs, self.failed))

    @property
    def byline(self):
        """Human readable line built from author, dates and read time."""
        parts = []
        if self.meta.get("author"):
            parts.append(f"By {self.meta['author']}")
        if self.meta.get("written"):
            parts.append(f"Written {self.meta['written']}")
        if self.meta.get("edited"):
            parts.append(f"Edited {self.meta['edited']}")
        if self.meta.get("readtime"):
            parts.append(f"{self.meta['readtime']} read")
        return " · ".join(parts)

    def text(self):
        """Plain text body, paragraphs separated by blank lines."""
        return "\n\n".join("\n".join(p) for p in self.paragraphs)
