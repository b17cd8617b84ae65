"""Static HTML renderer: one collapsible card per post."""

from datetime import datetime
from html import escape as html_escape

from .utils import debug_print, slugify

STYLE = """
body { font-family: Georgia, serif; max-width: 46rem; margin: 2rem auto; padding: 0 1rem; color: #222; }
h1 { text-align: center; }
.post-card { border: 1px solid #ddd; border-radius: 6px; margin: 1rem 0; background: #fff; }
.post-card.failed { border-color: #c66; }
.post-header { padding: 1rem 1.25rem; cursor: pointer; }
.post-header:focus { outline: 2px solid #58a; }
.post-title { margin: 0 0 .25rem; font-size: 1.3rem; }
.post-byline { color: #888; font-size: .85rem; margin: 0 0 .5rem; }
.post-excerpt { color: #555; margin: 0; }
.post-content { display: none; padding: 0 1.25rem 1rem; }
.post-card.active .post-content { display: block; }
.post-card.active .post-excerpt { display: none; }
.generated { color: #888; font-size: .8rem; text-align: center; }
"""

SCRIPT = """
function togglePost(id) {
    const content = document.getElementById(id);
    if (!content) return;
    const card = content.closest('.post-card');
    const header = card.querySelector('.post-header');
    const isOpen = card.classList.toggle('active');
    header.setAttribute('aria-expanded', isOpen ? 'true' : 'false');
    content.setAttribute('aria-hidden', isOpen ? 'false' : 'true');
}

function handleKey(evt, id) {
    if (evt.key === 'Enter' || evt.key === ' ') {
        evt.preventDefault();
        togglePost(id);
    }
}
"""


class CardRenderer:
    """Render PostRecords into a single HTML page of expandable cards."""

    def __init__(self, title="Posts", output_path="cards.html"):
        self.title = title
        self.output_path = output_path

    @staticmethod
    def _paragraph_html(paragraph):
        return "<p>" + "<br>\n".join(html_escape(s) for s in paragraph) + "</p>"

    @staticmethod
    def _content_id(post, index, used):
        base = f"post-{index + 1}-{slugify(post.filename)}"
        content_id = base
        n = 2
        while content_id in used:
            content_id = f"{base}-{n}"
            n += 1
        used.add(content_id)
        return content_id

    def _card_html(self, post, content_id):
        classes = "post-card failed" if post.failed else "post-card"
        lines = [
            f'<article class="{classes}">',
            f'  <div class="post-header" role="button" tabindex="0" '
            f'aria-expanded="false" aria-controls="{content_id}" '
            f'onclick="togglePost(\'{content_id}\')" '
            f'onkeydown="handleKey(event, \'{content_id}\')">',
            f'    <h2 class="post-title">{html_escape(post.title)}</h2>',
        ]
        if post.byline:
            lines.append(f'    <p class="post-byline">{html_escape(post.byline)}</p>')
        lines.append(f'    <p class="post-excerpt">{html_escape(post.excerpt)}</p>')
        lines.append("  </div>")
        lines.append(f'  <div class="post-content" id="{content_id}" aria-hidden="true">')
        for paragraph in post.paragraphs:
            lines.append("    " + self._paragraph_html(paragraph))
        lines.append("  </div>")
        lines.append("</article>")
        return "\n".join(lines)

    def render_page(self, posts):
        """Return the full HTML document for ``posts``."""
        used = set()
        cards = [
            self._card_html(post, self._content_id(post, i, used))
            for i, post in enumerate(posts)
        ]
        generated = f"Generated {datetime.now().strftime('%Y-%m-%d')}"
        return "\n".join([
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '<meta charset="utf-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1">',
            f"<title>{html_escape(self.title)}</title>",
            f"<style>{STYLE}</style>",
            "</head>",
            "<body>",
            f"<h1>{html_escape(self.title)}</h1>",
            *cards,
            f'<p class="generated">{generated}</p>',
            f"<script>{SCRIPT}</script>",
            "</body>",
            "</html>",
            "",
        ])

    def render(self, posts):
        """Write the card page to ``output_path``."""
        if not posts:
            print("No posts to render.")
            return
        debug_print(f"Rendering {len(posts)} cards to {self.output_path}")
        with open(self.output_path, "w", encoding="utf-8") as f:
            f.write(self.render_page(posts))
        print(f"HTML saved to {self.output_path}")
