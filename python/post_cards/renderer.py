"""PDF book renderer using reportlab."""

from datetime import datetime

from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    BaseDocTemplate,
    Frame,
    PageBreak,
    PageTemplate,
    Paragraph,
    Spacer,
)

from .models import PAPER_SIZES
from .utils import debug_print


class BookRenderer:
    """Render a list of PostRecords into a PDF book, one chapter per post."""

    MARGIN = 0.75 * inch

    # name -> (parent, overrides)
    STYLE_SPECS = {
        "BookTitle": ("Title", dict(fontSize=26, leading=32, alignment=TA_CENTER, spaceAfter=18)),
        "BookSubtitle": ("Normal", dict(fontSize=12, leading=16, alignment=TA_CENTER,
                                        textColor="#666666", spaceAfter=10)),
        "PostTitle": ("Heading2", dict(fontSize=17, leading=21, spaceBefore=0, spaceAfter=4)),
        "PostByline": ("Normal", dict(fontSize=9, leading=12, textColor="#888888", spaceAfter=10)),
        "PostTeaser": ("Italic", dict(fontSize=10.5, leading=14, textColor="#555555",
                                      leftIndent=12, spaceAfter=12)),
        "PostBody": ("Normal", dict(fontSize=11, leading=15, spaceAfter=8)),
        "PostFailed": ("Italic", dict(fontSize=11, leading=15, textColor="#aa3333", spaceAfter=8)),
    }

    def __init__(self, title="My Posts", output_path="book.pdf", paper_size="letter"):
        self.title = title
        self.output_path = output_path

        size = PAPER_SIZES.get(paper_size, letter)
        self.PAGE_WIDTH, self.PAGE_HEIGHT = size

        self.styles = getSampleStyleSheet()
        self._define_styles()

        debug_print(f"Paper size: {paper_size} ({self.PAGE_WIDTH:.1f}x{self.PAGE_HEIGHT:.1f})")

    def _define_styles(self):
        for name, (parent, overrides) in self.STYLE_SPECS.items():
            self.styles.add(ParagraphStyle(name=name, parent=self.styles[parent], **overrides))

    @staticmethod
    def _escape_xml(text):
        """Escape text for reportlab's paragraph markup."""
        return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    def _build_title_page(self, posts):
        """Build title page elements."""
        elements = []
        elements.append(Spacer(1, 2 * inch))
        elements.append(Paragraph(self._escape_xml(self.title), self.styles["BookTitle"]))
        elements.append(Spacer(1, 0.3 * inch))

        count_text = f"{len(posts)} posts"
        elements.append(Paragraph(count_text, self.styles["BookSubtitle"]))

        generated = f"Generated {datetime.now().strftime('%Y-%m-%d')}"
        elements.append(Spacer(1, 1 * inch))
        elements.append(Paragraph(generated, self.styles["BookSubtitle"]))
        elements.append(PageBreak())
        return elements

    def _build_post_elements(self, post, index):
        """Build flowable elements for a single post chapter."""
        elements = []

        title_text = self._escape_xml(post.title)
        anchor = f'<a name="post_{index}"/>'
        elements.append(Paragraph(f'{anchor}{title_text}', self.styles["PostTitle"]))

        if post.byline:
            elements.append(Paragraph(self._escape_xml(post.byline), self.styles["PostByline"]))

        teaser = post.meta.get("previewtext", "")
        if teaser and not post.failed:
            elements.append(Paragraph(self._escape_xml(teaser), self.styles["PostTeaser"]))

        style = self.styles["PostFailed" if post.failed else "PostBody"]
        for paragraph in post.paragraphs:
            para_text = "<br/>".join(self._escape_xml(s) for s in paragraph)
            elements.append(Paragraph(para_text, style))
        return elements

    def _draw_footer(self, canvas, doc):
        """Footer with the book title on the left and the page number on the right."""
        canvas.saveState()
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor("#888888")
        y = 0.5 * inch
        if canvas.getPageNumber() > 1:
            canvas.drawString(self.MARGIN, y, self.title)
        canvas.drawRightString(self.PAGE_WIDTH - self.MARGIN, y, str(canvas.getPageNumber()))
        canvas.restoreState()

    def _make_doc(self, path):
        pagesize = (self.PAGE_WIDTH, self.PAGE_HEIGHT)
        frame = Frame(
            self.MARGIN, self.MARGIN,
            self.PAGE_WIDTH - 2 * self.MARGIN, self.PAGE_HEIGHT - 2 * self.MARGIN,
            id='main',
            leftPadding=0, rightPadding=0,
            topPadding=0, bottomPadding=0,
        )
        doc = BaseDocTemplate(path, pagesize=pagesize, title=self.title)
        doc.addPageTemplates([
            PageTemplate(id='single', frames=[frame], onPage=self._draw_footer),
        ])
        return doc

    def build_elements(self, posts):
        """Return the flowables for the whole book."""
        elements = self._build_title_page(posts)
        for i, post in enumerate(posts):
            elements.extend(self._build_post_elements(post, i))
            elements.append(PageBreak())
        return elements

    def render(self, posts):
        """Render posts into a PDF book at ``output_path``."""
        if not posts:
            print("No posts to render.")
            return

        debug_print(f"Starting render: {len(posts)} posts")
        doc = self._make_doc(self.output_path)
        doc.build(self.build_elements(posts))
        print(f"PDF saved to {self.output_path}")
