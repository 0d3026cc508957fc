# --- ptab_lib/sources.py ---
"""
ptab_lib/sources.py: Page text sources feeding the extractor.

A source yields one plain-text string per page in document order. `pages()`
turns those strings into line lists without line terminators, which is the
shape the extractor consumes.
"""
import logging
import os
import statistics

from pdfminer.high_level import extract_pages
from pdfminer.layout import LTAnno, LTChar, LTTextLine

log_source = logging.getLogger("ptab.source")

PAGE_BREAK = "\f"


def split_page_text(text: str) -> list[str]:
    """Splits a page's text into lines, dropping `\\n` and `\\r\\n` endings."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class PageSource:
    """Base class for page sources."""

    def page_texts(self):
        raise NotImplementedError

    def pages(self) -> list[list[str]]:
        return [split_page_text(text) for text in self.page_texts()]


class StaticPageSource(PageSource):
    """A source over page texts that were decoded elsewhere."""

    def __init__(self, page_texts):
        self._page_texts = list(page_texts)

    def page_texts(self):
        return list(self._page_texts)


class TextPageSource(PageSource):
    """Reads a text file whose pages are separated by form feeds."""

    def __init__(self, text_path):
        self.text_path = text_path
        if not os.path.exists(self.text_path):
            raise FileNotFoundError(f"Text file not found: {self.text_path}")

    def page_texts(self):
        with open(self.text_path, "r", encoding="utf-8") as f:
            content = f.read()
        if not content:
            return []
        texts = content.split(PAGE_BREAK)
        # pdftotext ends the last page with a form feed as well.
        if len(texts) > 1 and texts[-1].strip() == "":
            texts.pop()
        log_source.info("Read %d page(s) from %s", len(texts), self.text_path)
        return texts


class PDFPageSource(PageSource):
    """
    Renders PDF pages as layout-preserving text with pdfminer.

    Characters are snapped to a monospace grid whose cell width is the median
    character width of the page, so columns keep their horizontal alignment.

    Args:
        pdf_path (str): The file path to the PDF.
        pages (set[int] | None): 1-based page numbers to render, or None for all.
    """

    def __init__(self, pdf_path, pages=None):
        self.pdf_path = pdf_path
        self.page_numbers = pages
        if not os.path.exists(self.pdf_path):
            raise FileNotFoundError(f"PDF file not found: {self.pdf_path}")

    def page_texts(self):
        texts = []
        for page_layout in extract_pages(self.pdf_path):
            if self.page_numbers is not None and page_layout.pageid not in self.page_numbers:
                continue
            texts.append(self.render_page(page_layout))
            log_source.debug("Rendered page %d", page_layout.pageid)
        log_source.info("Rendered %d page(s) from %s", len(texts), self.pdf_path)
        return texts

    def render_page(self, page_layout) -> str:
        """Renders one page layout as text lines, top to bottom."""
        lines = [
            line
            for line in self._find_elements_by_type(page_layout, LTTextLine)
            if line.get_text().strip()
        ]
        chars = [
            c for line in lines for c in line if isinstance(c, LTChar) and c.get_text().strip()
        ]
        if not chars:
            return ""
        char_width = statistics.median(c.width for c in chars) or 1.0
        origin = page_layout.x0

        rendered = []
        for group in self._group_visual_lines(lines):
            rendered.append(self._render_visual_line(group, origin, char_width))
        return "\n".join(rendered)

    def _find_elements_by_type(self, obj, t):
        """Recursively finds all layout elements of a specific type."""
        e = []
        if isinstance(obj, t):
            e.append(obj)
        elif hasattr(obj, "_objs"):
            for child in obj:
                e.extend(self._find_elements_by_type(child, t))
        return e

    @staticmethod
    def _group_visual_lines(lines):
        """Groups text lines sharing a baseline band, ordered top to bottom."""
        groups = []
        for line in sorted(lines, key=lambda ln: (-(ln.y0 + ln.y1) / 2, ln.x0)):
            center = (line.y0 + line.y1) / 2
            if groups:
                anchor = groups[-1][0]
                anchor_center = (anchor.y0 + anchor.y1) / 2
                if abs(anchor_center - center) <= (anchor.y1 - anchor.y0) / 2:
                    groups[-1].append(line)
                    continue
            groups.append([line])
        return [sorted(group, key=lambda ln: ln.x0) for group in groups]

    @staticmethod
    def _render_visual_line(group, origin, char_width) -> str:
        buf, cursor, last_x1, pending_space = [], 0, None, False
        for line in group:
            pending_space = last_x1 is not None
            for obj in line:
                if isinstance(obj, LTAnno):
                    pending_space = pending_space or obj.get_text() == " "
                    continue
                if not isinstance(obj, LTChar):
                    continue
                text = obj.get_text()
                if not text.strip():
                    pending_space = True
                    continue
                col = round((obj.x0 - origin) / char_width)
                if pending_space and cursor:
                    col = max(col, cursor + 1)
                elif not pending_space and last_x1 is not None and obj.x0 - last_x1 < char_width / 2:
                    col = cursor
                col = max(col, cursor)
                buf.append(" " * (col - cursor))
                buf.append(text)
                cursor = col + len(text)
                last_x1, pending_space = obj.x1, False
        return "".join(buf)


def open_page_source(path, pages=None) -> PageSource:
    """Picks a page source based on the file extension."""
    if os.path.splitext(path)[1].lower() == ".pdf":
        return PDFPageSource(path, pages)
    if pages:
        log_source.warning("Page selection is only supported for PDF input; ignoring it.")
    return TextPageSource(path)
