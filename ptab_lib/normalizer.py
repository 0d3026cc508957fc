# --- ptab_lib/normalizer.py ---
"""
ptab_lib/normalizer.py: Strips repeating headers, footers and page numbers.

Commonality is established across pages, so every operation here is a no-op
for an empty document or a single page.
"""
import logging

from .constants import PAGINATION_PATTERN, PAGINATION_SCAN_DEPTH

log_normalize = logging.getLogger("ptab.normalize")


def is_pagination(line) -> bool:
    """Checks whether a line looks like a page number once trimmed."""
    if line is None:
        return False
    return bool(PAGINATION_PATTERN.match(line.strip()))


def same_leading_line(pages) -> bool:
    """True when every page is non-empty and starts with page one's first line."""
    return all(pages) and all(lines[0] == pages[0][0] for lines in pages)


def same_trailing_line(pages) -> bool:
    """True when every page is non-empty and ends with page one's last line."""
    return all(pages) and all(lines[-1] == pages[0][-1] for lines in pages)


class PageNormalizer:
    """
    Removes page furniture from per-page line lists.

    Pages are copied on the way in, so the caller's lists are never modified.
    """

    def __init__(self, options):
        self.options = options

    def normalize(self, pages):
        """Applies the configured removals in pipeline order."""
        pages = [list(lines) for lines in pages]
        if self.options.removes_pagination:
            pages = self.remove_pagination(pages)
        if self.options.remove_page_headers:
            pages = self.remove_common_leading_lines(pages)
        if self.options.remove_page_footers:
            pages = self.remove_common_trailing_lines(pages)
        return pages

    def remove_pagination(self, pages):
        """Removes one page-number line near the top and/or bottom of each page."""
        if len(pages) < 2:
            return pages

        header = self.options.remove_pagination_from_header
        if header is True:
            self._remove_common_pagination(pages, from_top=True)
        elif header:
            self._remove_pagination_at(pages, header, from_top=True)

        footer = self.options.remove_pagination_from_footer
        if footer is True:
            self._remove_common_pagination(pages, from_top=False)
        elif footer:
            self._remove_pagination_at(pages, footer, from_top=False)
        return pages

    @staticmethod
    def _position(line_number, from_top):
        return line_number - 1 if from_top else -line_number

    def _remove_pagination_at(self, pages, line_number, from_top):
        pos = self._position(line_number, from_top)
        removed = 0
        for lines in pages:
            if len(lines) >= line_number and is_pagination(lines[pos]):
                del lines[pos]
                removed += 1
        log_normalize.debug(
            "Removed pagination at line %d from the %s of %d page(s)",
            line_number,
            "top" if from_top else "bottom",
            removed,
        )

    def _remove_common_pagination(self, pages, from_top):
        for line_number in range(1, PAGINATION_SCAN_DEPTH + 1):
            pos = self._position(line_number, from_top)
            if all(len(lines) >= line_number and is_pagination(lines[pos]) for lines in pages):
                for lines in pages:
                    del lines[pos]
                log_normalize.debug(
                    "Removed pagination at line %d from the %s of all pages",
                    line_number,
                    "top" if from_top else "bottom",
                )
                return

    def remove_common_leading_lines(self, pages):
        """Drops first lines while they are identical on every page."""
        if len(pages) < 2:
            return pages
        while same_leading_line(pages):
            log_normalize.debug("Removing common header line: '%s'", pages[0][0])
            for lines in pages:
                lines.pop(0)
        return pages

    def remove_common_trailing_lines(self, pages):
        """Drops last lines while they are identical on every page."""
        if len(pages) < 2:
            return pages
        while same_trailing_line(pages):
            log_normalize.debug("Removing common footer line: '%s'", pages[0][-1])
            for lines in pages:
                lines.pop()
        return pages
