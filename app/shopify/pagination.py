"""
Cursor pagination helpers for the Shopify REST API.

Shopify returns page boundaries in the ``Link`` response header:

    <https://shop/admin/api/2023-04/products.json?limit=20&page_info=abc>; rel="next"

The ``page_info`` value is opaque and is sent back unchanged to fetch the
neighbouring page.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import parse_qs, urlparse

PAGE_INFO_PARAM = "page_info"

# URLs may contain commas (fields=id,title), so match whole entries
# instead of splitting on ",". Other link params may precede rel.
LINK_ENTRY_RE = re.compile(
    r'<([^>]*)>(?:\s*;\s*(?!rel=)[^;,<]*)*\s*;\s*rel="([^"]+)"'
)


def parse_link_header(value: Optional[str]) -> Dict[str, str]:
    """
    Parse a Link header into a mapping of rel name to cursor.

    Args:
        value: Raw header value (may be None or empty)

    Returns:
        Dict like {"previous": "...", "next": "..."}; entries that are
        malformed or carry no page_info are left out
    """
    if not value:
        return {}

    links: Dict[str, str] = {}
    for match in LINK_ENTRY_RE.finditer(value):
        url, rel = match.group(1), match.group(2)
        query = parse_qs(urlparse(url).query)
        cursors = query.get(PAGE_INFO_PARAM)
        if cursors and cursors[0]:
            links[rel] = cursors[0]

    return links


@dataclass
class PaginationCursors:
    """Cursors for the pages around the current one."""

    previous: Optional[str] = None
    next: Optional[str] = None

    @classmethod
    def from_link_header(cls, value: Optional[str]) -> "PaginationCursors":
        links = parse_link_header(value)
        return cls(previous=links.get("previous"), next=links.get("next"))

    @property
    def has_previous(self) -> bool:
        return self.previous is not None

    @property
    def has_next(self) -> bool:
        return self.next is not None

    def to_response(self) -> dict:
        """Shape used by the admin UI."""
        return {
            "previous_page_info": self.previous,
            "next_page_info": self.next,
            "has_previous": self.has_previous,
            "has_next": self.has_next,
        }
