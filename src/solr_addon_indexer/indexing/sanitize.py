"""
Value Sanitization

Field values are stored in Solr as plain text. Values flagged as markup are
flattened to their text content; everything else passes through unchanged.
"""

from __future__ import annotations

from typing import Any, Optional

from bs4 import BeautifulSoup


def strip_tags(markup: str) -> str:
    """Return the text content of an HTML fragment, with all tags removed."""
    return BeautifulSoup(markup, "html.parser").get_text()


def filter_html(value: Any, is_html: bool) -> Optional[str]:
    """
    Prepare a raw field value for indexing.

    Returns ``None`` for a missing value so callers can drop it.
    """
    if value is None:
        return None

    if not isinstance(value, str):
        value = str(value)

    if is_html:
        return strip_tags(value)

    return value
