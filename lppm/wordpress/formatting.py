# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Cleanup of WordPress post content and URLs for the JSON API.

Posts were pasted from an Angular admin tool and carry its wrapper divs,
empty paragraphs and site-relative image paths. These helpers turn them into
something the frontend can render as-is.

Assumptions:
- Cleanup is plain string/regex substitution, not HTML sanitizing
- Site-relative URLs are resolved against settings.wp_site_url
- Dates are rendered with English month/day names regardless of locale
"""
import re
from datetime import datetime
from typing import Optional

from bs4 import BeautifulSoup

from lppm.config import settings

NO_IMAGE_PLACEHOLDER = "https://placehold.co/600x400?text=No+Image"
EXCERPT_LENGTH = 150

_ANGULAR_WRAPPER = re.compile(r'<div class="ng-.*?">')
_EMPTY_PARAGRAPH = re.compile(r"<p>&nbsp;</p>")

_MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
_WEEKDAYS = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


def _site_url() -> str:
    return settings.wp_site_url.rstrip("/")


def clean_content(html: Optional[str]) -> str:
    """Strip editor wrappers from post HTML and absolutize image paths.

    Args:
        html: Raw post_content

    Returns:
        str: Cleaned HTML
    """
    if not html:
        return ""
    clean = _ANGULAR_WRAPPER.sub("", html)
    clean = clean.replace("</div>", "")
    clean = _EMPTY_PARAGRAPH.sub("", clean)
    return clean.replace('src="/wp-content', f'src="{_site_url()}/wp-content')


def strip_tags(html: str) -> str:
    """Return the text content of an HTML fragment.

    Entities are decoded ("&amp;" becomes "&", "&nbsp;" a no-break space),
    so excerpts are plain text and their length counts characters.
    """
    return BeautifulSoup(html, "html.parser").get_text()


def limit_text(text: str, limit: int = EXCERPT_LENGTH, end: str = "...") -> str:
    """Truncate text to ``limit`` characters, appending ``end`` when cut."""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + end


def make_excerpt(html: Optional[str], limit: int = EXCERPT_LENGTH) -> str:
    """Build a short plain-text teaser from post HTML."""
    return limit_text(strip_tags(clean_content(html)), limit)


def fix_image_url(url: Optional[str]) -> str:
    """Normalize an image URL for the frontend.

    Args:
        url: Attachment guid (may be empty, relative or plain http)

    Returns:
        str: Absolute https URL, or the no-image placeholder
    """
    if not url:
        return NO_IMAGE_PLACEHOLDER

    if url.startswith("/") and not url.startswith("//"):
        url = _site_url() + url

    url = url.replace("http://", "https://")

    if not url.startswith(("http://", "https://")):
        url = _site_url() + url

    return url


def absolute_url(url: Optional[str], site_url: str) -> str:
    """Resolve an attachment URL against ``site_url`` and force https."""
    url = url or ""
    if not url.startswith("http"):
        url = site_url + url
    return url.replace("http://", "https://")


def document_type(mime: Optional[str]) -> str:
    """Map a MIME type to the coarse file type shown in the UI."""
    mime = mime or ""
    if "pdf" in mime:
        return "pdf"
    if "word" in mime:
        return "word"
    if "excel" in mime or "spreadsheet" in mime:
        return "excel"
    if "powerpoint" in mime or "presentation" in mime:
        return "ppt"
    if "zip" in mime or "rar" in mime:
        return "archive"
    return "file"


def format_list_date(value: Optional[datetime]) -> str:
    """Format a post date for lists, e.g. "20 Nov 2025" ("" without a date)."""
    if value is None:
        return ""
    return f"{value.day:02d} {_MONTHS[value.month - 1][:3]} {value.year}"


def format_detail_date(value: Optional[datetime]) -> str:
    """Format a post date for the detail page, e.g. "Thursday, 20 November 2025".

    MySQL zero dates come back as None; those render as "".
    """
    if value is None:
        return ""
    return (
        f"{_WEEKDAYS[value.weekday()]}, {value.day:02d} "
        f"{_MONTHS[value.month - 1]} {value.year}"
    )
