"""
HTML metadata extraction for hand-written blog posts

Targeted regex lookups rather than a DOM parse: the posts are small,
hand-authored files and only a handful of fields are ever needed. Every
function is total - bad input yields None/False/'' instead of raising.
"""

import html
import re
from datetime import date
from typing import Optional


DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}', re.ASCII)

TITLE_PATTERN = re.compile(r'<title[^>]*>([\s\S]*?)</title>', re.I)
H1_PATTERN = re.compile(r'<h1[^>]*>([\s\S]*?)</h1>', re.I)
TAG_PATTERN = re.compile(r'<[^>]+>')


def _extract_meta_attribute(html_text, attribute: str, value) -> Optional[str]:
    """Match <meta ATTRIBUTE="value" content="..."> in either attribute order"""
    if not html_text or not isinstance(html_text, str):
        return None
    if not value or not isinstance(value, str):
        return None

    key = re.escape(value)

    # <meta name="key" content="...">
    pattern1 = re.compile(
        rf'<meta[^>]*{attribute}=["\']{key}["\'][^>]*content=["\']([^"\']*)["\']',
        re.I
    )
    match = pattern1.search(html_text)
    if match:
        return match.group(1).strip()

    # <meta content="..." name="key">
    pattern2 = re.compile(
        rf'<meta[^>]*content=["\']([^"\']*)["\'][^>]*{attribute}=["\']{key}["\']',
        re.I
    )
    match = pattern2.search(html_text)
    if match:
        return match.group(1).strip()

    return None


def extract_meta_tag(html_text, name) -> Optional[str]:
    """
    Return the content of <meta name="NAME" content="...">, or None.

    The content is trimmed but otherwise returned verbatim, so entities
    such as &quot; are left alone.
    """
    return _extract_meta_attribute(html_text, 'name', name)


def extract_meta_property(html_text, prop) -> Optional[str]:
    """Same as extract_meta_tag but keyed on property= (Open Graph tags)"""
    return _extract_meta_attribute(html_text, 'property', prop)


def extract_title(html_text) -> Optional[str]:
    """
    Return the page title.

    Uses the first <title> element; falls back to the first <h1> with its
    inner markup stripped. An unterminated <title> does not count.
    """
    if not html_text or not isinstance(html_text, str):
        return None

    title_match = TITLE_PATTERN.search(html_text)
    if title_match:
        return title_match.group(1).strip()

    h1_match = H1_PATTERN.search(html_text)
    if h1_match:
        return TAG_PATTERN.sub('', h1_match.group(1)).strip()

    return None


def escape_for_display(value) -> str:
    """HTML-escape &, <, >, " and ' (None becomes '')"""
    if value is None:
        return ''
    # html.escape replaces & first, so generated entities are never re-escaped
    return html.escape(str(value), quote=True)


def is_valid_calendar_date(value) -> bool:
    """True only for a zero-padded YYYY-MM-DD string naming a real date"""
    if not value or not isinstance(value, str):
        return False

    if not DATE_PATTERN.fullmatch(value):
        return False

    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return False

    return parsed.isoformat() == value


def extract_leading_date(filename) -> Optional[str]:
    """Return the YYYY-MM-DD prefix of a post filename (lexical only)"""
    if not filename or not isinstance(filename, str):
        return None

    match = DATE_PATTERN.match(filename)
    return match.group(0) if match else None
