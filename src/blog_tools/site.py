"""
Page assembly helpers - fetch shared fragments and the post list.

These replace the on-load browser hooks: nothing is registered globally,
callers invoke assemble_page() or load_posts() when they need them.
"""

import json
import sys
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from .config import SiteConfig


REQUIRED_POST_FIELDS = ('title', 'url', 'date')


def fetch_text(url: str, timeout: float = 15) -> Optional[str]:
    """Fetch a URL and return its body, or None on any failure."""
    try:
        resp = httpx.get(url, timeout=timeout, follow_redirects=True)
        resp.raise_for_status()
        return resp.text
    except httpx.HTTPStatusError as e:
        print(f"Failed to load {url} ({e.response.status_code})", file=sys.stderr)
        return None
    except httpx.HTTPError as e:
        print(f"Fetch error for {url}: {e}", file=sys.stderr)
        return None


def include(page_html: str, fragment_html: Optional[str], selector: str) -> str:
    """
    Insert fragment_html as the content of the first element matching selector.

    The page is returned unchanged when an argument is missing or the
    selector matches nothing.
    """
    if not page_html or fragment_html is None or not selector:
        print("include: page, fragment and selector are required", file=sys.stderr)
        return page_html

    soup = BeautifulSoup(page_html, 'html.parser')
    element = soup.select_one(selector)
    if element is None:
        print(f'include: no element matches "{selector}"', file=sys.stderr)
        return page_html

    element.clear()
    fragment = BeautifulSoup(fragment_html, 'html.parser')
    for child in list(fragment.contents):
        element.append(child.extract())

    return str(soup)


def filter_posts(data) -> list:
    """Drop anything in a decoded posts.json that is not a usable post"""
    if not isinstance(data, list):
        print("posts.json is not a list", file=sys.stderr)
        return []

    posts = []
    for post in data:
        if not isinstance(post, dict):
            print(f"Skipping invalid post entry: {post!r}", file=sys.stderr)
            continue
        if not all(post.get(key) for key in REQUIRED_POST_FIELDS):
            print(f"Skipping post with missing fields: {post!r}", file=sys.stderr)
            continue
        posts.append(post)
    return posts


def load_posts(site_url: str, config: Optional[SiteConfig] = None) -> list:
    """Fetch posts.json from a running site; [] on any failure"""
    config = config or SiteConfig()
    text = fetch_text(site_url.rstrip('/') + config.posts_json_url)
    if text is None:
        return []

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        print(f"posts.json is not valid JSON: {e}", file=sys.stderr)
        return []

    return filter_posts(data)


def assemble_page(page_html: str, site_url: str, config: Optional[SiteConfig] = None) -> str:
    """Fill #site-header and #site-footer with the shared fragments"""
    config = config or SiteConfig()
    base = site_url.rstrip('/')

    for fragment_name, element_id in (
        (config.header_fragment, config.header_element_id),
        (config.footer_fragment, config.footer_element_id),
    ):
        fragment = fetch_text(base + config.asset_url(fragment_name))
        if fragment is not None:
            page_html = include(page_html, fragment, f'#{element_id}')

    return page_html
