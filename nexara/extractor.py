"""Meta tag and asset extraction on top of :mod:`nexara.parser`."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from bs4 import BeautifulSoup

from nexara.models import Assets, PageMeta
from nexara.parser import fetch_and_parse

# Hrefs that never leave the page.
_SKIPPED_LINK_PREFIXES = ("#", "javascript")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _first_content(soup: BeautifulSoup, *selectors: str) -> str:
    """Return the first non-empty ``content`` attribute matched by *selectors*."""
    for selector in selectors:
        tag = soup.select_one(selector)
        if tag is None:
            continue
        content = (tag.get("content") or "").strip()
        if content:
            return content
    return ""


def _dedupe(values: Iterable[str]) -> List[str]:
    """Drop repeated strings, keeping the first occurrence of each."""
    seen: set[str] = set()
    unique: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            unique.append(value)
    return unique


def _keep_link(href: str) -> bool:
    return bool(href) and not href.lower().startswith(_SKIPPED_LINK_PREFIXES)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_meta(soup: BeautifulSoup, url: str = "") -> PageMeta:
    """Read title, description, OpenGraph image and keywords from *soup*."""
    title_tag = soup.select_one("title")
    title = title_tag.get_text().strip() if title_tag else ""

    return PageMeta(
        url=url,
        title=title or _first_content(soup, 'meta[property="og:title"]'),
        description=_first_content(
            soup, 'meta[name="description"]', 'meta[property="og:description"]'
        ),
        image=_first_content(soup, 'meta[property="og:image"]'),
        keywords=_first_content(soup, 'meta[name="keywords"]'),
    )


def collect_assets(soup: BeautifulSoup) -> Assets:
    """Collect unique ``<a href>`` and ``<img src>`` values from *soup*.

    In-page fragments (``#top``) and ``javascript:`` pseudo-links are
    excluded.  Values are returned exactly as written in the markup.
    """
    links = [a.get("href") or "" for a in soup.select("a[href]")]
    images = [img.get("src") or "" for img in soup.select("img[src]")]

    return Assets(
        links=tuple(_dedupe(href for href in links if _keep_link(href))),
        images=tuple(_dedupe(src for src in images if src)),
    )


def get_meta(url: str, options: Optional[Mapping[str, Any]] = None) -> PageMeta:
    """Fetch *url* and return its :class:`PageMeta`.

    Raises:
        FetchError: Propagated from the request primitive.
    """
    return extract_meta(fetch_and_parse(url, options), url)


def extract_assets(url: str, options: Optional[Mapping[str, Any]] = None) -> Assets:
    """Fetch *url* and return its :class:`Assets`.

    Raises:
        FetchError: Propagated from the request primitive.
    """
    return collect_assets(fetch_and_parse(url, options))
