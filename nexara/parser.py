"""HTML parsing: raw markup (or a URL) to a queryable document handle."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from bs4 import BeautifulSoup

from nexara.client import request


def parse_html(html: Union[str, bytes]) -> BeautifulSoup:
    """Parse *html* with the stdlib-backed ``html.parser`` builder.

    Never raises on malformed markup; the parser repairs what it can.
    """
    return BeautifulSoup(html, "html.parser")


def fetch_and_parse(url: str, options: Optional[Mapping[str, Any]] = None) -> BeautifulSoup:
    """Fetch *url* and parse the decoded body.

    Raises:
        FetchError: Propagated from :func:`nexara.client.request`.
    """
    response = request(url, options)
    return parse_html(response.text)


load = parse_html
fetch_html = fetch_and_parse
