"""Data models returned by the extractors."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class PageMeta:
    """SEO / OpenGraph metadata read from a single page.

    Missing values are empty strings, never ``None``.
    """

    url: str = ""
    title: str = ""
    description: str = ""
    image: str = ""
    keywords: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class Assets:
    """Unique link and image URLs found on a page, in document order."""

    links: Tuple[str, ...] = ()
    images: Tuple[str, ...] = ()

    def to_dict(self) -> dict[str, List[str]]:
        return {"links": list(self.links), "images": list(self.images)}
