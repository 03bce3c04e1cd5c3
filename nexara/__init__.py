"""nexara: fetch web pages, parse HTML, extract meta tags and assets, download files."""

from nexara.client import get, request, stream
from nexara.downloader import download_file
from nexara.errors import DownloadError, FetchError, NexaraError
from nexara.extractor import collect_assets, extract_assets, extract_meta, get_meta
from nexara.models import Assets, PageMeta
from nexara.parser import fetch_and_parse, fetch_html, load, parse_html
from nexara.screenshot import capture_screenshot, screenshot_url, ssweb

__version__ = "1.0.0"

__all__ = [
    "request",
    "get",
    "stream",
    "parse_html",
    "load",
    "fetch_and_parse",
    "fetch_html",
    "get_meta",
    "extract_meta",
    "extract_assets",
    "collect_assets",
    "download_file",
    "capture_screenshot",
    "screenshot_url",
    "ssweb",
    "PageMeta",
    "Assets",
    "NexaraError",
    "FetchError",
    "DownloadError",
]
