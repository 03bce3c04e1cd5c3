"""nexara CLI: thin command-line wrappers around the public operations.

Usage:
    nexara --help
    nexara meta https://example.com
    nexara download https://example.com/file.zip ./file.zip
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

from nexara.client import request
from nexara.downloader import download_file
from nexara.errors import NexaraError
from nexara.extractor import extract_assets, get_meta
from nexara.logging_setup import configure_logging
from nexara.screenshot import DEFAULT_CROP, DEFAULT_WIDTH, capture_screenshot

app = typer.Typer(
    name="nexara",
    help="Fetch pages, extract metadata and assets, download files.",
    no_args_is_help=True,
)


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"[nexara] {exc}", err=True)
    raise typer.Exit(1)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING ...)."
    ),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level)


@app.command("get")
def get_cmd(
    url: str = typer.Argument(..., help="URL to fetch."),
    retries: Optional[int] = typer.Option(None, min=1, help="Maximum attempts."),
    insecure: bool = typer.Option(
        False, "--insecure", help="Skip TLS certificate verification."
    ),
) -> None:
    """Fetch a URL and print the response body."""
    options = {"verify": False} if insecure else None
    try:
        response = request(url, options, retries)
    except NexaraError as exc:
        _fail(exc)
    typer.echo(response.text)


@app.command("meta")
def meta_cmd(url: str = typer.Argument(..., help="Page URL.")) -> None:
    """Print title, description, image and keywords as JSON."""
    try:
        meta = get_meta(url)
    except NexaraError as exc:
        _fail(exc)
    _echo_json(meta.to_dict())


@app.command("assets")
def assets_cmd(url: str = typer.Argument(..., help="Page URL.")) -> None:
    """Print the unique links and images of a page as JSON."""
    try:
        assets = extract_assets(url)
    except NexaraError as exc:
        _fail(exc)
    _echo_json(assets.to_dict())


@app.command("download")
def download_cmd(
    url: str = typer.Argument(..., help="File URL."),
    destination: Path = typer.Argument(..., help="Local path to write."),
) -> None:
    """Stream a remote file to disk."""
    try:
        message = download_file(url, destination)
    except NexaraError as exc:
        _fail(exc)
    typer.echo(message)


@app.command("screenshot")
def screenshot_cmd(
    url: str = typer.Argument(..., help="Page URL to capture."),
    output: Path = typer.Argument(..., help="Where to save the image."),
    width: int = typer.Option(DEFAULT_WIDTH, help="Viewport width in pixels."),
    crop: int = typer.Option(DEFAULT_CROP, help="Crop height in pixels."),
) -> None:
    """Capture a screenshot through the hosted rendering service."""
    try:
        image = capture_screenshot(url, width=width, crop=crop)
    except NexaraError as exc:
        _fail(exc)
    try:
        output.write_bytes(image)
    except OSError as exc:
        _fail(exc)
    typer.echo(f"[screenshot] Saved {len(image)} bytes to {output}")


if __name__ == "__main__":
    app()
