"""Stream a remote file to disk."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import httpx

from nexara.client import stream
from nexara.config import settings
from nexara.errors import DownloadError, NexaraError

logger = logging.getLogger(__name__)


def _final_mode(target: Path) -> int:
    """Permission bits *target* should end up with.

    An existing file keeps its mode; a new one gets 0666 minus the umask.
    """
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def download_file(
    url: str,
    destination: Union[str, Path],
    options: Optional[Mapping[str, Any]] = None,
    retries: Optional[int] = None,
) -> str:
    """Download *url* to *destination* without holding the body in memory.

    The body is written to a hidden ``.part`` file next to *destination* and
    moved into place once the transfer completes, so *destination* is either
    the complete file or untouched.  An existing file is overwritten.

    Returns:
        A success message naming *destination*.

    Raises:
        DownloadError: On any network or filesystem failure.
    """
    target = Path(destination)
    part_path: Optional[Path] = None
    written = 0
    completed = False

    try:
        with stream(url, options, retries) as response:
            with tempfile.NamedTemporaryFile(
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".part",
                delete=False,
            ) as sink:
                part_path = Path(sink.name)
                for chunk in response.iter_bytes(chunk_size=settings.download_chunk_size):
                    sink.write(chunk)
                    written += len(chunk)
        # NamedTemporaryFile creates 0600 files.
        os.chmod(part_path, _final_mode(target))
        os.replace(part_path, target)
        completed = True
    except (NexaraError, httpx.HTTPError, OSError) as exc:
        logger.error("Download of %s to %s failed: %s", url, target, exc)
        raise DownloadError(url, destination, exc) from exc
    finally:
        if not completed and part_path is not None:
            part_path.unlink(missing_ok=True)

    logger.info("Downloaded %s -> %s (%d bytes)", url, target, written)
    return f"File successfully downloaded to {destination}"
