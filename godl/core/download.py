"""Download functionality for godl."""
import logging
import re
import sys
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import certifi
import requests

from .. import constants
from ..utils.exceptions import DownloadError, InvalidURLError, ListingError

logger = logging.getLogger(__name__)


def format_bytes(size: int) -> str:
    """Convert bytes to human-readable format."""
    power = 2**10
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if size < power:
            return f"{size:.1f} {unit}"
        size /= power
    return f"{size:.1f} TB" # Handle values larger than TB

def validate_url(url: str) -> None:
    """Validate a URL for download.

    Args:
        url: URL to validate

    Raises:
        InvalidURLError: If URL is invalid
    """
    try:
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("Invalid URL structure")
        if parsed.scheme not in ['http', 'https']:
            raise ValueError("Unsupported URL scheme")
        if re.search(r'[^\w\-\.:]', parsed.netloc):
            raise ValueError("Invalid characters in domain")
    except ValueError as e:
        raise InvalidURLError(f"Invalid URL '{url}': {e}") from e

def fetch_listing(
    url: str,
    timeout: int = constants.REQUEST_TIMEOUT,
    session: Optional[requests.Session] = None
) -> bytes:
    """Fetch the raw markup of a release listing page.

    Args:
        url: Address of the listing
        timeout: Request timeout in seconds
        session: Optional requests session to issue the request with

    Returns:
        bytes: The response body

    Raises:
        InvalidURLError: If URL is invalid
        ListingError: If the request fails or does not return 200
    """
    validate_url(url)
    http = session or requests
    logger.debug("fetching listing %s", url)
    try:
        with http.get(url, verify=certifi.where(), timeout=timeout) as response:
            if response.status_code != 200:
                raise ListingError(f"status code error: {response.status_code} {response.reason}")
            return response.content
    except requests.exceptions.RequestException as e:
        raise ListingError(f"Failed to fetch listing {url}: {e}") from e

def download_file(
    url: str,
    destination: Path,
    timeout: int = constants.REQUEST_TIMEOUT,
    session: Optional[requests.Session] = None,
    show_progress: bool = True
) -> Path:
    """Download a file with progress tracking.

    The body is streamed to a .tmp sibling which is renamed onto destination
    once complete; a failed download leaves neither file behind.

    Args:
        url: The URL to download from
        destination: Path where the file should be saved
        timeout: Request timeout in seconds
        session: Optional requests session to issue the request with
        show_progress: Print a progress line while downloading

    Returns:
        Path: destination

    Raises:
        InvalidURLError: If URL is invalid
        DownloadError: If download fails
    """
    validate_url(url)

    destination.parent.mkdir(parents=True, exist_ok=True)
    tmp_file = destination.with_suffix(destination.suffix + ".tmp")
    http = session or requests
    total_downloaded = 0

    try:
        with http.get(url, stream=True, verify=certifi.where(), timeout=timeout) as response:
            if response.status_code != 200:
                raise DownloadError(f"status code error: {response.status_code} {response.reason}")

            total_size = int(response.headers.get('content-length', 0))

            with open(tmp_file, 'wb') as f:
                for chunk in response.iter_content(chunk_size=8192):
                    if not chunk:
                        continue
                    f.write(chunk)
                    total_downloaded += len(chunk)

                    if show_progress and total_size > 0:
                        progress = total_downloaded / total_size * 100
                        print(f"\rDownloading: {format_bytes(total_downloaded)}/{format_bytes(total_size)} ({progress:.1f}%)",
                              end='', flush=True)
        if show_progress:
            print()
        tmp_file.replace(destination)
    except requests.exceptions.RequestException as e:
        print(f"\nDownload failed: {e}", file=sys.stderr)
        tmp_file.unlink(missing_ok=True)
        raise DownloadError(f"Download failed: {e}") from e
    except OSError as e:
        print(f"\nDownload failed: {e}", file=sys.stderr)
        tmp_file.unlink(missing_ok=True)
        raise DownloadError(f"Download failed: {e}") from e
    except DownloadError:
        tmp_file.unlink(missing_ok=True)
        raise

    logger.debug("downloaded %s (%s) to %s", url, format_bytes(total_downloaded), destination)
    return destination
