"""
Album Art - Resolve the cover image used for an album's conversions

Local paths are passed through untouched. http(s) URLs are downloaded once
into a working folder and the local copy is used instead.
"""

import hashlib
import os
from typing import Optional

import requests

from conversion.errors import ConfigurationError

HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'
}


def is_url(value: str) -> bool:
    return value.lower().startswith(('http://', 'https://'))


def _image_extension(url: str, content_type: str) -> str:
    """Guess a file extension from the response type, then the URL"""
    if 'png' in content_type:
        return '.png'
    if 'jpeg' in content_type or 'jpg' in content_type:
        return '.jpg'
    ext = os.path.splitext(url.split('?')[0])[1].lower()
    return ext if ext in ('.jpg', '.jpeg', '.png') else '.jpg'


def download_image(url: str, download_dir: str, timeout: float = 30) -> str:
    """
    Download image from URL into download_dir.

    The file name is derived from the URL, so the same URL always maps to
    the same local file.

    Returns:
        Path of the downloaded image

    Raises:
        ConfigurationError: if the request fails or returns a non-200 status
    """
    try:
        response = requests.get(url, headers=HEADERS, timeout=timeout)
    except requests.RequestException as e:
        raise ConfigurationError(f"Failed to download album art: {url}: {e}") from e

    if response.status_code != 200:
        raise ConfigurationError(
            f"Failed to download album art: {url} (HTTP {response.status_code})"
        )

    ext = _image_extension(url, response.headers.get('Content-Type', ''))
    name = hashlib.md5(url.encode('utf-8')).hexdigest()[:12]

    os.makedirs(download_dir, exist_ok=True)
    output_path = os.path.join(download_dir, f"cover_{name}{ext}")
    with open(output_path, 'wb') as f:
        f.write(response.content)

    return output_path


class AlbumArtResolver:
    """Turns manifest art references into local file paths, caching downloads"""

    def __init__(self, download_dir: str = 'temp', timeout: float = 30):
        self.download_dir = download_dir
        self.timeout = timeout
        self._downloaded = {}

    def resolve(self, art: Optional[str], dry_run: bool = False) -> Optional[str]:
        """Return a local path for art, downloading URLs unless dry_run"""
        if art is None or not is_url(art) or dry_run:
            return art

        if art not in self._downloaded:
            print(f"[Art] Downloading cover art: {art}")
            self._downloaded[art] = download_image(art, self.download_dir, self.timeout)

        return self._downloaded[art]
