"""Image fetching and decoding for gallery tiles and the lightbox.

Bytes are downloaded from the collection service with requests, decoded and
bounded with Pillow, then converted to a detached `QImage`.
"""

from __future__ import annotations

from io import BytesIO
from typing import Any

from loguru import logger
from PIL import Image, ImageOps
from PySide6.QtGui import QImage
import requests

from infrastructure.utils import join_url


def load_pil_image(data: bytes, requested_side: int = 0) -> Image.Image:
    """Decode `data` with EXIF orientation applied, bounded by `requested_side`.

    Raises:
        OSError: If Pillow cannot identify or decode the bytes.
    """
    with Image.open(BytesIO(data)) as im:
        im = ImageOps.exif_transpose(im)
        if requested_side and requested_side > 0:
            im.thumbnail((requested_side, requested_side), Image.Resampling.LANCZOS)
        im.load()
        return im.copy()


def pil_to_qimage(pil_img: Any) -> QImage | None:
    """Convert a Pillow image to `QImage` and detach from the source buffer."""
    try:
        mode = pil_img.mode
        if mode not in ("RGBA", "RGB"):
            pil_img = pil_img.convert("RGBA")
            mode = pil_img.mode
        if mode == "RGB":
            data = pil_img.tobytes("raw", "RGB")
            qimg = QImage(
                data, pil_img.width, pil_img.height, pil_img.width * 3, QImage.Format_RGB888
            )
        else:
            data = pil_img.tobytes("raw", "RGBA")
            qimg = QImage(
                data, pil_img.width, pil_img.height, pil_img.width * 4, QImage.Format_RGBA8888
            )
        if qimg.isNull():
            return None
        return qimg.copy()
    except (ValueError, TypeError) as ex:
        logger.debug("PIL->QImage convert failed: {}", ex)
        return None


class ImageService:
    """Downloads photo assets from the collection service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch_bytes(self, url: str) -> bytes | None:
        """Return raw bytes for an asset path, or None on any HTTP failure."""
        full = join_url(self._base_url, url)
        try:
            response = self._session.get(full, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as ex:
            logger.error("Image fetch failed for {}: {}", full, ex)
            return None
        return response.content

    def get_thumbnail(self, url: str, side: int) -> QImage | None:
        """Return a tile image bounded by `side` pixels."""
        return self._get_image(url, side)

    def get_full(self, url: str) -> QImage | None:
        """Return the full-resolution image for the lightbox."""
        return self._get_image(url, 0)

    def _get_image(self, url: str, requested_side: int) -> QImage | None:
        data = self.fetch_bytes(url)
        if not data:
            return None
        try:
            pil_img = load_pil_image(data, requested_side)
        except OSError as ex:
            logger.error("Decode failed for {}: {}", url, ex)
            return None
        return pil_to_qimage(pil_img)
