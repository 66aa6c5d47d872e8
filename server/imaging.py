"""Pillow-backed EXIF extraction and upload optimization."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any

from loguru import logger
from PIL import Image, ImageOps, UnidentifiedImageError

from infrastructure.utils import format_number

MAX_WIDTH = 2500
JPEG_QUALITY = 85

# EXIF tag ids
TAG_MODEL = 0x0110
IFD_EXIF = 0x8769
TAG_EXPOSURE_TIME = 0x829A
TAG_FNUMBER = 0x829D
TAG_ISO = 0x8827
TAG_FOCAL_LENGTH = 0x920A
TAG_LENS_MODEL = 0xA434


class ImagingError(Exception):
    """Raised when an upload cannot be decoded or re-encoded."""


def _scalar(value: Any) -> float | None:
    if isinstance(value, (tuple, list)):
        value = value[0] if value else None
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError, ZeroDivisionError):
        return None


def format_shutter(exposure: float | None) -> str:
    """Render an exposure time like 1/200s or 2s; empty when unknown."""
    if not exposure:
        return ""
    if exposure < 1:
        return f"1/{round(1 / exposure)}s"
    return f"{format_number(exposure)}s"


def extract_exif(data: bytes) -> dict[str, Any]:
    """Summarize camera settings from image bytes.

    Raises:
        ImagingError: If the bytes are not a readable image.
    """
    try:
        with Image.open(BytesIO(data)) as im:
            exif = im.getexif()
    except (UnidentifiedImageError, OSError) as ex:
        raise ImagingError(f"cannot read EXIF: {ex}") from ex

    sub = exif.get_ifd(IFD_EXIF)
    model = str(exif.get(TAG_MODEL) or "").strip("\x00 ")
    lens = str(sub.get(TAG_LENS_MODEL) or "").strip("\x00 ")
    fnumber = _scalar(sub.get(TAG_FNUMBER))
    focal = _scalar(sub.get(TAG_FOCAL_LENGTH))
    iso = _scalar(sub.get(TAG_ISO))

    summary: dict[str, Any] = {
        "camera": model or "Unknown",
        "lens": lens,
        "aperture": f"f/{format_number(fnumber)}" if fnumber else "",
        "shutter": format_shutter(_scalar(sub.get(TAG_EXPOSURE_TIME))),
        "focal": f"{format_number(focal)}mm" if focal else "",
    }
    if iso:
        summary["iso"] = int(iso)
    return summary


def optimize_image(data: bytes, output_path: str | Path) -> Path:
    """Auto-rotate, bound the width and re-encode `data` as JPEG at `output_path`.

    Images narrower than the limit are never enlarged.

    Raises:
        ImagingError: If decoding or writing fails.
    """
    out = Path(output_path)
    try:
        with Image.open(BytesIO(data)) as im:
            img = ImageOps.exif_transpose(im)
            if img.width > MAX_WIDTH:
                height = max(1, round(img.height * MAX_WIDTH / img.width))
                img = img.resize((MAX_WIDTH, height), Image.Resampling.LANCZOS)
            if img.mode != "RGB":
                img = img.convert("RGB")
            out.parent.mkdir(parents=True, exist_ok=True)
            img.save(out, "JPEG", quality=JPEG_QUALITY)
    except (UnidentifiedImageError, OSError, ValueError) as ex:
        raise ImagingError(f"cannot optimize image: {ex}") from ex
    logger.info("Optimized upload written to {}", out)
    return out
