"""
Image Details: optional Pillow inspection of a classified image.

Signature matching says WHAT a file is; Pillow can add how big it is.
Only the header is parsed (Image.open is lazy), so this stays cheap even
for huge files.  Without Pillow every call returns None.
"""

from __future__ import annotations

import io
import os
import logging
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger(__name__)

# ── Pillow for header inspection ─────────────────────────────
try:
    from PIL import Image as _PILImage
    # Headers of very large images are still legitimate input here
    _PILImage.MAX_IMAGE_PIXELS = None
    _HAS_PILLOW = True
except ImportError:
    _HAS_PILLOW = False
    logger.info("Pillow not installed: image details disabled")


@dataclass(frozen=True)
class ImageDetails:
    format: str             # Pillow format name ("JPEG", "PNG", ...)
    width: int
    height: int
    mode: str               # "RGB", "RGBA", "L", ...
    frames: int = 1


def has_pillow() -> bool:
    return _HAS_PILLOW


def describe_image(
    source: Union[bytes, bytearray, str, "os.PathLike[str]"],
) -> Optional[ImageDetails]:
    """
    Read format, dimensions and mode from an image header.

    `source` is raw bytes or a filesystem path.  Returns None when Pillow
    is missing or cannot identify the data.
    """
    if not _HAS_PILLOW:
        return None

    if isinstance(source, (bytes, bytearray)):
        fp = io.BytesIO(source)
        label = f"<{len(source)} bytes>"
    else:
        fp = source
        label = os.fspath(source)

    try:
        with _PILImage.open(fp) as img:
            return ImageDetails(
                format=img.format or "",
                width=img.width,
                height=img.height,
                mode=img.mode,
                frames=getattr(img, "n_frames", 1),
            )
    except (OSError, ValueError, SyntaxError) as e:
        logger.debug("Pillow could not read %s: %s", label, e)
        return None
