import io
import logging
from collections.abc import Iterable
from pathlib import Path

from PIL import Image

# Largest upload, as (long side, short side)
MAX_UPLOAD_SIZE = (2048, 768)

# Upload formats, most preferred first
UPLOAD_FORMATS = ["JPEG", "PNG", "WEBP"]


def load_image_for_upload(image_path: Path, supported_mime_types: Iterable[str]) -> bytes:
    """Read an image, shrink it to fit MAX_UPLOAD_SIZE, and encode it in the first format the model accepts.

    Raises ValueError if the model accepts none of UPLOAD_FORMATS, and OSError if the file isn't a readable image.
    """
    supported_mime_types = set(supported_mime_types)
    format_name = next((f for f in UPLOAD_FORMATS if f"image/{f.lower()}" in supported_mime_types), None)
    if format_name is None:
        logging.debug(f"supported_mime_types: {sorted(supported_mime_types)}")
        raise ValueError("No supported image format found")

    logging.debug(f"Loading {image_path} for upload as {format_name}")
    with Image.open(image_path) as img:
        long_side, short_side = MAX_UPLOAD_SIZE
        box = (long_side, short_side) if img.width >= img.height else (short_side, long_side)
        # thumbnail only ever shrinks, keeping the aspect ratio
        img.thumbnail(box, Image.Resampling.LANCZOS)
        # JPEG has no alpha channel and no palette
        if format_name == "JPEG" and img.mode != "RGB":
            img = img.convert("RGB")
        buffer = io.BytesIO()
        img.save(buffer, format=format_name)
        return buffer.getvalue()
