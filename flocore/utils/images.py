"""Image helpers for multimodal generation requests"""

import base64
import io

from PIL import Image


def load_image_from_bytes(data: bytes) -> Image.Image:
    """Load an image from raw bytes"""
    return Image.open(io.BytesIO(data))


def image_to_bytes(image: Image.Image, format: str = "JPEG", quality: int = 85) -> bytes:
    """Encode an image to bytes (JPEG by default, as camera frames are sent)"""
    if format.upper() == "JPEG" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    buffer = io.BytesIO()
    if format.upper() == "JPEG":
        image.save(buffer, format=format, quality=quality)
    else:
        image.save(buffer, format=format)
    return buffer.getvalue()


def resize_image(
    image: Image.Image, max_width: int = 1536, max_height: int = 1536
) -> Image.Image:
    """Resize an image, keeping the aspect ratio"""
    if image.width <= max_width and image.height <= max_height:
        return image

    ratio = min(max_width / image.width, max_height / image.height)
    new_size = (int(image.width * ratio), int(image.height * ratio))

    return image.resize(new_size, Image.Resampling.LANCZOS)


def decode_base64_image(data: str) -> bytes:
    """Decode base64 image data, accepting an optional data-URL prefix"""
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    return base64.b64decode(data)
