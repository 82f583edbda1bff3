from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError
from PIL.ImageQt import ImageQt
from PyQt6.QtGui import QImage

from .content_source import ContentSource
from ...utils.logging import get_logger, sanitize_path_for_log


class ImageFileSource(ContentSource):
    """
    Image file on disk (PNG, JPEG, ...).
    load() reads only the header; pixels are decoded in render_image().
    """
    def __init__(self, file_path: str):
        self._logger = get_logger("ImageFileSource")
        self._file_path = str(file_path)
        self._size = (0, 0)

    def load(self) -> None:
        path = Path(self._file_path)
        if not path.exists():
            self._logger.error(f"File not found: {sanitize_path_for_log(self._file_path)}")
            raise FileNotFoundError("File does not exist")

        try:
            with Image.open(path) as img:
                self._size = img.size
        except Image.DecompressionBombError as e:
            self._logger.error(f"Refusing oversized image: {e}")
            raise ValueError("Image exceeds the decompression size limit")
        except (UnidentifiedImageError, OSError) as e:
            self._logger.error(f"Failed to read image header: {e}")
            raise ValueError("Corrupt or unsupported image")

        self._logger.info(
            f"Image opened: {sanitize_path_for_log(self._file_path)} "
            f"{self._size[0]}x{self._size[1]}"
        )

    def get_size(self) -> tuple[int, int]:
        return self._size

    def render_image(self) -> Optional[QImage]:
        try:
            with Image.open(self._file_path) as img:
                if img.mode not in ("RGB", "RGBA"):
                    img = img.convert("RGBA")
                return ImageQt(img).copy()
        except (Image.DecompressionBombError, UnidentifiedImageError, OSError) as e:
            self._logger.error(f"Failed to decode image: {e}")
            return None

    def describe(self) -> str:
        return sanitize_path_for_log(self._file_path)
