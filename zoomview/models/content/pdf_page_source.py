from pathlib import Path
from typing import Optional

from pypdf import PdfReader
from pdf2image import convert_from_path
from PIL.ImageQt import ImageQt
from PyQt6.QtGui import QImage

from .content_source import ContentSource
from ...utils.logging import get_logger, sanitize_path_for_log


class PdfPageSource(ContentSource):
    """
    A single PDF page as zoomable content.
    Size comes from the page mediabox (via pypdf), pixels from pdf2image.
    """
    DEFAULT_DPI = 144
    MIN_DPI = 36
    MAX_DPI = 600

    def __init__(self, file_path: str, page_index: int = 0, dpi: int | None = None):
        self._logger = get_logger("PdfPageSource")
        self._file_path = str(file_path)
        self._page_index = page_index
        # Clamp DPI to keep page rasters within reasonable memory bounds
        self._dpi = max(self.MIN_DPI, min(self.MAX_DPI, dpi or self.DEFAULT_DPI))
        self._size = (0, 0)
        self._page_count = 0

    def load(self) -> None:
        path = Path(self._file_path)
        if not path.exists():
            self._logger.error(f"File not found: {sanitize_path_for_log(self._file_path)}")
            raise FileNotFoundError("File does not exist")

        try:
            reader = PdfReader(str(path))
            self._page_count = len(reader.pages)
        except Exception as e:
            self._logger.error(f"Failed to load PDF: {e}")
            raise ValueError("Corrupt or unsupported PDF")

        if not 0 <= self._page_index < self._page_count:
            raise ValueError(
                f"Page {self._page_index} out of range (document has {self._page_count})"
            )

        page = reader.pages[self._page_index]
        box = page.mediabox
        # Mediabox is in points (72 DPI)
        scale = self._dpi / 72.0
        width, height = int(float(box.width) * scale), int(float(box.height) * scale)

        # pdf2image rasterizes with /Rotate applied
        if page.rotation % 180 == 90:
            width, height = height, width
        self._size = (width, height)
        self._logger.info(
            f"PDF page {self._page_index + 1}/{self._page_count} opened at "
            f"{self._dpi} DPI: {self._size[0]}x{self._size[1]}"
        )

    def get_size(self) -> tuple[int, int]:
        return self._size

    def get_page_count(self) -> int:
        return self._page_count

    def render_image(self) -> Optional[QImage]:
        try:
            images = convert_from_path(
                self._file_path,
                first_page=self._page_index + 1,
                last_page=self._page_index + 1,
                dpi=self._dpi
            )

            if not images:
                return None

            pil_image = images[0]
            if pil_image.mode != "RGB":
                pil_image = pil_image.convert("RGB")

            return ImageQt(pil_image).copy()

        except Exception as e:
            self._logger.error(f"Failed to render page {self._page_index}: {e}")
            return None

    def describe(self) -> str:
        return f"{sanitize_path_for_log(self._file_path)} p.{self._page_index + 1}"
