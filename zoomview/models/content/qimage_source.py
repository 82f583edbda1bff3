from typing import Optional

from PyQt6.QtGui import QImage

from .content_source import ContentSource


class QImageSource(ContentSource):
    """An already decoded image held in memory."""

    def __init__(self, image: QImage, name: str = "image"):
        self._image = image
        self._name = name

    def load(self) -> None:
        if self._image is None or self._image.isNull():
            raise ValueError("Empty image")

    def get_size(self) -> tuple[int, int]:
        if self._image is None or self._image.isNull():
            return (0, 0)
        return (self._image.width(), self._image.height())

    def render_image(self) -> Optional[QImage]:
        return self._image

    def describe(self) -> str:
        return self._name

    def close(self) -> None:
        self._image = None
