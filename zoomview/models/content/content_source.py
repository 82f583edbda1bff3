from abc import ABC, abstractmethod
from typing import Optional

from PyQt6.QtGui import QImage


class ContentSource(ABC):
    """
    Abstract interface for anything the viewer can zoom into.
    Provides intrinsic pixel size and a renderable image.
    """

    @abstractmethod
    def load(self) -> None:
        """Validates the source and reads its intrinsic size."""
        pass

    @abstractmethod
    def get_size(self) -> tuple[int, int]:
        """Returns (width, height) in pixels. (0, 0) before load()."""
        pass

    @abstractmethod
    def render_image(self) -> Optional[QImage]:
        """
        Returns the full content as a QImage, or None on failure.
        May be slow; callers run it off the UI thread.
        """
        pass

    def describe(self) -> str:
        return type(self).__name__

    def close(self) -> None:
        pass
