import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QImage

from ..models.content.content_source import ContentSource
from ..utils.logging import get_logger


class ContentViewModel(QObject):
    """Loads content sources off the UI thread, one at a time."""
    load_started = pyqtSignal(str)
    content_loaded = pyqtSignal(QImage, int, int)
    load_failed = pyqtSignal(str)

    def __init__(self):
        super().__init__()
        self._logger = get_logger("ContentVM")
        self._executor = ThreadPoolExecutor(max_workers=1)
        self._source: Optional[ContentSource] = None
        self._current_task: Optional[asyncio.Task] = None

    def get_source(self) -> Optional[ContentSource]:
        return self._source

    async def load_content(self, source: ContentSource):
        """
        Reads size and pixels of the source in a worker thread.
        A newer call cancels a load that is still in flight.
        """
        if self._current_task and not self._current_task.done():
            self._current_task.cancel()

        self.load_started.emit(source.describe())
        self._current_task = asyncio.create_task(self._load_internal(source))

        try:
            await self._current_task
        except asyncio.CancelledError:
            self._logger.debug(f"Cancelled load of {source.describe()}")

    async def _load_internal(self, source: ContentSource):
        loop = asyncio.get_running_loop()

        try:
            await loop.run_in_executor(self._executor, source.load)
            image = await loop.run_in_executor(self._executor, source.render_image)
        except (FileNotFoundError, ValueError) as e:
            self._logger.warning(f"Load failed for {source.describe()}: {e}")
            self.load_failed.emit(str(e))
            return
        except Exception as e:
            self._logger.error(f"Unexpected error loading {source.describe()}: {e}")
            self.load_failed.emit(f"Could not open {source.describe()}")
            return

        if image is None or image.isNull():
            self.load_failed.emit(f"Could not render {source.describe()}")
            return

        width, height = source.get_size()
        if width <= 0 or height <= 0:
            width, height = image.width(), image.height()

        if self._source is not None and self._source is not source:
            self._source.close()
        self._source = source

        self._logger.info(f"Loaded {source.describe()}: {width}x{height}")
        self.content_loaded.emit(image, width, height)

    def close(self):
        """Cleanup threads on exit"""
        if self._current_task and not self._current_task.done():
            self._current_task.cancel()

        self._executor.shutdown(wait=False)
        if self._source is not None:
            self._source.close()
            self._source = None
