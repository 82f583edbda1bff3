import sys
import asyncio

import qasync
from PyQt6.QtWidgets import QApplication

from zoomview.views.main_window import MainWindow
from zoomview.utils.logging import setup_logging, get_logger


def main() -> None:
    setup_logging()
    logger = get_logger("Main")

    app = QApplication(sys.argv)
    app.setApplicationName("ZoomView")

    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    window = MainWindow()
    window.show()

    if len(sys.argv) > 1:
        loop.call_soon(window.load_file, sys.argv[1])
    else:
        logger.info("Started without a file")

    with loop:
        loop.run_forever()


if __name__ == "__main__":
    main()
