import logging
import os
from pathlib import Path

LOG_DIR = Path(os.path.expanduser("~/.local/share/zoomview/logs"))
LOG_FILE = LOG_DIR / "zoomview.log"
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

def setup_logging(level: int = logging.INFO) -> None:
    """
    Initializes the logging system.
    Creates the directory structure if it doesn't exist.
    Configures the root logger to write to file.
    """
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"CRITICAL: Failed to create log directory: {e}")
        return

    logging.basicConfig(
        filename=str(LOG_FILE),
        level=level,
        format=LOG_FORMAT,
        filemode='a'
    )

    logging.getLogger("System").info(f"Logging initialized at {LOG_FILE}")

def get_logger(name: str) -> logging.Logger:
    """Returns a named logger instance."""
    return logging.getLogger(name)

def sanitize_path_for_log(path: str | None) -> str:
    """
    Keeps only the file name of a user path so home directories
    and folder names stay out of the log.
    """
    if path is None:
        return "[NONE]"

    name = Path(str(path)).name
    return name if name else "[EMPTY]"
