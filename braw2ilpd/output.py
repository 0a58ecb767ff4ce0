"""
Output handling for the braw2ilpd tool.

Contains the atomic text writer used for both the ILPD payload and the
detailed attribute report.
"""

import os

import structlog

from .config.constants import TEMP_SUFFIX
from .models import WriteResult

logger = structlog.get_logger(__name__)


def _remove_quietly(path: str) -> None:
    try:
        if os.path.exists(path):
            os.remove(path)
    except OSError as e:
        logger.warning("Failed to remove temporary file", path=path, error=str(e))


def write_atomic(dest_path: str, content: str) -> WriteResult:
    """
    Write text to a file through a temporary sibling and a rename.

    The content goes to ``dest_path + ".tmp"``, is flushed, synced and closed,
    and only then renamed onto ``dest_path``. If anything fails before the
    rename, the temporary file is removed and the destination is untouched.

    Args:
        dest_path: Final path of the file
        content: Text to write (UTF-8, newlines written as given)

    Returns:
        WriteResult: success flag, destination path and error reason
    """
    temp_path = f"{dest_path}{TEMP_SUFFIX}"
    logger.debug("Writing file", path=dest_path, temp_path=temp_path, size=len(content))

    try:
        parent = os.path.dirname(dest_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        with open(temp_path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        os.replace(temp_path, dest_path)
    except (OSError, UnicodeEncodeError) as e:
        _remove_quietly(temp_path)
        logger.error("Failed to write file", path=dest_path, error=str(e))
        return WriteResult(success=False, path=dest_path, error=str(e))

    logger.debug("File written", path=dest_path)
    return WriteResult(success=True, path=dest_path)
