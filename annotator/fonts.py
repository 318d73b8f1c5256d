"""Request-scoped registration of the downloaded typeface.

Pillow loads TrueType fonts from a path, so the typeface bytes fetched for a
request are written to a temporary file under ``FONT_DIR``. Each
registration gets its own uniquely named file, so concurrent requests on the
same host never share or overwrite each other's typeface. The file is
removed when the request finishes, whatever its outcome.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional

from annotator import config
from annotator.errors import CleanupError

logger = logging.getLogger(__name__)


class FontHandle:
    """A typeface written to a temporary file for the duration of a request."""

    def __init__(self, path: str) -> None:
        self.path: Optional[str] = path

    @classmethod
    def register(cls, data: bytes, directory: Optional[str] = None) -> "FontHandle":
        """Write ``data`` to a new temporary ``.ttf`` file and return its handle."""
        directory = directory or config.FONT_DIR
        os.makedirs(directory, exist_ok=True)
        fd, path = tempfile.mkstemp(prefix="font-", suffix=".ttf", dir=directory)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except BaseException:
            # No handle exists yet, so nothing else would remove the file.
            os.unlink(path)
            raise
        logger.debug("Registered temporary font %s", path)
        return cls(path)

    @property
    def released(self) -> bool:
        return self.path is None

    def release(self) -> None:
        """Remove the temporary file. Calling this more than once is a no-op.

        Raises:
            CleanupError: If the file exists but cannot be removed.
        """
        if self.path is None:
            return
        path, self.path = self.path, None
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise CleanupError(f"Could not remove temporary font {path}: {exc}") from exc
        logger.debug("Released temporary font %s", path)


@contextmanager
def registered_font(data: bytes, directory: Optional[str] = None) -> Iterator[FontHandle]:
    """Register ``data`` as a font for the enclosed block, then release it.

    A failure to release is logged and swallowed so it never replaces the
    block's own result or exception.
    """
    handle = FontHandle.register(data, directory)
    try:
        yield handle
    finally:
        try:
            handle.release()
        except CleanupError:
            logger.exception("Failed to cleanup temporary font file")
