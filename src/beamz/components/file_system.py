from logging import getLogger
from pathlib import Path

from ..exceptions import FileSystemError
from .protocols import FileSystemWriterProtocol

_logger = getLogger(__name__)


class FileSystemWriter(FileSystemWriterProtocol):
    def write(self, path: Path, content: str) -> None:
        _logger.debug("Writing %s", path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf8")
        except OSError as e:
            raise FileSystemError(path, e.strerror or str(e)) from e
