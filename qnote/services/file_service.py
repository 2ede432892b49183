from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from qnote.domain.errors import DocumentNotFoundError
from qnote.domain.interfaces import IFileService

LOGGER = logging.getLogger(__name__)


class FileService(IFileService):
    """Atomic reads/writes for UTF-8 text files."""

    def exists(self, path: Path) -> bool:
        return Path(path).expanduser().is_file()

    def read_text(self, path: Path) -> str:
        target = Path(path).expanduser()
        try:
            data = target.read_bytes()
        except FileNotFoundError as exc:
            raise DocumentNotFoundError(target) from exc
        # bytes + decode keeps line endings exactly as stored
        return data.decode("utf-8")

    def write_text_atomic(self, path: Path, text: str) -> None:
        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        data = text.encode("utf-8")
        sf = QSaveFile(str(target))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open for write: {target}")
        sf.write(data)
        if not sf.commit():
            raise OSError(f"Commit failed for: {target}")
        LOGGER.debug("Wrote %d chars to %s", len(text), target)
