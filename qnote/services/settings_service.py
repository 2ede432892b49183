from __future__ import annotations

from pathlib import Path
from typing import Iterable

from PyQt6.QtCore import QSettings

from qnote.domain.interfaces import ISettingsService
from qnote.utils.constants import (
    SETTINGS_ACTIVE_PATH,
    SETTINGS_DEFAULT_FOLDER,
    SETTINGS_NOTE_PATH,
    SETTINGS_OPEN_PATHS,
)


class SettingsService(ISettingsService):
    """Persist the default folder, the open-document session and the quick-note path."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_default_folder(self) -> Path | None:
        return self._get_path(SETTINGS_DEFAULT_FOLDER)

    def set_default_folder(self, folder: Path) -> None:
        self._s.setValue(SETTINGS_DEFAULT_FOLDER, str(folder))
        self._s.sync()

    def get_open_paths(self) -> list[str]:
        v = self._s.value(SETTINGS_OPEN_PATHS, [])
        # INI-backed QSettings hands back a bare string for one-element lists
        if isinstance(v, str):
            return [v] if v else []
        return [str(x) for x in v if x] if isinstance(v, list) else []

    def set_open_paths(self, paths: Iterable[str]) -> None:
        self._s.setValue(SETTINGS_OPEN_PATHS, list(paths))
        self._s.sync()

    def get_active_path(self) -> str | None:
        v = self._s.value(SETTINGS_ACTIVE_PATH, "")
        return v if isinstance(v, str) and v.strip() else None

    def set_active_path(self, path: str | None) -> None:
        if path:
            self._s.setValue(SETTINGS_ACTIVE_PATH, path)
        else:
            self._s.remove(SETTINGS_ACTIVE_PATH)
        self._s.sync()

    def get_note_path(self) -> Path | None:
        return self._get_path(SETTINGS_NOTE_PATH)

    def set_note_path(self, path: Path) -> None:
        self._s.setValue(SETTINGS_NOTE_PATH, str(path))
        self._s.sync()

    def _get_path(self, key: str) -> Path | None:
        value = self._s.value(key, "")
        if not isinstance(value, str) or not value.strip():
            return None
        return Path(value).expanduser()
