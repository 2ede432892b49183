from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QObject, pyqtSignal

from qnote.domain.interfaces import IFileService, ISettingsService
from qnote.services.debounce import DebouncedAction
from qnote.services.ui.ports.dialogs import IFileDialogService
from qnote.utils.constants import (
    DEFAULT_AUTOSAVE_DELAY_MS,
    DEFAULT_NOTE_FILE_NAME,
    TEXT_FILTER,
)
from qnote.utils.paths import default_documents_dir

LOGGER = logging.getLogger(__name__)


class NoteStorage(QObject):
    """
    Single quick-note file that saves itself shortly after the user stops typing.

    The note file is created on first load when it does not exist yet. Its path is
    remembered in settings.
    """

    content_loaded = pyqtSignal(str)
    file_path_changed = pyqtSignal(object)  # Path
    saved = pyqtSignal(object)  # Path
    error_occurred = pyqtSignal(str, str)  # title, message

    def __init__(
        self,
        files: IFileService,
        settings: ISettingsService,
        *,
        dialogs: IFileDialogService | None = None,
        delay_ms: int = DEFAULT_AUTOSAVE_DELAY_MS,
        default_path: Path | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._files = files
        self._settings = settings
        self._dialogs = dialogs
        self._content = ""
        self._file_path = (
            settings.get_note_path()
            or default_path
            or default_documents_dir() / DEFAULT_NOTE_FILE_NAME
        )
        self._debounce = DebouncedAction(self.save_note, delay_ms, self)
        self.load_note()

    @property
    def content(self) -> str:
        return self._content

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def has_pending_save(self) -> bool:
        return self._debounce.is_pending

    def set_content(self, text: str) -> None:
        if text == self._content:
            return
        self._content = text
        self.schedule_save()

    def schedule_save(self) -> None:
        self._debounce.schedule()

    def cancel_pending_save(self) -> bool:
        return self._debounce.cancel()

    def load_note(self) -> None:
        path = self._file_path.expanduser()
        try:
            text = self._files.read_text(path)
        except FileNotFoundError:
            LOGGER.info("Creating quick note at %s", path)
            self._content = ""
            self.content_loaded.emit(self._content)
            self.save_note()
            return
        except (OSError, UnicodeDecodeError) as exc:
            self._content = ""
            self.content_loaded.emit(self._content)
            self._report("Load Error", f"Failed to load note:\n{path}: {exc}")
            return
        self._content = text
        self.content_loaded.emit(self._content)

    def save_note(self) -> bool:
        # an explicit save supersedes whatever was scheduled
        self._debounce.cancel()
        path = self._file_path.expanduser()
        try:
            self._files.write_text_atomic(path, self._content)
        except (OSError, UnicodeEncodeError) as exc:
            self._report("Save Error", f"Failed to save note:\n{path}: {exc}")
            return False
        self.saved.emit(path)
        return True

    def set_file_path(self, path: Path | str) -> None:
        """Switch to another note file; pending writes for the old file are dropped."""
        self._debounce.cancel()
        self._file_path = Path(path).expanduser()
        self._settings.set_note_path(self._file_path)
        self.file_path_changed.emit(self._file_path)
        self.load_note()

    def select_file(self) -> bool:
        if self._dialogs is None:
            return False
        chosen = self._dialogs.get_open_file(
            None, "Select a markdown file for your notes", str(self._file_path.parent), TEXT_FILTER
        )
        if chosen is None:
            return False
        self.set_file_path(chosen)
        return True

    def create_new_file(self) -> bool:
        if self._dialogs is None:
            return False
        chosen = self._dialogs.get_save_file(
            None,
            "Create a new markdown file for your notes",
            str(self._file_path.parent / DEFAULT_NOTE_FILE_NAME),
            TEXT_FILTER,
        )
        if chosen is None:
            return False
        self.set_file_path(chosen)
        return True

    def _report(self, title: str, message: str) -> None:
        LOGGER.warning("%s: %s", title, message)
        self.error_occurred.emit(title, message)
