from __future__ import annotations

import os
from pathlib import Path
from typing import Any

# Headless Qt for CI; must be set before QApplication is created.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QEventLoop, QSettings, QTimer
from PyQt6.QtWidgets import QApplication

from qnote.services.document_manager import DocumentManager
from qnote.services.file_service import FileService
from qnote.services.settings_service import SettingsService
from qnote.services.ui.ports.messages import SaveDecision


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


def _spin(ms: int) -> None:
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


@pytest.fixture()
def spin(qapp):
    """Run the Qt event loop for a number of milliseconds so timers can fire."""
    return _spin


# --- Fakes for the UI ports ---


class FakeDialogs:
    """Scripted IFileDialogService: hands out queued answers and records calls."""

    def __init__(self) -> None:
        self.save_paths: list[Path | None] = []
        self.open_paths: list[Path] = []
        self.directory: Path | None = None
        self.calls: list[tuple[str, str | None]] = []

    def get_open_file(self, parent: Any, caption: str, start_dir: str | None, filter_str: str) -> Path | None:
        self.calls.append(("open_file", start_dir))
        return self.open_paths[0] if self.open_paths else None

    def get_open_files(self, parent: Any, caption: str, start_dir: str | None, filter_str: str) -> list[Path]:
        self.calls.append(("open_files", start_dir))
        return list(self.open_paths)

    def get_save_file(self, parent: Any, caption: str, start_path: str | None, filter_str: str) -> Path | None:
        self.calls.append(("save_file", start_path))
        return self.save_paths.pop(0) if self.save_paths else None

    def get_directory(self, parent: Any, caption: str, start_dir: str | None) -> Path | None:
        self.calls.append(("directory", start_dir))
        return self.directory


class FakeMessages:
    """Scripted IMessageService: answers save prompts from a queue and records errors."""

    def __init__(self) -> None:
        self.decisions: list[SaveDecision] = []
        self.asked: list[str] = []
        self.errors: list[tuple[str, str]] = []

    def error(self, parent: Any, title: str, text: str) -> None:
        self.errors.append((title, text))

    def ask_save_changes(self, parent: Any, document_name: str) -> SaveDecision:
        self.asked.append(document_name)
        return self.decisions.pop(0) if self.decisions else SaveDecision.CANCEL


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def dialogs() -> FakeDialogs:
    return FakeDialogs()


@pytest.fixture()
def messages() -> FakeMessages:
    return FakeMessages()


@pytest.fixture()
def notes_dir(tmp_path: Path) -> Path:
    d = tmp_path / "notes"
    d.mkdir()
    return d


@pytest.fixture()
def make_manager(qapp, file_service, settings_service, dialogs, messages, notes_dir):
    """Factory so tests can pre-seed settings before the manager restores its session."""

    def _make(**kwargs: Any) -> DocumentManager:
        if settings_service.get_default_folder() is None:
            settings_service.set_default_folder(notes_dir)
        kwargs.setdefault("dialogs", dialogs)
        kwargs.setdefault("messages", messages)
        return DocumentManager(file_service, settings_service, **kwargs)

    return _make


@pytest.fixture()
def manager(make_manager) -> DocumentManager:
    return make_manager()
