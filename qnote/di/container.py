from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings

from qnote.domain.interfaces import IAppConfig, IFileService, ISettingsService
from qnote.services.config.app_config import build_app_config
from qnote.services.document_manager import DocumentManager
from qnote.services.file_service import FileService
from qnote.services.note_storage import NoteStorage
from qnote.services.settings_service import SettingsService
from qnote.services.ui.adapters import QtFileDialogService, QtMessageService
from qnote.services.ui.main_window import MainWindow
from qnote.services.ui.ports import IFileDialogService, IMessageService
from qnote.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Owns the single DocumentManager for the process (created lazily)
      - Builds the main window around it
    """

    def __init__(
        self,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        config: IAppConfig | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
    ) -> None:
        self.config: IAppConfig = config or build_app_config()
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.dialogs: IFileDialogService = dialogs or QtFileDialogService()
        self.messages: IMessageService = messages or QtMessageService()

        self._manager: DocumentManager | None = None
        self._note_storage: NoteStorage | None = None

    # ---------- Class helpers ----------

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        organization: str = APP_ORG,
        application: str = APP_NAME,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(qsettings=qsettings)

    # ---------- Services ----------

    @property
    def document_manager(self) -> DocumentManager:
        if self._manager is None:
            self._manager = DocumentManager(
                self.file_service,
                self.settings_service,
                dialogs=self.dialogs,
                messages=self.messages,
                autosave=self.config.autosave_documents(),
                autosave_delay_ms=self.config.autosave_delay_ms(),
            )
        return self._manager

    @property
    def note_storage(self) -> NoteStorage:
        if self._note_storage is None:
            self._note_storage = NoteStorage(
                self.file_service,
                self.settings_service,
                dialogs=self.dialogs,
                delay_ms=self.config.autosave_delay_ms(),
            )
        return self._note_storage

    # ---------- UI factories ----------

    def build_main_window(
        self,
        *,
        start_paths: list[Path] | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        """Create the window around the shared manager and open any start-up paths."""
        manager = self.document_manager
        for path in start_paths or []:
            manager.open_file(path)
        return MainWindow(manager, messages=self.messages, app_title=app_title)
