"""Concrete service implementations."""

from .debounce import DebouncedAction
from .document_manager import DocumentManager, PendingClose
from .file_service import FileService
from .note_storage import NoteStorage
from .settings_service import SettingsService

__all__ = [
    "DebouncedAction",
    "DocumentManager",
    "FileService",
    "NoteStorage",
    "PendingClose",
    "SettingsService",
]
