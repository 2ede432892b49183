from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PyQt6.QtCore import QObject, pyqtSignal

from qnote.domain.errors import (
    DocumentError,
    DocumentIOError,
    DocumentPathConflictError,
    UserCancelledError,
)
from qnote.domain.interfaces import IFileService, ISettingsService
from qnote.domain.models import Document
from qnote.services.debounce import DebouncedAction
from qnote.services.ui.ports.dialogs import IFileDialogService
from qnote.services.ui.ports.messages import IMessageService, SaveDecision
from qnote.utils.constants import (
    DEFAULT_AUTOSAVE_DELAY_MS,
    TEXT_FILTER,
    UNTITLED_FILE_NAME,
)
from qnote.utils.paths import default_documents_dir, resolve_path

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingClose:
    """First phase of a close: the document and whether the user must decide about it."""

    document: Document
    needs_decision: bool


class DocumentManager(QObject):
    """
    Owns the open documents (in tab order), the active one, the default folder
    and the persisted session.

    Invariants kept by every public method:
      - at most one document per resolved file path (untitled ones are exempt)
      - the collection is never empty once construction or a close returns
    """

    documents_changed = pyqtSignal()
    active_changed = pyqtSignal(object)  # Document | None
    document_changed = pyqtSignal(object)  # Document (content, dirty flag or path)
    default_folder_changed = pyqtSignal(object)  # Path
    error_occurred = pyqtSignal(str, str)  # title, message

    def __init__(
        self,
        files: IFileService,
        settings: ISettingsService,
        *,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
        autosave: bool = False,
        autosave_delay_ms: int = DEFAULT_AUTOSAVE_DELAY_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._files = files
        self._settings = settings
        self._dialogs = dialogs
        self._messages = messages
        self._autosave = autosave
        self._autosave_delay_ms = autosave_delay_ms
        self._autosavers: dict[str, DebouncedAction] = {}

        self._documents: list[Document] = []
        self._active_id: str | None = None
        self._default_folder = self._initial_default_folder()

        self.restore_session()
        if not self._documents:
            self.new_document()

    # ------------------------------------------------------------------ state

    @property
    def documents(self) -> list[Document]:
        return list(self._documents)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def active_document(self) -> Document | None:
        if self._active_id is None:
            return None
        return next((d for d in self._documents if d.id == self._active_id), None)

    @property
    def active_index(self) -> int | None:
        if self._active_id is None:
            return None
        return next(
            (i for i, d in enumerate(self._documents) if d.id == self._active_id), None
        )

    @property
    def default_folder(self) -> Path:
        return self._default_folder

    @property
    def autosave_enabled(self) -> bool:
        return self._autosave

    def index_of(self, doc: Document) -> int | None:
        return next((i for i, d in enumerate(self._documents) if d.id == doc.id), None)

    def find_by_path(self, path: Path | str) -> Document | None:
        target = resolve_path(path)
        for doc in self._documents:
            if doc.file_path is not None and resolve_path(doc.file_path) == target:
                return doc
        return None

    def has_pending_save(self, doc: Document) -> bool:
        saver = self._autosavers.get(doc.id)
        return saver is not None and saver.is_pending

    # -------------------------------------------------------------- lifecycle

    def new_document(self) -> Document:
        doc = Document(files=self._files)
        self._append(doc)
        self._set_active(doc)
        self.documents_changed.emit()
        self._save_session()
        return doc

    def open_file(self, path: Path | str) -> Document:
        """
        Open ``path`` in a new tab, or switch to it if it is already open.

        Missing or unreadable files still produce a (empty) tab; read errors are
        reported through ``error_occurred``.
        """
        resolved = resolve_path(path)
        existing = self.find_by_path(resolved)
        if existing is not None:
            self._set_active(existing)
            return existing

        doc = Document(files=self._files, file_path=resolved)
        try:
            if not doc.load():
                LOGGER.info("Opened missing file %s as empty document", resolved)
        except DocumentIOError as exc:
            self._report("Open Error", f"Failed to open file:\n{exc}", exc)
        self._append(doc)
        self._set_active(doc)
        self.documents_changed.emit()
        self._save_session()
        return doc

    def open_document(self) -> list[Document]:
        """Ask for one or more files and open each of them."""
        if self._dialogs is None:
            return []
        paths = self._dialogs.get_open_files(
            None, "Open Notes", str(self._default_folder), TEXT_FILTER
        )
        return [self.open_file(p) for p in paths]

    def begin_close(self, doc: Document) -> PendingClose | None:
        """Phase one of closing ``doc``; None when it is not (or no longer) open."""
        if self.index_of(doc) is None:
            return None
        return PendingClose(document=doc, needs_decision=doc.is_dirty)

    def resume_close(self, pending: PendingClose, decision: SaveDecision) -> bool:
        """
        Phase two: apply the user's decision. Returns True if the document was closed.

        A cancelled decision, an aborted save-as or a failed save leave everything
        untouched.
        """
        doc = pending.document
        if self.index_of(doc) is None:
            return False
        if decision is SaveDecision.CANCEL:
            return False
        if decision is SaveDecision.SAVE:
            saved = self._save_as(doc) if doc.is_untitled else self._save(doc)
            if not saved:
                return False
        self._remove(doc)
        return True

    def close_document(
        self,
        doc: Document,
        should_save: bool = False,
        *,
        interactive: bool = False,
    ) -> bool:
        pending = self.begin_close(doc)
        if pending is None:
            return False
        if interactive:
            if pending.needs_decision:
                decision = self._ask_save_decision(doc)
            else:
                decision = SaveDecision.DISCARD
        elif should_save and not doc.is_untitled:
            decision = SaveDecision.SAVE
        else:
            decision = SaveDecision.DISCARD
        return self.resume_close(pending, decision)

    def close_active_document(self) -> bool:
        doc = self.active_document
        if doc is None:
            return False
        return self.close_document(doc, interactive=True)

    # ------------------------------------------------------------- navigation

    def set_active_document(self, doc: Document) -> None:
        if self.index_of(doc) is not None:
            self._set_active(doc)

    def next_tab(self) -> None:
        self._step(1)

    def previous_tab(self) -> None:
        self._step(-1)

    def _step(self, delta: int) -> None:
        index = self.active_index
        count = len(self._documents)
        if index is None or count < 2:
            return
        self._set_active(self._documents[(index + delta) % count])

    # ----------------------------------------------------------------- saving

    def save_active_document(self) -> bool:
        doc = self.active_document
        if doc is None:
            return False
        if doc.is_untitled:
            return self._save_as(doc)
        return self._save(doc)

    def save_active_document_as(self) -> bool:
        doc = self.active_document
        if doc is None:
            return False
        return self._save_as(doc)

    def _save(self, doc: Document) -> bool:
        self._cancel_pending_save(doc)
        try:
            doc.save()
        except DocumentIOError as exc:
            self._report("Save Error", f"Failed to save file:\n{exc}", exc)
            return False
        self.document_changed.emit(doc)
        return True

    def _save_as(self, doc: Document) -> bool:
        try:
            target = self._ask_save_path(doc)
        except UserCancelledError:
            LOGGER.debug("Save-as cancelled for %s", doc.file_name)
            return False

        other = self.find_by_path(target)
        if other is not None and other.id != doc.id:
            conflict = DocumentPathConflictError(target)
            self._report("Save Error", str(conflict), conflict)
            return False

        # a debounced save armed before the path change must not hit the new target
        self._cancel_pending_save(doc)
        previous = doc.file_path
        doc.file_path = target
        try:
            doc.save()
        except DocumentIOError as exc:
            doc.file_path = previous
            self._report("Save Error", f"Failed to save file:\n{exc}", exc)
            return False
        self.document_changed.emit(doc)
        self._save_session()
        return True

    def _autosave_document(self, doc: Document) -> None:
        if self.index_of(doc) is None or doc.is_untitled:
            return
        try:
            doc.save()
        except DocumentIOError as exc:
            self._report("Auto-save Error", f"Failed to save file:\n{exc}", exc)
            return
        LOGGER.debug("Auto-saved %s", doc.file_path)
        self.document_changed.emit(doc)

    # --------------------------------------------------------- default folder

    def select_default_folder(self, path: Path | str | None = None) -> Path | None:
        """Store ``path`` as default folder, or ask for one when no path is given."""
        if path is None:
            if self._dialogs is None:
                return None
            path = self._dialogs.get_directory(
                None, "Choose the default folder for new notes", str(self._default_folder)
            )
            if path is None:
                return None
        folder = resolve_path(path)
        self._default_folder = folder
        self._settings.set_default_folder(folder)
        self.default_folder_changed.emit(folder)
        return folder

    def _initial_default_folder(self) -> Path:
        saved = self._settings.get_default_folder()
        if saved is not None:
            return saved
        return default_documents_dir()

    # ---------------------------------------------------------------- session

    def restore_session(self) -> int:
        """
        Reopen the files recorded in settings. Paths that no longer exist are
        dropped silently. Returns the number of restored documents.
        """
        active_raw = self._settings.get_active_path()
        active_path = resolve_path(active_raw) if active_raw else None
        restored = 0
        for raw in self._settings.get_open_paths():
            path = resolve_path(raw)
            if not self._files.exists(path):
                LOGGER.info("Skipping missing session file %s", path)
                continue
            if self.find_by_path(path) is not None:
                continue
            doc = Document(files=self._files, file_path=path)
            try:
                doc.load()
            except DocumentIOError as exc:
                LOGGER.warning("Could not restore %s: %s", path, exc)
            self._append(doc)
            restored += 1
            if path == active_path:
                self._set_active(doc)

        if self._active_id is None and self._documents:
            self._set_active(self._documents[0])
        if restored:
            self.documents_changed.emit()
        return restored

    def _save_session(self) -> None:
        paths = [str(d.file_path) for d in self._documents if d.file_path is not None]
        active = self.active_document
        self._settings.set_open_paths(paths)
        self._settings.set_active_path(
            str(active.file_path) if active is not None and active.file_path else None
        )

    def shutdown(self) -> None:
        """Cancel pending auto-saves (without running them) and persist the session."""
        for saver in self._autosavers.values():
            saver.cancel()
        self._save_session()

    # ------------------------------------------------------------- internals

    def _append(self, doc: Document) -> None:
        self._documents.append(doc)
        self._observe(doc)

    def _remove(self, doc: Document) -> None:
        index = self.index_of(doc)
        if index is None:
            return
        was_active = doc.id == self._active_id
        self._unobserve(doc)
        del self._documents[index]

        if was_active:
            if not self._documents:
                replacement = Document(files=self._files)
                self._append(replacement)
                self._set_active(replacement)
            else:
                self._set_active(self._documents[min(index, len(self._documents) - 1)])

        self.documents_changed.emit()
        self._save_session()

    def _set_active(self, doc: Document) -> None:
        if doc.id == self._active_id:
            return
        self._active_id = doc.id
        self.active_changed.emit(doc)

    def _observe(self, doc: Document) -> None:
        doc.on_change = self._on_document_changed
        if self._autosave:
            self._autosavers[doc.id] = DebouncedAction(
                lambda d=doc: self._autosave_document(d), self._autosave_delay_ms, self
            )

    def _unobserve(self, doc: Document) -> None:
        doc.on_change = None
        saver = self._autosavers.pop(doc.id, None)
        if saver is not None:
            saver.cancel()
            saver.deleteLater()

    def _on_document_changed(self, doc: Document) -> None:
        saver = self._autosavers.get(doc.id)
        if saver is not None and not doc.is_untitled:
            saver.schedule()
        self.document_changed.emit(doc)

    def _cancel_pending_save(self, doc: Document) -> None:
        saver = self._autosavers.get(doc.id)
        if saver is not None:
            saver.cancel()

    def _ask_save_decision(self, doc: Document) -> SaveDecision:
        if self._messages is None:
            return SaveDecision.CANCEL
        return self._messages.ask_save_changes(None, doc.file_name)

    def _ask_save_path(self, doc: Document) -> Path:
        if self._dialogs is None:
            raise UserCancelledError("No file dialog available")
        name = UNTITLED_FILE_NAME if doc.is_untitled else doc.file_name
        chosen = self._dialogs.get_save_file(
            None, "Save Note", str(self._default_folder / name), TEXT_FILTER
        )
        if chosen is None:
            raise UserCancelledError("Save cancelled")
        return resolve_path(chosen)

    def _report(self, title: str, message: str, exc: DocumentError) -> None:
        LOGGER.warning("%s: %s", title, exc)
        self.error_occurred.emit(title, message)
        if self._messages is not None:
            self._messages.error(None, title, message)
