from __future__ import annotations

import logging

from PyQt6.QtGui import QAction, QCloseEvent, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow,
    QPlainTextEdit,
    QStatusBar,
    QTabBar,
    QVBoxLayout,
    QWidget,
)

from qnote.domain.models import Document
from qnote.services.document_manager import DocumentManager
from qnote.services.ui.ports.messages import IMessageService, SaveDecision
from qnote.utils.constants import APP_NAME

LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Thin tab strip + plain-text editor; every action is delegated to the DocumentManager."""

    def __init__(
        self,
        manager: DocumentManager,
        *,
        messages: IMessageService | None = None,
        app_title: str = APP_NAME,
    ) -> None:
        super().__init__()
        self.setWindowTitle(app_title)
        self.resize(800, 600)

        self.manager = manager
        self.messages = messages
        self._app_title = app_title
        self._syncing = False

        self.tabs = QTabBar(self)
        self.tabs.setTabsClosable(True)
        self.tabs.setMovable(False)
        self.tabs.setExpanding(False)

        self.editor = QPlainTextEdit(self)
        self.editor.setTabStopDistance(4 * self.editor.fontMetrics().horizontalAdvance(" "))

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.tabs)
        layout.addWidget(self.editor)
        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar(self))

        self._build_actions()
        self._build_menu()

        # view -> manager
        self.editor.textChanged.connect(self._on_text_changed)
        self.tabs.currentChanged.connect(self._on_tab_selected)
        self.tabs.tabCloseRequested.connect(self._on_tab_close_requested)

        # manager -> view
        self.manager.documents_changed.connect(self._rebuild_tabs)
        self.manager.active_changed.connect(self._show_active)
        self.manager.document_changed.connect(self._refresh_titles)
        self.manager.error_occurred.connect(self._on_error)

        self._rebuild_tabs()

    # ---------- UI creation ----------
    def _build_actions(self) -> None:
        self.act_new = QAction(
            "New", self, shortcut=QKeySequence.StandardKey.New, triggered=self.manager.new_document
        )
        self.act_open = QAction(
            "Open…",
            self,
            shortcut=QKeySequence.StandardKey.Open,
            triggered=self.manager.open_document,
        )
        self.act_save = QAction(
            "Save",
            self,
            shortcut=QKeySequence.StandardKey.Save,
            triggered=self.manager.save_active_document,
        )
        self.act_save_as = QAction(
            "Save As…",
            self,
            shortcut=QKeySequence.StandardKey.SaveAs,
            triggered=self.manager.save_active_document_as,
        )
        self.act_close_tab = QAction(
            "Close Tab",
            self,
            shortcut=QKeySequence.StandardKey.Close,
            triggered=self.manager.close_active_document,
        )
        self.act_next_tab = QAction(
            "Next Tab", self, shortcut="Ctrl+Tab", triggered=self.manager.next_tab
        )
        self.act_prev_tab = QAction(
            "Previous Tab", self, shortcut="Ctrl+Shift+Tab", triggered=self.manager.previous_tab
        )
        self.act_default_folder = QAction(
            "Choose Default Folder…",
            self,
            triggered=lambda: self.manager.select_default_folder(),
        )
        self.act_quit = QAction(
            "Quit", self, shortcut=QKeySequence.StandardKey.Quit, triggered=self.close
        )

    def _build_menu(self) -> None:
        m = self.menuBar()
        filem = m.addMenu("&File")
        for a in (self.act_new, self.act_open):
            filem.addAction(a)
        filem.addSeparator()
        for a in (self.act_save, self.act_save_as, self.act_close_tab):
            filem.addAction(a)
        filem.addSeparator()
        filem.addAction(self.act_default_folder)
        filem.addSeparator()
        filem.addAction(self.act_quit)

        viewm = m.addMenu("&View")
        viewm.addAction(self.act_next_tab)
        viewm.addAction(self.act_prev_tab)

    # ---------- manager -> view ----------
    def _rebuild_tabs(self) -> None:
        self._syncing = True
        try:
            while self.tabs.count():
                self.tabs.removeTab(0)
            for doc in self.manager.documents:
                self.tabs.addTab(self._tab_title(doc))
        finally:
            self._syncing = False
        self._show_active(self.manager.active_document)

    def _show_active(self, doc: Document | None) -> None:
        if doc is None:
            return
        index = self.manager.index_of(doc)
        self._syncing = True
        try:
            if index is not None:
                self.tabs.setCurrentIndex(index)
            if self.editor.toPlainText() != doc.content:
                self.editor.setPlainText(doc.content)
        finally:
            self._syncing = False
        self._update_title()

    def _refresh_titles(self, _doc: Document | None = None) -> None:
        for i, doc in enumerate(self.manager.documents):
            if i < self.tabs.count():
                self.tabs.setTabText(i, self._tab_title(doc))
        self._update_title()

    def _update_title(self) -> None:
        doc = self.manager.active_document
        if doc is None:
            self.setWindowTitle(self._app_title)
            return
        self.setWindowTitle(f"{self._tab_title(doc)} - {self._app_title}")

    def _on_error(self, title: str, text: str) -> None:
        self.statusBar().showMessage(f"{title}: {text.splitlines()[0]}", 5000)

    @staticmethod
    def _tab_title(doc: Document) -> str:
        return f"*{doc.file_name}" if doc.is_dirty else doc.file_name

    # ---------- view -> manager ----------
    def _on_text_changed(self) -> None:
        if self._syncing:
            return
        doc = self.manager.active_document
        if doc is not None:
            doc.set_content(self.editor.toPlainText())

    def _on_tab_selected(self, index: int) -> None:
        if self._syncing or index < 0:
            return
        docs = self.manager.documents
        if index < len(docs):
            self.manager.set_active_document(docs[index])

    def _on_tab_close_requested(self, index: int) -> None:
        docs = self.manager.documents
        if 0 <= index < len(docs):
            self.manager.close_document(docs[index], interactive=True)

    # ---------- lifecycle ----------
    def confirm_unsaved(self) -> bool:
        """Ask about every dirty document; False if the user cancelled or a save failed."""
        for doc in self.manager.documents:
            if not doc.is_dirty:
                continue
            if self.messages is None:
                return False
            decision = self.messages.ask_save_changes(self, doc.file_name)
            if decision is SaveDecision.CANCEL:
                return False
            if decision is SaveDecision.SAVE:
                self.manager.set_active_document(doc)
                if not self.manager.save_active_document():
                    return False
        return True

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 (Qt API)
        if not self.confirm_unsaved():
            event.ignore()
            return
        self.manager.shutdown()
        event.accept()
