from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox

from qnote.services.ui.ports.messages import IMessageService, SaveDecision


class QtMessageService(IMessageService):
    """Qt-backed implementation for message dialogs."""

    def error(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.critical(parent, title, text)

    def ask_save_changes(self, parent: Any | None, document_name: str) -> SaveDecision:
        box = QMessageBox(parent)
        box.setIcon(QMessageBox.Icon.Warning)
        box.setWindowTitle("Unsaved Changes")
        box.setText(f'Do you want to save changes to "{document_name}"?')
        box.setInformativeText("Your changes will be lost if you don't save them.")
        box.setStandardButtons(
            QMessageBox.StandardButton.Save
            | QMessageBox.StandardButton.Discard
            | QMessageBox.StandardButton.Cancel
        )
        box.setDefaultButton(QMessageBox.StandardButton.Save)
        box.exec()
        resp = box.standardButton(box.clickedButton())
        if resp == QMessageBox.StandardButton.Save:
            return SaveDecision.SAVE
        if resp == QMessageBox.StandardButton.Discard:
            return SaveDecision.DISCARD
        return SaveDecision.CANCEL
