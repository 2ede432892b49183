from __future__ import annotations

from pathlib import Path


class DocumentError(Exception):
    """Base class for document lifecycle failures."""


class DocumentNotFoundError(DocumentError, FileNotFoundError):
    """The backing file of a document does not exist. Also a FileNotFoundError."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path


class DocumentIOError(DocumentError):
    """Reading or writing a document's file failed (permissions, disk full, ...)."""

    def __init__(self, path: Path, reason: BaseException | str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class UserCancelledError(DocumentError):
    """An interactive picker or confirmation was dismissed by the user."""


class DocumentPathConflictError(DocumentError):
    """A save-as destination is already bound to another open document."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Another open document already uses this file:\n{path}")
        self.path = path
