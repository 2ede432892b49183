from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from uuid import uuid4

from qnote.domain.errors import DocumentIOError
from qnote.domain.interfaces import IFileService

UNTITLED = "Untitled"


def _new_id() -> str:
    return uuid4().hex


@dataclass(eq=False)
class Document:
    """
    One open text buffer with an optional backing file.

    ``is_dirty`` is a one-way ratchet: it is set by the first content change and
    only cleared by a successful ``load()`` or ``save()``.
    """

    files: IFileService = field(repr=False)
    file_path: Path | None = None
    content: str = ""
    is_dirty: bool = False
    id: str = field(default_factory=_new_id)
    on_change: Callable[[Document], None] | None = field(default=None, repr=False)

    @property
    def file_name(self) -> str:
        if self.file_path is None:
            return UNTITLED
        return self.file_path.name or str(self.file_path)

    @property
    def is_untitled(self) -> bool:
        return self.file_path is None

    def set_content(self, text: str) -> None:
        """Replace the buffer; marks the document dirty and notifies the observer."""
        if text == self.content:
            return
        self.content = text
        self.mark_dirty()
        if self.on_change is not None:
            self.on_change(self)

    def mark_dirty(self) -> None:
        self.is_dirty = True

    def load(self) -> bool:
        """
        Read the backing file into the buffer.

        Returns False (buffer untouched) when untitled or when the file is missing.
        Raises DocumentIOError if the file exists but cannot be read.
        """
        if self.file_path is None:
            return False
        path = self.file_path.expanduser()
        try:
            text = self.files.read_text(path)
        except FileNotFoundError:
            return False
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentIOError(path, exc) from exc
        self.content = text
        self.is_dirty = False
        return True

    def save(self) -> bool:
        """
        Write the buffer atomically to the backing file.

        Returns False without touching the dirty flag when untitled.
        Raises DocumentIOError on write failure; the dirty flag is left as it was.
        """
        if self.file_path is None:
            return False
        path = self.file_path.expanduser()
        try:
            self.files.write_text_atomic(path, self.content)
        except (OSError, UnicodeEncodeError) as exc:
            raise DocumentIOError(path, exc) from exc
        self.is_dirty = False
        return True
