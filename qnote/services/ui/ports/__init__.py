from __future__ import annotations

from .dialogs import IFileDialogService
from .messages import IMessageService, SaveDecision

__all__ = [
    "IFileDialogService",
    "IMessageService",
    "SaveDecision",
]
