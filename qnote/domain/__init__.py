"""Domain layer: interfaces, errors and the Document model."""

from .errors import (
    DocumentError,
    DocumentIOError,
    DocumentNotFoundError,
    DocumentPathConflictError,
    UserCancelledError,
)
from .interfaces import IAppConfig, IConfigService, IFileService, ISettingsService
from .models import Document

__all__ = [
    "IFileService",
    "ISettingsService",
    "IConfigService",
    "IAppConfig",
    "Document",
    "DocumentError",
    "DocumentIOError",
    "DocumentNotFoundError",
    "DocumentPathConflictError",
    "UserCancelledError",
]
