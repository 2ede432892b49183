from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Iterable, Protocol


class IFileService(Protocol):
    """
    Read/write text files. Writes must be atomic and create missing parent folders.

    ``read_text`` raises a ``FileNotFoundError`` (``DocumentNotFoundError``) for a
    missing file and ``OSError`` for anything else.
    """

    def exists(self, path: Path) -> bool: ...
    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve session state across restarts."""

    def get_default_folder(self) -> Path | None: ...
    def set_default_folder(self, folder: Path) -> None: ...
    def get_open_paths(self) -> list[str]: ...
    def set_open_paths(self, paths: Iterable[str]) -> None: ...
    def get_active_path(self) -> str | None: ...
    def set_active_path(self, path: str | None) -> None: ...
    def get_note_path(self) -> Path | None: ...
    def set_note_path(self, path: Path) -> None: ...


class IConfigService(Protocol):
    """Read-only access to the INI configuration."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    """Application-level configuration with typed accessors."""

    def get_version(self) -> str: ...
    def autosave_delay_ms(self) -> int: ...
    def autosave_documents(self) -> bool: ...
    def log_level(self) -> str: ...
