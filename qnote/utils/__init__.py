"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    DEFAULT_AUTOSAVE_DELAY_MS,
    DEFAULT_NOTE_FILE_NAME,
    MIN_AUTOSAVE_DELAY_MS,
    SETTINGS_ACTIVE_PATH,
    SETTINGS_DEFAULT_FOLDER,
    SETTINGS_NOTE_PATH,
    SETTINGS_OPEN_PATHS,
    TEXT_FILTER,
    UNTITLED_FILE_NAME,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "UNTITLED_FILE_NAME",
    "DEFAULT_NOTE_FILE_NAME",
    "TEXT_FILTER",
    "DEFAULT_AUTOSAVE_DELAY_MS",
    "MIN_AUTOSAVE_DELAY_MS",
    "SETTINGS_DEFAULT_FOLDER",
    "SETTINGS_OPEN_PATHS",
    "SETTINGS_ACTIVE_PATH",
    "SETTINGS_NOTE_PATH",
]
