APP_ORG = "QuickTools"
APP_NAME = "QuickNote"

UNTITLED_FILE_NAME = "Untitled.md"
DEFAULT_NOTE_FILE_NAME = "quicknote.md"
TEXT_FILTER = "Markdown (*.md *.markdown);;Text (*.txt);;All files (*)"

DEFAULT_AUTOSAVE_DELAY_MS = 500
MIN_AUTOSAVE_DELAY_MS = 50

SETTINGS_DEFAULT_FOLDER = "session/default_folder"
SETTINGS_OPEN_PATHS = "session/open_paths"
SETTINGS_ACTIVE_PATH = "session/active_path"
SETTINGS_NOTE_PATH = "note/file_path"
