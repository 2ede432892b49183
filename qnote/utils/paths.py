from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from platformdirs import user_documents_dir

LOGGER = logging.getLogger(__name__)


def resolve_path(path: Path | str) -> Path:
    """Expand ``~`` and make the path absolute; used for all path identity checks."""
    return Path(path).expanduser().resolve()


def default_documents_dir() -> Path:
    """Platform documents directory, or the temp directory when none can be determined."""
    try:
        docs = user_documents_dir()
    except Exception as exc:  # noqa: BLE001 - platform lookups vary wildly
        LOGGER.warning("Could not determine documents directory: %s", exc)
        docs = None
    if docs:
        return Path(docs)
    return Path(tempfile.gettempdir())
