from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from qnote.utils.constants import DEFAULT_AUTOSAVE_DELAY_MS

LOGGER = logging.getLogger(__name__)


class DebouncedAction(QObject):
    """
    Run ``callback`` once, ``delay_ms`` after the *last* call to ``schedule()``.

    Every ``schedule()`` restarts the single-shot timer; ``cancel()`` drops the
    pending run so nothing fires afterwards. The callback runs on the thread that
    owns the timer (the GUI thread).
    """

    fired = pyqtSignal()
    failed = pyqtSignal(str)

    def __init__(
        self,
        callback: Callable[[], object],
        delay_ms: int = DEFAULT_AUTOSAVE_DELAY_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._callback = callback
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, int(delay_ms)))
        self._timer.timeout.connect(self._fire)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self) -> None:
        # start() on an active timer restarts it
        self._timer.start()

    def cancel(self) -> bool:
        """Drop the pending run. Returns True if one was pending."""
        pending = self._timer.isActive()
        self._timer.stop()
        return pending

    def _fire(self) -> None:
        try:
            self._callback()
        except Exception as exc:
            # Exceptions escaping a Qt slot abort the process under PyQt6.
            LOGGER.exception("Debounced action failed")
            self.failed.emit(str(exc))
            return
        self.fired.emit()
