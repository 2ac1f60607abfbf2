"""
Deferred work queue that runs continuations after the current UI pass.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, Tuple

from PySide6.QtCore import QObject, QTimer

from flash_queue.flash_queue import logger as app_logger

Task = Tuple[Callable[..., Any], Tuple[Any, ...]]


class RenderQueue(QObject):
    """
    FIFO of callables executed by ``flush()``.

    When ``auto_flush`` is enabled the queue arms a zero-delay single-shot
    timer on the first ``schedule()`` so the Qt event loop flushes it once
    the current pass has settled. Without it the host calls ``flush()``.
    """

    def __init__(self, *, auto_flush: bool = False) -> None:
        super().__init__()
        self._logger = app_logger.get_logger()
        self._tasks: Deque[Task] = deque()
        self._flushing = False
        self.auto_flush = auto_flush

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(0)
        self._timer.timeout.connect(self.flush)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def is_flushing(self) -> bool:
        return self._flushing

    def schedule(self, task: Callable[..., Any], *args: Any) -> None:
        """Queue ``task(*args)`` to run after everything already scheduled."""
        self._tasks.append((task, args))
        if self.auto_flush and not self._flushing and not self._timer.isActive():
            self._timer.start()

    def flush(self) -> int:
        """
        Run queued tasks in order until the queue is empty.

        Tasks scheduled while flushing run in the same flush, after the task
        that scheduled them. Nested calls return immediately. Returns the
        number of tasks executed.
        """
        if self._flushing:
            return 0

        self._flushing = True
        executed = 0
        try:
            while self._tasks:
                task, args = self._tasks.popleft()
                try:
                    task(*args)
                except Exception:
                    self._logger.exception("Render queue task {!r} failed.", task)
                    raise
                executed += 1
        finally:
            self._flushing = False
            if self.auto_flush and self._tasks and not self._timer.isActive():
                self._timer.start()
        return executed

    def clear(self) -> None:
        self._tasks.clear()
        self._timer.stop()
