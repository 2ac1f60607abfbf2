"""
Navigation signal the coordinator listens to for deferred deliveries.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal


class NavigationSignal(QObject):
    """
    Emits ``transitionCompleted`` whenever the host application finishes
    moving to a new screen. Hosts either emit the signal directly or call
    ``notify_transition()``.
    """

    transitionCompleted = Signal()

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._transitions = 0

    @property
    def transition_count(self) -> int:
        return self._transitions

    def notify_transition(self) -> None:
        self._transitions += 1
        self.transitionCompleted.emit()
