"""
Entry point for the flash message queue demo application.
"""

from __future__ import annotations

import sys
from typing import Iterable

from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from core.app import MessageQueueCoordinator
from core.message_panel import MessagePanel
from core.render_queue import RenderQueue
from core.settings import QueueSettingsManager
from flash_queue.flash_queue import logger as app_logger

_LOGGER = app_logger.get_logger()
APP_NAME = "Flash Message Queue"
DEMO_TYPES = ("info", "success", "warning", "danger")
DEFAULT_DEMO_ORDER = "danger, warning, success, info"


class DemoWindow(QMainWindow):
    """Form for posting messages now or on the next navigation."""

    def __init__(self, message_queue: MessageQueueCoordinator) -> None:
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self._queue = message_queue

        self._text = QLineEdit()
        self._text.setPlaceholderText("Message text")
        self._type = QComboBox()
        self._type.addItems(DEMO_TYPES)
        self._target = QSpinBox()
        self._target.setRange(-5, 10)
        self._lifespan = QSpinBox()
        self._lifespan.setRange(-1, 99)
        self._lifespan.setValue(1)
        self._wait = QSpinBox()
        self._wait.setRange(0, 99)
        self._wait.setValue(1)
        self._update = QCheckBox("Age existing messages")
        self._update.setChecked(True)
        self._clear = QCheckBox("Clear existing messages")

        form = QFormLayout()
        form.addRow("Text", self._text)
        form.addRow("Type", self._type)
        form.addRow("Target", self._target)
        form.addRow("Lifespan", self._lifespan)
        form.addRow("Wait", self._wait)
        form.addRow(self._update)
        form.addRow(self._clear)

        add_button = QPushButton("Show now")
        queue_button = QPushButton("Queue")
        navigate_button = QPushButton("Navigate")
        toggle_button = QPushButton("Toggle second panel")
        buttons = QHBoxLayout()
        for button in (add_button, queue_button, navigate_button, toggle_button):
            buttons.addWidget(button)

        self._first_panel = MessagePanel(message_queue, name="panel-first")
        self._second_panel = MessagePanel(message_queue, name="panel-second")

        layout = QVBoxLayout()
        layout.addWidget(self._first_panel)
        layout.addLayout(form)
        layout.addLayout(buttons)
        layout.addWidget(self._second_panel)

        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

        add_button.clicked.connect(self._on_add)  # type: ignore[arg-type]
        queue_button.clicked.connect(self._on_queue)  # type: ignore[arg-type]
        navigate_button.clicked.connect(message_queue.navigation.notify_transition)  # type: ignore[arg-type]
        toggle_button.clicked.connect(self._on_toggle_panel)  # type: ignore[arg-type]

    def _message_text(self) -> str:
        text = self._text.text().strip()
        if text:
            return text
        return f"Type: {self._type.currentText()}; Target: {self._target.value()}"

    def _on_add(self) -> None:
        self._queue.add(
            self._message_text(),
            type=self._type.currentText(),
            target=self._target.value(),
            lifespan=self._lifespan.value(),
            update=self._update.isChecked(),
            clear=self._clear.isChecked(),
        )
        self._text.clear()

    def _on_queue(self) -> None:
        self._queue.queue(
            self._message_text(),
            type=self._type.currentText(),
            target=self._target.value(),
            lifespan=self._lifespan.value(),
            wait=self._wait.value(),
        )
        self._text.clear()

    def _on_toggle_panel(self) -> None:
        self._second_panel.setVisible(not self._second_panel.isVisible())


def _run_application(argv: Iterable[str]) -> int:
    app = QApplication(list(argv))
    settings_manager = QueueSettingsManager()
    message_queue = MessageQueueCoordinator(
        settings_manager=settings_manager,
        render_queue=RenderQueue(auto_flush=True),
    )
    if not message_queue.message_type_order:
        message_queue.message_type_order = DEFAULT_DEMO_ORDER
    message_queue.start()

    window = DemoWindow(message_queue)
    window.show()
    try:
        return app.exec()
    finally:
        message_queue.shutdown()


def main() -> int:
    """Launch the demo application."""
    app_logger.configure()
    try:
        return _run_application(sys.argv)
    except Exception:  # pragma: no cover - top-level crash guard
        _LOGGER.exception("Flash message queue demo crashed.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
