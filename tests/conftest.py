"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os
import tempfile

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("FLASH_QUEUE_LOG_DIR", tempfile.mkdtemp(prefix="flash-queue-logs-"))

import pytest
from PySide6.QtWidgets import QApplication

from core.app import MessageQueueCoordinator
from core.message_container import MessageContainer
from core.settings import QueueSettings


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    """A single QApplication shared by every test."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def message_queue(qapp) -> MessageQueueCoordinator:
    """A started coordinator with default settings and a manual render queue."""
    coordinator = MessageQueueCoordinator(settings=QueueSettings())
    coordinator.start()
    yield coordinator
    coordinator.shutdown()


@pytest.fixture
def make_container(message_queue):
    """Create and mount containers on the coordinator, oldest first."""

    def _make(name: str | None = None) -> MessageContainer:
        container = MessageContainer(message_queue, name=name)
        container.mount()
        return container

    return _make
