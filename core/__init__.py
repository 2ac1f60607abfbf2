"""
Core of the flash message queue: container registry, transition queue,
dispatcher and the coordinator exposing them.
"""

from .app import MessageQueueCoordinator  # noqa: F401
from .container_registry import ByHandle, ByIndex, ContainerRegistry  # noqa: F401
from .dispatcher import Dispatcher, MessageGroup  # noqa: F401
from .message_container import MessageContainer  # noqa: F401
