"""
flash_queue package.

Application-level helpers for the flash message queue: logging setup used
by the ``core`` modules and the demo entry point.
"""

__all__ = [
    "logger",
]
