# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/core/janitor.py

from contextlib import AbstractContextManager, ExitStack
from typing import Any, Callable, TypeVar

from loguru import logger

T = TypeVar("T")


class Janitor:
    """Collects resources acquired during a run and releases them once.

    Resources are released in reverse order of acquisition. dispose() is
    idempotent so the dispatcher can call it from a finally block without
    tracking whether a command already cleaned up.
    """

    def __init__(self) -> None:
        self._stack = ExitStack()
        self._disposed = False

    def enter(self, resource: AbstractContextManager[T]) -> T:
        """Enter a context manager and keep it open until dispose()."""
        return self._stack.enter_context(resource)

    def add_cleanup(self, callback: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self._stack.callback(callback, *args, **kwargs)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        logger.debug("Releasing run resources")
        self._stack.close()

    def __enter__(self) -> "Janitor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()
