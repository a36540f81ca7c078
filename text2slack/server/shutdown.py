"""Signal handling and graceful shutdown for the MCP server process."""

from __future__ import annotations

import asyncio
import inspect
import os
import signal
from collections.abc import Awaitable, Callable

from loguru import logger

ShutdownCallback = Callable[[], Awaitable[None] | None]


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown on SIGINT/SIGTERM.

    The first signal runs the registered callbacks in order. A second signal
    received while shutdown is in progress forces the process to exit with
    code 1. Handlers are installed at most once per coordinator.

    Usage:
        coordinator = ShutdownCoordinator()
        coordinator.add_callback(stop_serving)
        coordinator.install()
        ...
        await coordinator.wait()
        sys.exit(coordinator.exit_code)
    """

    SIGNALS = (signal.SIGINT, signal.SIGTERM)

    def __init__(self, *, force_exit: Callable[[int], None] = os._exit):
        self._force_exit = force_exit
        self._callbacks: list[ShutdownCallback] = []
        self._installed = False
        self._shutting_down = False
        self._done = asyncio.Event()
        self._task: asyncio.Task | None = None
        self.exit_code: int | None = None

    @property
    def installed(self) -> bool:
        return self._installed

    @property
    def shutting_down(self) -> bool:
        return self._shutting_down

    def add_callback(self, callback: ShutdownCallback) -> None:
        self._callbacks.append(callback)

    def install(self, loop: asyncio.AbstractEventLoop | None = None) -> bool:
        """Register signal handlers on the loop. Returns False if already installed."""
        if self._installed:
            return False
        loop = loop or asyncio.get_running_loop()
        for sig in self.SIGNALS:
            loop.add_signal_handler(sig, self.handle_signal, sig.name)
        self._installed = True
        return True

    def handle_signal(self, signame: str) -> asyncio.Task | None:
        """React to a received signal; returns the shutdown task on first call."""
        if self._shutting_down:
            logger.warning(f"Received {signame} during shutdown, forcing exit...")
            self._force_exit(1)
            return None

        logger.info(f"Received {signame}, initiating graceful shutdown...")
        self._task = asyncio.ensure_future(self.shutdown())
        return self._task

    async def shutdown(self) -> int:
        """Run shutdown callbacks once and record the exit code."""
        if self._shutting_down:
            await self._done.wait()
            return self.exit_code or 0
        self._shutting_down = True
        try:
            for callback in self._callbacks:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            self.exit_code = 0
        except Exception as e:
            logger.error(f"Failed to shutdown gracefully: {e}")
            self.exit_code = 1
        finally:
            self._done.set()
        return self.exit_code

    async def wait(self) -> int:
        await self._done.wait()
        return self.exit_code or 0
