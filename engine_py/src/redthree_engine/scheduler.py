"""
Deferred callbacks for phase timers and bot thinking time.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    """A scheduled callback that can be cancelled."""

    @abstractmethod
    def cancel(self):
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        """False once cancelled or, for one-shot timers, once fired."""


class Scheduler(ABC):
    """Clock collaborator used by the room manager."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay seconds."""

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback every interval seconds until cancelled."""


class _AsyncioHandle(TimerHandle):

    def __init__(self):
        self._handle: Optional[asyncio.TimerHandle] = None
        self._active = True

    def cancel(self):
        self._active = False
        if self._handle is not None:
            self._handle.cancel()

    @property
    def active(self) -> bool:
        return self._active


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        # Without a pinned loop, follow whichever loop is running the caller.
        return self._loop or asyncio.get_running_loop()

    def _run(self, callback: Callable[[], None]):
        try:
            callback()
        except Exception as e:
            logger.error(f"Scheduled callback failed: {e}", exc_info=True)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _AsyncioHandle()

        def fire():
            if handle.active:
                handle._active = False
                self._run(callback)

        handle._handle = self.loop.call_later(delay, fire)
        return handle

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _AsyncioHandle()

        def fire():
            if not handle.active:
                return
            handle._handle = self.loop.call_later(interval, fire)
            self._run(callback)

        handle._handle = self.loop.call_later(interval, fire)
        return handle
