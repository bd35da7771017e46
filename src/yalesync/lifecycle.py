"""Background polling of the panel state.

Each tick reads the panel through the accessory's cache-gated read path.
A notification is emitted when the observed state changed since the last
one, or as a heartbeat when nothing has been reported for ten minutes.

The loop stops for good on the first error.  There is no retry: a
persistent failure would otherwise be polled forever without anyone
noticing, so the process supervisor is expected to restart the engine.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable

from yalesync._constants import LOG_HEARTBEAT_S
from yalesync.accessory import AlarmAccessory
from yalesync.models.panel import LoggerContext, StateNotification
from yalesync.session import PanelSession

_logger = logging.getLogger(__name__)

NotificationListener = Callable[[StateNotification], None]


class Lifecycle:
    """Poll the panel every *refresh_interval* seconds.

    Parameters
    ----------
    session : PanelSession or None
        The panel session.  ``None`` is a terminal condition.
    accessory : AlarmAccessory or None
        The discovered panel accessory.  ``None`` is a terminal condition.
    background_refresh : bool
        When ``False`` a single tick is run and the loop exits.
    refresh_interval : float
        Seconds to sleep between ticks.
    heartbeat : float
        Maximum silence between "no change" notifications.
    """

    def __init__(
        self,
        session: PanelSession | None,
        accessory: AlarmAccessory | None,
        *,
        background_refresh: bool = True,
        refresh_interval: float = 5.0,
        heartbeat: float = LOG_HEARTBEAT_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session = session
        self._accessory = accessory
        self._background_refresh = background_refresh
        self._refresh_interval = refresh_interval
        self._heartbeat = heartbeat
        self._clock = clock
        self._logger_context = LoggerContext(last_updated=clock())
        self._listeners: list[NotificationListener] = []
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self.ticks = 0

    @property
    def logger_context(self) -> LoggerContext:
        return self._logger_context

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def add_listener(self, listener: NotificationListener) -> Callable[[], None]:
        """Register a notification listener; returns a function removing it."""
        self._listeners.append(listener)

        def _remove() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _remove

    def _emit(self, notification: StateNotification) -> None:
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                _logger.debug("Notification listener failed", exc_info=True)

    async def tick(self) -> StateNotification | None:
        """Run one poll; return the notification emitted, if any."""
        accessory = self._accessory
        if accessory is None:
            raise RuntimeError("Lifecycle has no accessory")

        now = self._clock()
        self.ticks += 1
        heartbeat_due = now - self._logger_context.last_updated > self._heartbeat
        if heartbeat_due:
            _logger.debug("Lifecycle logs are enabled. Fetching panel state")

        previous = self._logger_context.last_value
        value = await accessory.refresh("target", verbose=heartbeat_due)
        changed = value != previous

        if not (changed or heartbeat_due):
            return None

        if changed:
            _logger.info("Panel state has changed: %s", value.name)
        else:
            _logger.info("Panel state unchanged: %s", value.name)
        self._logger_context = LoggerContext(last_updated=now, last_value=value)
        notification = StateNotification(identifier=accessory.context.identifier, value=value, changed=changed)
        self._emit(notification)
        return notification

    async def run(self) -> None:
        """Poll until stopped, disabled, or the first error."""
        if self._session is None:
            _logger.error("Yale Sync session not initialized. Exiting lifecycle")
            return
        if self._accessory is None:
            _logger.warning("Panel accessory not set. Exiting lifecycle")
            return

        _logger.info("Starting Yale Sync lifecycle. Fetching data every %s seconds", self._refresh_interval)
        try:
            while not self._stop_event.is_set():
                await self.tick()

                if not self._background_refresh:
                    _logger.warning("Background refresh is disabled. Exiting lifecycle")
                    return

                with contextlib.suppress(TimeoutError):
                    await asyncio.wait_for(self._stop_event.wait(), self._refresh_interval)
        except Exception as exc:
            _logger.error("Error fetching Yale Sync panel state: %s", exc, exc_info=True)
            return
        _logger.info("Lifecycle stopped")

    def start(self) -> asyncio.Task[None]:
        """Run the loop as a background task.

        A :meth:`stop` issued before the first start is kept; restarting
        after the loop has finished clears it.
        """
        if self._task is None:
            self._task = asyncio.create_task(self.run(), name="yalesync-lifecycle")
        elif self._task.done():
            self._stop_event.clear()
            self._task = asyncio.create_task(self.run(), name="yalesync-lifecycle")
        return self._task

    def stop(self) -> None:
        """Request the loop to stop at the next sleep boundary."""
        self._stop_event.set()

    async def wait(self) -> None:
        if self._task is not None:
            await self._task
