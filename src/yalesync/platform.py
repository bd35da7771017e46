"""Engine entry point: config validation, panel discovery and polling."""

from __future__ import annotations

import dataclasses
import logging
import time
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from yalesync._network import ConnectivityGate
from yalesync._redact import redact_for_log
from yalesync.accessory import AlarmAccessory
from yalesync.config import YaleConfig
from yalesync.exceptions import YaleConfigError, YaleError
from yalesync.host import AccessoryHost
from yalesync.lifecycle import Lifecycle, NotificationListener
from yalesync.models.panel import AccessoryInformation, PanelContext
from yalesync.session import AlarmClient, PanelSession

_logger = logging.getLogger(__name__)

_PANEL_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_DNS, "yalesync.panel")


def panel_uuid(identifier: str) -> str:
    """Stable accessory id for the panel with the given remote identifier."""
    return str(uuid.uuid5(_PANEL_NAMESPACE, identifier.strip().lower()))


class YalePlatform:
    """Discover the account's panel and keep it synchronised.

    Usage::

        platform = YalePlatform.from_config(raw_config, make_client, host)
        await platform.start()
        ...
        await platform.stop()
    """

    def __init__(
        self,
        config: YaleConfig,
        client: AlarmClient | None,
        host: AccessoryHost,
        *,
        gate: ConnectivityGate | None = None,
        on_notification: NotificationListener | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._host = host
        self._gate = gate if gate is not None else ConnectivityGate(timeout=config.probe_timeout)
        self._session = (
            PanelSession(client, request_timeout=config.request_timeout) if client is not None else None
        )
        self._on_notification = on_notification
        self._clock = clock
        self._accessory: AlarmAccessory | None = None
        self._lifecycle: Lifecycle | None = None

    @classmethod
    def from_config(
        cls,
        raw: Mapping[str, Any],
        client_factory: Callable[[YaleConfig], AlarmClient],
        host: AccessoryHost,
        **kwargs: Any,
    ) -> YalePlatform:
        """Decode and validate *raw*, then build the platform.

        Raises :class:`YaleConfigError` when the configuration is invalid;
        the engine does not start in that case.
        """
        config = YaleConfig.decode(raw)
        _logger.debug("Decoded config: %s", redact_for_log(dataclasses.asdict(config)))
        error = config.validate()
        if error is not None:
            _logger.error("Error in config: %s", error)
            raise YaleConfigError(error)
        return cls(config, client_factory(config), host, **kwargs)

    @property
    def config(self) -> YaleConfig:
        return self._config

    @property
    def accessory(self) -> AlarmAccessory | None:
        return self._accessory

    @property
    def lifecycle(self) -> Lifecycle | None:
        return self._lifecycle

    def _restore_context(self, accessory_id: str) -> PanelContext | None:
        stored = self._host.restore_context(accessory_id)
        if stored is None:
            return None
        try:
            return PanelContext.model_validate(dict(stored))
        except ValidationError:
            _logger.warning("Ignoring invalid stored context for accessory %s", accessory_id, exc_info=True)
            return None

    async def discover(self) -> AlarmAccessory | None:
        """Find the panel and create or restore its accessory.

        Returns ``None`` when there is no session, the Yale servers are
        unreachable, or the account has no panel.
        """
        if self._session is None:
            _logger.error("Yale Sync session not initialized. Exiting discovery")
            return None

        _logger.info("Fetching 'Yale Sync Alarm Panel' from your account")
        if not await self._gate.is_reachable():
            _logger.debug("Connectivity probe: %s", await self._gate.describe())
            _logger.error("Unable to reach Yale servers")
            return None

        panel = await self._session.discover_panel()
        if panel is None:
            _logger.error("No panel found in Yale Sync account. Exiting discovery")
            return None
        _logger.info("Panel found in Yale Sync account: %s", panel.identifier)

        accessory_id = panel_uuid(panel.identifier)
        context = self._restore_context(accessory_id)
        if context is not None:
            _logger.info("Restoring existing panel accessory from cache: %s", self._config.name)
            context.state = panel.state
            self._host.store_context(accessory_id, context.model_dump(mode="json"))
        else:
            _logger.info("Adding new panel accessory: %s", panel.identifier)
            context = PanelContext(identifier=panel.identifier, state=panel.state)
            self._host.register_accessory(accessory_id, self._config.name, context.model_dump(mode="json"))

        self._host.set_accessory_information(
            accessory_id, AccessoryInformation(name=self._config.name, serial_number=panel.identifier)
        )

        self._accessory = AlarmAccessory(
            accessory_id,
            context,
            self._session,
            self._host,
            gate=self._gate,
            display_name=self._config.name,
            clock=self._clock,
        )
        return self._accessory

    async def start(self) -> Lifecycle:
        """Discover the panel and start background polling."""
        try:
            await self.discover()
        except YaleError as exc:
            _logger.error("Panel discovery failed: %s", exc)

        lifecycle = Lifecycle(
            self._session,
            self._accessory,
            background_refresh=self._config.background_refresh,
            refresh_interval=self._config.refresh_interval,
            clock=self._clock,
        )
        if self._on_notification is not None:
            lifecycle.add_listener(self._on_notification)
        self._lifecycle = lifecycle
        lifecycle.start()
        return lifecycle

    async def stop(self) -> None:
        """Stop polling and release the resolver."""
        if self._lifecycle is not None:
            self._lifecycle.stop()
            await self._lifecycle.wait()
        await self._gate.close()
