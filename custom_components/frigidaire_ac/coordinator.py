"""Poll coordinator for Frigidaire AC devices."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from enum import StrEnum
from typing import TYPE_CHECKING

from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .const import DOMAIN, TELEMETRY_GRACE_SECONDS
from .models import DeviceStateSnapshot

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .state import DeviceStateCache
    from .status import StatusTranslator

_LOGGER = logging.getLogger(__name__)


class PollState(StrEnum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class FrigidairePollScheduler(DataUpdateCoordinator[DeviceStateSnapshot]):
    """Coordinator that periodically refreshes one device.

    Each refresh requests bulk telemetry, waits a grace period because the
    telemetry completion is not reported reliably, then re-reads every
    attribute. A refresh requested while the previous one is still running
    is skipped and answers with the cached snapshot.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        cache: DeviceStateCache,
        status: StatusTranslator,
        interval: timedelta,
        grace: float = TELEMETRY_GRACE_SECONDS,
    ) -> None:
        """Initialize the coordinator.

        Args:
            hass: Home Assistant instance.
            cache: State cache of the device.
            status: Status translator of the device.
            interval: Time between refreshes.
            grace: Seconds to wait after the telemetry request.

        """
        super().__init__(
            hass,
            _LOGGER,
            name=f"{DOMAIN}_{cache.serial_number}",
            update_interval=interval,
        )
        self._cache = cache
        self._status = status
        self.grace = grace
        self._state = PollState.IDLE
        self.data = cache.snapshot

        if grace >= interval.total_seconds():
            _LOGGER.warning(
                "%s: polling interval %.1fs is not longer than the %.1fs grace "
                "period, overlapping refreshes will be skipped",
                cache.name,
                interval.total_seconds(),
                grace,
            )

    @property
    def state(self) -> PollState:
        return self._state

    async def _async_update_data(self) -> DeviceStateSnapshot:
        if self._state == PollState.REFRESHING:
            _LOGGER.debug("%s: refresh still in progress, skipping", self._cache.name)
            return self._cache.snapshot

        self._state = PollState.REFRESHING
        try:
            _LOGGER.debug("%s: getting device updates", self._cache.name)
            await self._status.refresh_telemetry()
            await asyncio.sleep(self.grace)
            if not await self._status.refresh_all():
                error_msg = f"Failed to read one or more attributes of {self._cache.name}"
                raise UpdateFailed(error_msg)
        finally:
            self._state = PollState.IDLE

        return self._cache.snapshot
