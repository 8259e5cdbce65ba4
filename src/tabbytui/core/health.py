"""Server health polling."""

import logging
from typing import TYPE_CHECKING

from .config import Route
from .errors import ApiError
from .models import UNREACHABLE, HealthState, HealthViewModel
from .provider import HttpProvider

if TYPE_CHECKING:
    from ..state.bus import ActionBus

logger = logging.getLogger(__name__)


class HealthMonitor:
    """Turns a health GET into a view model or the UNREACHABLE sentinel."""

    def __init__(self, provider: HttpProvider) -> None:
        self._provider = provider

    async def fetch_once(self) -> HealthViewModel:
        """Fetch health once. Never raises: failures become UNREACHABLE."""
        try:
            state = await self._provider.get(Route.HEALTH, HealthState)
        except ApiError as e:
            logger.warning("Health check against %s failed: %s", self._provider.url, e.describe())
            return UNREACHABLE
        logger.debug("Health check ok: device=%s model=%s", state.device, state.model)
        return HealthViewModel(health_state=state)

    async def run(self, bus: "ActionBus", sequence: int) -> None:
        """Background task body: fetch once and report via the bus.

        ``sequence`` numbers this check so the reducer can drop results
        that arrive after a newer one.
        """
        from ..state.actions import HealthUpdated

        view = await self.fetch_once()
        bus.send(HealthUpdated(sequence, view))
