"""Consumer side of the ActionBus.

The ActionLoop is the only place background tasks are started. It feeds bus
actions to the reducer one at a time and turns the effects the reducer
returns into independent asyncio tasks.
"""

import asyncio
import logging
from collections.abc import Callable

from ..core.client import ServerClient
from ..core.completion import StreamCompletionTask
from ..core.health import HealthMonitor
from .actions import Action, Effect, Quit, SpawnCompletion, SpawnHealthCheck
from .bus import ActionBus
from .reducer import HomeState, Reducer

logger = logging.getLogger(__name__)

StateListener = Callable[[HomeState], None]


class ActionLoop:
    """Drains the bus into the reducer and runs the resulting effects.

    Example:
        loop = ActionLoop(client, Reducer(), on_change=render, on_quit=app.exit)
        await loop.run()
    """

    def __init__(
        self,
        client: ServerClient,
        reducer: Reducer,
        bus: ActionBus | None = None,
        on_change: StateListener | None = None,
        on_quit: Callable[[], None] | None = None,
    ) -> None:
        self._client = client
        self._reducer = reducer
        self._bus = bus or ActionBus()
        self._on_change = on_change
        self._on_quit = on_quit
        self._health = HealthMonitor(client.stable)
        self._tasks: set[asyncio.Task] = set()
        self._stopped = False

    @property
    def bus(self) -> ActionBus:
        return self._bus

    @property
    def state(self) -> HomeState:
        return self._reducer.state

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def dispatch(self, action: Action) -> None:
        """Apply one action synchronously and start its effects."""
        effects = self._reducer.update(action)
        self._run_effects(effects)
        if self._on_change is not None:
            self._on_change(self._reducer.state)

    async def run(self) -> None:
        """Consume actions until stopped or a Quit effect is returned."""
        self._run_effects(self._reducer.start())
        try:
            while not self._stopped:
                self.dispatch(await self._bus.recv())
                # Apply everything that queued up meanwhile before yielding.
                for action in self._bus.drain():
                    if self._stopped:
                        break
                    self.dispatch(action)
        finally:
            await self.shutdown()

    async def run_until_idle(self) -> None:
        """Process actions until the bus is empty and no task is running.

        Used by tests and one-shot callers; the interactive front end uses run().
        """
        while self._tasks or len(self._bus):
            for action in self._bus.drain():
                self.dispatch(action)
            if self._tasks:
                await asyncio.wait(set(self._tasks), return_when=asyncio.FIRST_COMPLETED)
        for action in self._bus.drain():
            self.dispatch(action)

    def stop(self) -> None:
        self._stopped = True

    async def shutdown(self) -> None:
        """Cancel outstanding background tasks and wait for them to finish."""
        self._stopped = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    def _run_effects(self, effects: list[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, SpawnHealthCheck):
                self._spawn(
                    self._health.run(self._bus, effect.sequence), f"health-{effect.sequence}"
                )
            elif isinstance(effect, SpawnCompletion):
                task = StreamCompletionTask(
                    provider=self._client.beta,
                    bus=self._bus,
                    generation=effect.generation,
                    session_id=effect.session_id,
                    messages=effect.messages,
                )
                self._spawn(task.run(), f"completion-{effect.generation}")
            elif isinstance(effect, Quit):
                self._stopped = True
                if self._on_quit is not None:
                    self._on_quit()

    def _spawn(self, coro, name: str) -> None:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Background task %s crashed", task.get_name(), exc_info=error
            )
