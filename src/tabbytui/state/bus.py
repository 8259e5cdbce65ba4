"""Ordered multiple-producer / single-consumer channel of Actions."""

import asyncio

from .actions import Action


class ActionBus:
    """FIFO channel from any number of producers to exactly one consumer.

    Each producer's own emission order is preserved; across producers the
    consumer sees actions in arrival order.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Action] = asyncio.Queue()

    def send(self, action: Action) -> None:
        """Enqueue an action. Never blocks."""
        self._queue.put_nowait(action)

    async def recv(self) -> Action:
        """Wait for the next action."""
        return await self._queue.get()

    def drain(self) -> list[Action]:
        """Return every action currently queued, without waiting."""
        actions: list[Action] = []
        while True:
            try:
                actions.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return actions

    def __len__(self) -> int:
        return self._queue.qsize()
