from __future__ import annotations

import threading
from collections import deque
from typing import Deque, List, Protocol

from minivote.core.logger import voting_logger as logger
from minivote.voting.models import Notification


class Notifier(Protocol):
    async def send(self, notification: Notification) -> None: ...


class LoggingNotifier:
    """Writes every notification to the voting log."""

    async def send(self, notification: Notification) -> None:
        logger.info(f"NOTIFY title={notification.title!r} body={notification.body!r}")


class OutboxNotifier(LoggingNotifier):
    """Keeps the most recent notifications in memory for the web layer to show."""

    def __init__(self, size: int = 50) -> None:
        self._items: Deque[Notification] = deque(maxlen=size)
        self._lock = threading.Lock()

    async def send(self, notification: Notification) -> None:
        await super().send(notification)
        with self._lock:
            self._items.appendleft(notification)

    def recent(self) -> List[Notification]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


def voting_created(title: str, handle: str) -> Notification:
    return Notification(
        title="Voting Created!",
        body=f'"{title}" has been created successfully. Transaction: {handle}',
    )


def vote_submitted(option_text: str, handle: str) -> Notification:
    return Notification(
        title="Vote Submitted!",
        body=f'You voted for "{option_text}". Transaction: {handle}',
    )


def results_revealed(title: str, handle: str) -> Notification:
    return Notification(
        title="Results Revealed!",
        body=f'Results for "{title}" have been revealed. Transaction: {handle}',
    )


__all__ = [
    "Notifier",
    "LoggingNotifier",
    "OutboxNotifier",
    "voting_created",
    "vote_submitted",
    "results_revealed",
]
