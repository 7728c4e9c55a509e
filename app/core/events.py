"""In-process change feed

Services publish the name of a collection after committing a write to it;
listeners (e.g. the live dashboard websocket) recompute from a fresh snapshot.
A failing listener is logged and skipped so one stale view never breaks a write.
"""

import asyncio
import inspect
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List, Union

from app.core.logging import get_logger

logger = get_logger(__name__)

CUSTOMERS = "customers"
STAFF = "staff"
BILLS = "bills"
SETTINGS = "settings"

Listener = Callable[[str], Union[None, Awaitable[None]]]


class ChangeFeed:
    """Per-collection listener registry"""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, collection: str, listener: Listener) -> Callable[[], None]:
        """
        Register ``listener`` for ``collection``.

        Returns:
            Callable that removes the listener; safe to call more than once.
        """
        self._listeners[collection].append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners[collection].remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def listener_count(self, collection: str) -> int:
        return len(self._listeners.get(collection, []))

    async def publish(self, collection: str) -> None:
        """Notify every listener of ``collection``."""
        for listener in list(self._listeners.get(collection, [])):
            try:
                result: Any = listener(collection)
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.error(
                    "Change listener failed",
                    extra={"collection": collection},
                    exc_info=True,
                )


# Global feed instance
change_feed = ChangeFeed()
