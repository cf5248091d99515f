"""Run localization coroutines from synchronous Flask views.

All coroutines share one event loop running on a background thread, so the
resource loader's in-flight memoisation spans requests instead of being reset
by a fresh loop per call.
"""

from __future__ import annotations

import asyncio
import atexit
from threading import Lock, Thread
from typing import Any, Coroutine, TypeVar

T = TypeVar("T")

_shared_bridge: AsyncBridge | None = None
_shared_lock = Lock()


class AsyncBridge:
    """Owns a dedicated event loop thread and runs coroutines on it."""

    def __init__(self, *, name: str = "localeshell-loop") -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = Thread(target=self._serve, name=name, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    @property
    def closed(self) -> bool:
        return self._loop.is_closed()

    def run(self, coroutine: Coroutine[Any, Any, T]) -> T:
        """Block until ``coroutine`` completes on the bridge loop."""

        if self.closed:
            coroutine.close()
            raise RuntimeError("AsyncBridge is closed")
        return asyncio.run_coroutine_threadsafe(coroutine, self._loop).result()

    def close(self) -> None:
        if self.closed:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()


def shared_bridge() -> AsyncBridge:
    """Return the process-wide bridge, starting a new one if it was closed."""

    global _shared_bridge
    with _shared_lock:
        if _shared_bridge is None or _shared_bridge.closed:
            _shared_bridge = AsyncBridge()
            atexit.register(_shared_bridge.close)
        return _shared_bridge


__all__ = ["AsyncBridge", "shared_bridge"]
