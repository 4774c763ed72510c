"""Shelgon Runtime

Task host shared by every command execution in a session.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Coroutine, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


class Runtime:
    """An asyncio event loop running on a background thread.

    The REPL loop itself is synchronous. Executors that need concurrent work
    submit coroutines here and wait for the result before returning:

        output = input.runtime.block_on(fetch_all(urls))

    One runtime is created per session and handed to every CommandInput.
    """

    def __init__(self, name: str = "shelgon-runtime"):
        self._loop = asyncio.new_event_loop()
        self._closed = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()
        log.debug(f"Started runtime thread {name}")

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """The event loop owned by this runtime."""
        return self._loop

    @property
    def closed(self) -> bool:
        return self._closed

    def spawn(self, coro: Coroutine[Any, Any, T]) -> concurrent.futures.Future[T]:
        """Schedule a coroutine on the runtime loop.

        Returns:
            A future the caller can wait on from any thread.

        Raises:
            RuntimeError: If the runtime has been closed.
        """
        if self._closed:
            coro.close()
            raise RuntimeError("Runtime is closed")
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def block_on(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T:
        """Run a coroutine on the runtime loop and wait for its result.

        Args:
            coro: The coroutine to run.
            timeout: Seconds to wait. None waits forever.

        Raises:
            concurrent.futures.TimeoutError: If the timeout expires first.
        """
        return self.spawn(coro).result(timeout)

    def close(self) -> None:
        """Stop the loop, cancel leftover tasks and join the thread."""
        if self._closed:
            return
        self._closed = True
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()

        pending = asyncio.all_tasks(self._loop)
        for task in pending:
            task.cancel()
        if pending:
            self._loop.run_until_complete(
                asyncio.gather(*pending, return_exceptions=True)
            )
        self._loop.run_until_complete(self._loop.shutdown_asyncgens())
        self._loop.close()
        log.debug(f"Closed runtime ({len(pending)} pending tasks cancelled)")

    def __enter__(self) -> "Runtime":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
