import asyncio
import threading
from typing import Any, Callable

_loop: asyncio.AbstractEventLoop | None = None
_loop_thread: threading.Thread | None = None


def _ensure_loop() -> asyncio.AbstractEventLoop:
    global _loop, _loop_thread
    if _loop and not _loop.is_closed():
        return _loop

    _loop = asyncio.new_event_loop()

    def _run_loop():
        asyncio.set_event_loop(_loop)
        _loop.run_forever()

    _loop_thread = threading.Thread(
        target=_run_loop, name="veostudio-loop", daemon=True
    )
    _loop_thread.start()
    return _loop


def run_async(func: Callable[..., Any], *args, **kwargs):
    """Run a blocking callable in a worker thread and await it."""
    return asyncio.to_thread(func, *args, **kwargs)


def run_sync(afunc: Callable[..., Any], *args, **kwargs):
    """Run a coroutine function to completion from synchronous code.

    The coroutine runs on a private background loop so that callers which
    are themselves inside a running loop do not deadlock.
    """
    loop = _ensure_loop()

    coro = afunc(*args, **kwargs)
    future = asyncio.run_coroutine_threadsafe(coro, loop)
    return future.result()


def stop_loop() -> None:
    global _loop, _loop_thread
    if _loop is None or _loop.is_closed():
        return
    _loop.call_soon_threadsafe(_loop.stop)
    if _loop_thread is not None:
        _loop_thread.join(timeout=5)
    _loop.close()
    _loop = None
    _loop_thread = None
