import inspect
from typing import Any


class SyncAndAsyncClient:
    """Calls the sync or the async variant of a component operation.

    Subclasses declare one coroutine per operation that forwards to
    ``_execute_method``; the operation name is taken from the caller.
    """

    client: Any
    async_call: bool

    async def _execute_method(self, **kwargs):
        method_name = inspect.stack()[1].function
        if self.async_call:
            return await getattr(self.client, f"a{method_name}")(**kwargs)
        return getattr(self.client, method_name)(**kwargs)
