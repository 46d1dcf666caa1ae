"""Run user closures whether they are plain functions or coroutines.

Every closure wren takes from user code goes through ``invoke``:

- ``ClosureRoute.parse`` calls the parser with ``(data, path)``;
- ``ClosureHandler.handle`` calls the business logic with ``(ctx, value)``;
- ``ClosureHandler.format`` calls the formatter with the handler output;
- ``EventStreamHandler.handle`` calls the stream generator with ``(ctx, value)``.

Only the returned value decides whether to await. An ``async def`` that
yields is an async generator function: calling it gives back a
generator, which is not awaitable, so an event producer arrives at the
transport untouched and unstarted.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any) -> Any:
    """Call *func* with *args*; await what it returns if that is awaitable."""
    result = func(*args)
    if inspect.isawaitable(result):
        return await result
    return result
