from typing import Optional, Protocol, runtime_checkable

import httpx

from ._config import Config


@runtime_checkable
class Executor(Protocol):
    """Performs one HTTP exchange. ``httpx.Client`` implements it."""

    def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        ...


def default_executor(config: Optional[Config] = None) -> Executor:
    """Create the executor used by builders that were not given one.

    A new client is created on every call; builders cloned with ``new()``
    share their parent's executor instead of calling this again.
    """
    config = config or Config()
    return httpx.Client(timeout=config.timeout)
