from contextlib import contextmanager
from typing import Generator

import httpx

from ..models.errors import RestBuilderError


@contextmanager
def handle_errors(
    error_type: type[RestBuilderError], action: str
) -> Generator[None, None, None]:
    """Context manager translating httpx failures into restbuilder errors.

    Args:
        error_type: The RestBuilderError subclass to raise.
        action: Short description of what was being done, used as the
            message prefix (e.g. ``"send GET https://api.io/"``).

    Yields:
        None: The context manager yields control to the wrapped code.

    Raises:
        RestBuilderError: ``error_type`` chained to the original exception.
    """
    try:
        yield
    except (httpx.HTTPError, httpx.StreamError) as e:
        raise error_type(f"{action}: {e}") from e
