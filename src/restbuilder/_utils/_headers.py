"""Header multimap helpers.

Headers are kept as an ordered list of ``(key, value)`` pairs with canonical
keys, so repeated values survive until the request is materialized.
"""

import re

_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def canonical_header_key(key: str) -> str:
    """Canonicalize a header key (``x-request-id`` -> ``X-Request-Id``).

    Keys containing characters that are not valid in a header token are
    returned unchanged.

    Examples:
        >>> canonical_header_key("content-type")
        'Content-Type'
        >>> canonical_header_key("WWW-AUTHENTICATE")
        'Www-Authenticate'
    """
    if not _TOKEN.match(key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def add_header(headers: list[tuple[str, str]], key: str, value: str) -> None:
    headers.append((canonical_header_key(key), value))


def set_header(headers: list[tuple[str, str]], key: str, value: str) -> None:
    """Replace every value of ``key`` with ``value``, in place."""
    canonical = canonical_header_key(key)
    headers[:] = [(k, v) for k, v in headers if k != canonical]
    headers.append((canonical, value))


def has_header(headers: list[tuple[str, str]], key: str) -> bool:
    canonical = canonical_header_key(key)
    return any(k == canonical for k, _ in headers)
