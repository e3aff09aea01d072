from ._auth import basic_auth
from ._errors import handle_errors
from ._headers import add_header, canonical_header_key, has_header, set_header
from ._logs import LOGGER_NAME, setup_logging
from ._request_spec import RequestSpec

__all__ = [
    "LOGGER_NAME",
    "RequestSpec",
    "add_header",
    "basic_auth",
    "canonical_header_key",
    "handle_errors",
    "has_header",
    "set_header",
    "setup_logging",
]
