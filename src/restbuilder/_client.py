import copy
import re
from enum import Enum
from logging import getLogger
from typing import Any, Optional, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from ._config import Config
from ._encoding import encode_form, encode_json, encode_pairs, form_pairs
from ._executor import Executor, default_executor
from ._params import Pair, merge_params
from ._utils import (
    LOGGER_NAME,
    RequestSpec,
    add_header,
    basic_auth,
    handle_errors,
    has_header,
    set_header,
    setup_logging,
)
from .models.errors import (
    APIError,
    BuildError,
    DecodeError,
    ReadError,
    TransportError,
)

# a "%" not starting a two-digit hex escape
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class HttpMethod(str, Enum):
    """HTTP methods a RestClient can send."""

    HEAD = "HEAD"
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        """Whether parameters travel in the body rather than the query string."""
        return self not in (HttpMethod.HEAD, HttpMethod.GET)


class SerializationMode(str, Enum):
    """How parameters are serialized into a request body."""

    FORM = "form"
    JSON = "json"

    @property
    def content_type(self) -> str:
        if self is SerializationMode.JSON:
            return "application/json"
        return "application/x-www-form-urlencoded"


class RestClient:
    """Fluent HTTP request builder and sender.

    Configuration methods mutate the client and return it, so calls chain.
    ``build()`` materializes a ``RequestSpec``; ``send()`` builds it, hands it
    to the executor and decodes the JSON response.

    A configured parent is usually cloned with ``new()`` once per request, so
    that children share the executor but not headers or parameters:

        ```python
        from restbuilder import RestClient

        api = RestClient().base("https://api.io/").set("Accept", "application/json")
        user = api.new().get("users/5").send(User)
        created = api.new().post("users").json().param_struct(new_user).send(User)
        ```

    Args:
        executor: Object performing the HTTP exchange, usually an
            ``httpx.Client``. Defaults to a client built from ``config``.
        config: Base URL, timeout and logging settings.
    """

    def __init__(
        self,
        executor: Optional[Executor] = None,
        *,
        config: Optional[Config] = None,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = config or Config()
        if self._config.debug:
            setup_logging(debug=True)

        self._executor = _resolve_executor(executor, self._config)
        self._method = HttpMethod.GET
        self._raw_url = self._config.base_url
        self._headers: list[tuple[str, str]] = []
        self._sources: list[Any] = []
        self._mode = SerializationMode.FORM
        self._body: Optional[bytes] = None

    @classmethod
    def from_env(cls, executor: Optional[Executor] = None, **overrides: Any) -> "RestClient":
        """Create a client configured from ``RESTBUILDER_*`` environment variables."""
        return cls(executor, config=Config.from_env(**overrides))

    def new(self) -> "RestClient":
        """Return an independent copy of this client.

        The copy shares the executor and the parameter source objects, but
        has its own header and source lists. Mutating a shared source object
        after cloning is visible from both clients.
        """
        clone = copy.copy(self)
        clone._headers = list(self._headers)
        clone._sources = list(self._sources)
        return clone

    @property
    def method(self) -> HttpMethod:
        return self._method

    @property
    def url(self) -> str:
        return self._raw_url

    @property
    def headers(self) -> httpx.Headers:
        return httpx.Headers(self._headers)

    @property
    def mode(self) -> SerializationMode:
        return self._mode

    # Executor

    def executor(self, executor: Optional[Executor]) -> "RestClient":
        """Set the executor; None installs a fresh default one.

        Raises:
            TypeError: If ``executor`` has no ``send`` method.
        """
        self._executor = _resolve_executor(executor, self._config)
        return self

    # Method

    def head(self, path: str = "") -> "RestClient":
        return self._with_method(HttpMethod.HEAD, path)

    def get(self, path: str = "") -> "RestClient":
        return self._with_method(HttpMethod.GET, path)

    def post(self, path: str = "") -> "RestClient":
        return self._with_method(HttpMethod.POST, path)

    def put(self, path: str = "") -> "RestClient":
        return self._with_method(HttpMethod.PUT, path)

    def patch(self, path: str = "") -> "RestClient":
        return self._with_method(HttpMethod.PATCH, path)

    def delete(self, path: str = "") -> "RestClient":
        return self._with_method(HttpMethod.DELETE, path)

    def _with_method(self, method: HttpMethod, path: str) -> "RestClient":
        self._method = method
        return self.path(path)

    # Header

    def add(self, key: str, value: str) -> "RestClient":
        """Append a header value, keeping values already set for the key."""
        add_header(self._headers, key, value)
        return self

    def set(self, key: str, value: str) -> "RestClient":
        """Set a header value, replacing values already set for the key."""
        set_header(self._headers, key, value)
        return self

    def set_basic_auth(self, username: str, password: str) -> "RestClient":
        return self.set("Authorization", f"Basic {basic_auth(username, password)}")

    # URL

    def base(self, url: str) -> "RestClient":
        """Replace the URL. End it with a slash if ``path()`` should extend it."""
        self._raw_url = url
        return self

    def path(self, path: str) -> "RestClient":
        """Resolve ``path`` against the current URL as an RFC 3986 reference.

        If either URL cannot be parsed, the current URL is kept.
        """
        try:
            self._raw_url = str(_parse_url(self._raw_url).join(_parse_url(path)))
        except httpx.InvalidURL as e:
            self._logger.debug(f"Ignoring path {path!r} on {self._raw_url!r}: {e}")
        return self

    # Parameters

    def param(self, key: str, value: Any) -> "RestClient":
        self._sources.append(Pair(key, value))
        return self

    def param_struct(self, source: Any) -> "RestClient":
        """Append a structured parameter source; None is ignored.

        ``source`` is a mapping, a pydantic model, or any object with a
        ``to_params()`` method. Later sources override earlier keys.
        """
        if source is not None:
            self._sources.append(source)
        return self

    def json(self) -> "RestClient":
        self._mode = SerializationMode.JSON
        return self

    def form(self) -> "RestClient":
        self._mode = SerializationMode.FORM
        return self

    # Body

    def body(
        self, content: Union[bytes, str, None], content_type: Optional[str] = None
    ) -> "RestClient":
        """Send ``content`` as the raw request body; None is ignored.

        With a raw body set, parameters are sent in the query string.
        """
        if content is None:
            return self
        self._body = content.encode("utf-8") if isinstance(content, str) else content
        if content_type:
            self.set("Content-Type", content_type)
        return self

    # Requests

    def build(self) -> RequestSpec:
        """Materialize the current configuration into a new RequestSpec.

        Raises:
            BuildError: If the URL cannot be parsed or the parameters cannot
                be serialized.
        """
        try:
            url = _parse_url(self._raw_url)
        except httpx.InvalidURL as e:
            raise BuildError(f"invalid URL {self._raw_url!r}: {e}") from e

        params = merge_params(self._sources)
        headers = list(self._headers)
        content = self._body

        if self._method.has_body and content is None:
            if self._sources:
                content = self._encode_body(params)
                if not has_header(headers, "Content-Type"):
                    add_header(headers, "Content-Type", self._mode.content_type)
        else:
            url = _with_query(url, form_pairs(params))

        return RequestSpec(
            method=self._method.value,
            url=str(url),
            headers=tuple(headers),
            content=content,
        )

    def _encode_body(self, params: dict[str, Any]) -> bytes:
        if self._mode is SerializationMode.JSON:
            return encode_json(params)
        return encode_form(params).encode("ascii")

    def send(self, success: Any = None, failure: Any = None) -> Any:
        """Build the request, send it and decode the response.

        Success is any 2XX status. A success body is decoded into ``success``
        (a pydantic model or any type ``pydantic.TypeAdapter`` accepts) and
        returned. Without ``success``, or for a 204 or HEAD response with no
        body, None is returned.

        Args:
            success: Type to decode a success body into.
            failure: Type to decode an error body into, exposed as
                ``APIError.detail``.

        Returns:
            The decoded success body, or None.

        Raises:
            BuildError: If the request cannot be built.
            TransportError: If the executor fails.
            ReadError: If the response body cannot be read.
            DecodeError: If a success body does not decode into ``success``.
            APIError: If the status is not 2XX.
        """
        request = self.build().to_httpx()
        action = f"{request.method} {request.url}"
        self._logger.debug(f"Request: {action}")

        with handle_errors(TransportError, action):
            response = self._executor.send(request, stream=True)

        try:
            with handle_errors(ReadError, f"reading response of {action}"):
                body = response.read()
        finally:
            response.close()

        self._logger.debug(f"Response: {response.status_code} for {action}")

        if not response.is_success:
            raise APIError(
                body.decode("utf-8", errors="replace"),
                response.status_code,
                body,
                detail=_decode_failure(failure, body),
            )

        if success is None:
            return None
        if not body and (
            response.status_code == httpx.codes.NO_CONTENT
            or self._method is HttpMethod.HEAD
        ):
            return None
        return _decode(success, body)


def _with_query(url: httpx.URL, pairs: list[tuple[str, str]]) -> httpx.URL:
    # keep pairs already in the URL, re-sorted together with the new ones
    if not pairs:
        return url
    query = encode_pairs([*url.params.multi_items(), *pairs])
    return url.copy_with(query=query.encode("ascii"))


def _decode(target: Any, body: bytes) -> Any:
    try:
        return TypeAdapter(target).validate_json(body)
    except ValidationError as e:
        raise DecodeError(
            f"parse message body err: {e}, message: {body.decode('utf-8', errors='replace')}",
            body,
        ) from e


def _decode_failure(target: Any, body: bytes) -> Any:
    if target is None or not body:
        return None
    try:
        return TypeAdapter(target).validate_json(body)
    except ValidationError:
        return None


def _parse_url(raw: str) -> httpx.URL:
    match = _BAD_ESCAPE.search(raw)
    if match:
        raise httpx.InvalidURL(f"invalid URL escape {raw[match.start():match.start() + 3]!r}")
    return httpx.URL(raw)


def _resolve_executor(executor: Optional[Executor], config: Config) -> Executor:
    if executor is None:
        return default_executor(config)
    if not isinstance(executor, Executor):
        raise TypeError(
            f"executor must provide send(request, *, stream), got {type(executor).__name__}"
        )
    return executor
