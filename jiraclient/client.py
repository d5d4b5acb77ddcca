"""Core HTTP client: request building, response checks and auth transports."""

from __future__ import annotations

import base64
import dataclasses
import hashlib
import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar
from urllib.parse import (
    parse_qs,
    quote_plus,
    unquote,
    urlencode,
    urljoin,
    urlsplit,
    urlunsplit,
)

import jwt
import requests
from requests.auth import AuthBase

AUTH_TIMEOUT = 60
JWT_LIFETIME = 59

_PAGING_KEYS = (("start_at", "startAt"), ("max_results", "maxResults"), ("total", "total"))

_T = TypeVar("_T")


class JiraError(Exception):
    """Raised when the Jira API reports a failure."""

    def __init__(self, message: str, response: Response | None = None) -> None:
        super().__init__(message)
        self.response = response


@dataclass
class Response:
    """A Jira API response with paging information."""

    http: requests.Response
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    _data: Any = field(default=None, init=False, repr=False)
    _decoded: bool = field(default=False, init=False, repr=False)

    @property
    def status_code(self) -> int:
        return self.http.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self.http.headers

    @property
    def text(self) -> str:
        return self.http.text

    @property
    def content(self) -> bytes:
        return self.http.content

    def json(self) -> Any:
        """Decode the body as JSON and pick up paging values if present."""
        if not self._decoded:
            self._data = json.loads(self.http.content or b"")
            self._decoded = True
            if isinstance(self._data, dict):
                for attr, key in _PAGING_KEYS:
                    value = self._data.get(key)
                    if isinstance(value, int) and not isinstance(value, bool):
                        setattr(self, attr, value)
        return self._data


def check_response(response: Any) -> None:
    """Raise JiraError unless the status code is in the 2xx range."""
    code = response.status_code
    if 200 <= code <= 299:
        return
    raise JiraError(
        "request failed. Please analyze the request body for more details. "
        f"Status code: {code}",
        response,
    )


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def add_options(url: str, options: Any) -> str:
    """Replace the query of url with the encoded options, keys sorted."""
    if options is None:
        return url
    if dataclasses.is_dataclass(options) and not isinstance(options, type):
        options = dataclasses.asdict(options)
    pairs: list[tuple[str, str]] = []
    for key in sorted(options):
        value = options[key]
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(item)) for item in value)
        else:
            pairs.append((key, _query_value(value)))
    parts = urlsplit(url)
    return urlunsplit(parts._replace(query=urlencode(pairs)))


def _encode_body(body: Any) -> bytes | None:
    if body is None:
        return None
    if dataclasses.is_dataclass(body) and not isinstance(body, type):
        body = dataclasses.asdict(body)
    return json.dumps(body).encode("utf-8") + b"\n"


def _json_field(
    key: str | None = None,
    *,
    default: Any = "",
    factory: Callable[[], Any] | None = None,
    decode: Callable[[Any], Any] | None = None,
) -> Any:
    """Declare a dataclass field read from the JSON member key."""
    metadata = {"json": key, "decode": decode}
    if factory is not None:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _from_json(cls: type[_T], data: Mapping[str, Any] | None) -> _T:
    """Build a dataclass from a decoded JSON object, ignoring unknown members."""
    data = data or {}
    values: dict[str, Any] = {}
    for item in dataclasses.fields(cls):
        if not item.init:
            continue
        key = item.metadata.get("json") or item.name
        if key not in data:
            continue
        decode = item.metadata.get("decode")
        values[item.name] = decode(data[key]) if decode else data[key]
    return cls(**values)


def _list_of(cls: type[_T]) -> Callable[[Any], list[_T]]:
    """Return a decoder turning a JSON array into a list of cls."""
    return lambda items: [_from_json(cls, item) for item in items or []]


def _fetch_json(client: Client, endpoint: str, method: str = "GET", body: Any = None) -> Any:
    """Send a request and return the decoded JSON body."""
    return client.do(client.new_request(method, endpoint, body)).json()


def _get_list(client: Client, endpoint: str, cls: type[_T]) -> list[_T]:
    """Fetch a JSON array and decode each element as cls."""
    return _list_of(cls)(_fetch_json(client, endpoint))


class Client:
    """Manages communication with the Jira API."""

    def __init__(self, base_url: str, http: requests.Session | None = None) -> None:
        if not base_url.endswith("/"):
            base_url += "/"
        self._base_url = base_url
        self._http = http if http is not None else requests.Session()

    def base_url(self) -> str:
        """Return the base URL, always ending in a slash."""
        return self._base_url

    def _resolve(self, url: str) -> str:
        parts = urlsplit(url)
        relative = urlunsplit(parts._replace(path=parts.path.lstrip("/")))
        return urljoin(self._base_url, relative)

    def new_request(self, method: str, url: str, body: Any = None) -> requests.Request:
        """Build a request whose body, if given, is JSON encoded."""
        return requests.Request(
            method,
            self._resolve(url),
            headers={"Content-Type": "application/json"},
            data=_encode_body(body),
        )

    def new_raw_request(self, method: str, url: str, body: Any = None) -> requests.Request:
        """Build a request that sends body (bytes or a file) unchanged."""
        return requests.Request(
            method,
            self._resolve(url),
            headers={"Content-Type": "application/json"},
            data=body,
        )

    def new_multipart_request(
        self, method: str, url: str, body: bytes | None = None
    ) -> requests.Request:
        """Build a request carrying a ready-made multipart form."""
        return requests.Request(
            method,
            self._resolve(url),
            headers={"X-Atlassian-Token": "nocheck"},
            data=body,
        )

    def do(self, request: requests.Request | requests.PreparedRequest) -> Response:
        """Send a request; raise JiraError for a non-2xx status."""
        if isinstance(request, requests.Request):
            request = self._http.prepare_request(request)
        response = Response(self._http.send(request))
        check_response(response)
        return response


def _session_with(auth: AuthBase) -> requests.Session:
    session = requests.Session()
    session.auth = auth
    return session


@dataclass
class BasicAuthTransport(AuthBase):
    """Authenticates every request with HTTP Basic authentication."""

    username: str
    password: str

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        credentials = f"{self.username}:{self.password}".encode("utf-8")
        request.headers["Authorization"] = "Basic " + base64.b64encode(credentials).decode("ascii")
        return request

    def client(self) -> requests.Session:
        """Return a session that authenticates with this transport."""
        return _session_with(self)


@dataclass
class CookieAuthTransport(AuthBase):
    """Authenticates every request with a Jira session cookie."""

    username: str
    password: str
    auth_url: str
    session_object: list[tuple[str, str]] | None = None

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        if self.session_object is None:
            try:
                self._set_session_object()
            except requests.RequestException as exc:
                raise JiraError(f"cookieauth: no session object has been set: {exc}") from exc
        pairs = [f"{name}={value}" for name, value in self.session_object if value]
        if pairs:
            existing = request.headers.get("Cookie")
            request.headers["Cookie"] = "; ".join(([existing] if existing else []) + pairs)
        return request

    def client(self) -> requests.Session:
        """Return a session that authenticates with this transport."""
        return _session_with(self)

    def _set_session_object(self) -> None:
        password = self.password
        credentials = dict(username=self.username, password=password)
        response = requests.post(self.auth_url, json=credentials, timeout=AUTH_TIMEOUT)
        self.session_object = [(cookie.name, cookie.value) for cookie in response.cookies]


@dataclass
class JWTAuthTransport(AuthBase):
    """Authenticates every request with a signed JWT, as add-ons do."""

    secret: bytes | str
    issuer: str

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        now = int(time.time())
        claims = {
            "iss": self.issuer,
            "iat": now,
            "exp": now + JWT_LIFETIME,
            "qsh": self.create_query_string_hash(request.method, request.url),
        }
        try:
            signed = jwt.encode(claims, self.secret, algorithm="HS256")
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise JiraError(f"jwtAuth: error signing JWT: {exc}") from exc
        request.headers["Authorization"] = f"JWT {signed}"
        return request

    def client(self) -> requests.Session:
        """Return a session that authenticates with this transport."""
        return _session_with(self)

    def create_query_string_hash(self, method: str, url: str) -> str:
        """Return the hex SHA-256 of the canonical request."""
        canonical = self.canonicalize_request(method, url)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

    def canonicalize_request(self, method: str, url: str) -> str:
        """Build the canonical form of a request used for the qsh claim."""
        parts = urlsplit(url)
        path = "/" + unquote(parts.path).strip("/").replace("&", "%26")
        query = parse_qs(parts.query, keep_blank_values=True)
        entries = sorted(
            f"{quote_plus(key)}={quote_plus(''.join(values))}".replace("+", "%20")
            for key, values in query.items()
            if key != "jwt"
        )
        return f"{method.upper()}&{path}&{'&'.join(entries)}"