"""Authenticated HTTP client for the Phrase v2 API."""

import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import httpx

from phrase_upload.errors import DeserializationError, RequestFailedError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.phraseapp.com"
USER_AGENT = "phrase-upload/0.1.0"

FormParams = list[tuple[str, str]]


@dataclass(frozen=True)
class Project:
    """A Phrase project."""

    id: str
    name: str


@dataclass(frozen=True)
class Locale:
    """A locale inside a Phrase project."""

    id: str
    name: str


@dataclass(frozen=True)
class RemoteKey:
    """A translation key as returned by Phrase after creation."""

    id: str
    name: str


def parse_object(path: str, item: Any, cls: type) -> Any:
    """Build an ``{id, name}`` dataclass from a decoded JSON object."""
    if not isinstance(item, dict):
        raise DeserializationError(path, f"expected an object, got {type(item).__name__}")

    fields = {}
    for field_name in ("id", "name"):
        value = item.get(field_name)
        if not isinstance(value, str):
            raise DeserializationError(path, f"missing or invalid field '{field_name}'")
        fields[field_name] = value
    return cls(**fields)


def parse_list(path: str, data: Any, cls: type) -> list[Any]:
    """Parse a JSON array of ``{id, name}`` objects into ``cls`` instances."""
    if not isinstance(data, list):
        raise DeserializationError(path, f"expected an array, got {type(data).__name__}")
    return [parse_object(path, item, cls) for item in data]


class PhraseClient:
    """Thin wrapper around ``httpx.Client`` that speaks to Phrase.

    Every request carries an ``Authorization: token <access token>`` header.
    Non-success responses raise :class:`RequestFailedError`; nothing is
    retried.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        if http_client is None:
            if timeout is None:
                http_client = httpx.Client()
            else:
                http_client = httpx.Client(timeout=httpx.Timeout(timeout))
        self._http = http_client

    def __enter__(self) -> "PhraseClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self.token}",
            "User-Agent": USER_AGENT,
        }

    def request(
        self,
        method: str,
        path: str,
        params: FormParams | None = None,
    ) -> httpx.Response:
        """Send a request and return the raw response on success.

        Args:
            method: ``"GET"`` or ``"POST"``.
            path: API path starting with ``/``, appended to the base URL.
            params: Form parameters for POST, encoded in the given order.

        Returns:
            The ``httpx.Response`` for a 2xx status.

        Raises:
            RequestFailedError: If the status code is not 2xx.
            ValueError: If ``method`` is not GET or POST.
        """
        url = f"{self.base_url}{path}"
        headers = self._headers()

        if method == "GET":
            response = self._http.get(url, headers=headers)
        elif method == "POST":
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            body = urlencode(params or [])
            response = self._http.post(url, headers=headers, content=body)
        else:
            raise ValueError(f"Unsupported method: {method}")

        logger.debug("%s %s -> %d", method, path, response.status_code)

        if not response.is_success:
            raise RequestFailedError(
                method=method,
                path=path,
                status=response.status_code,
                reason=response.reason_phrase,
            )
        return response

    def get(self, path: str) -> httpx.Response:
        return self.request("GET", path)

    def post(self, path: str, params: FormParams) -> httpx.Response:
        return self.request("POST", path, params)

    def get_json(self, path: str) -> Any:
        """GET ``path`` and decode the JSON body."""
        return _decode(path, self.get(path))

    def post_json(self, path: str, params: FormParams) -> Any:
        """POST ``params`` to ``path`` and decode the JSON body."""
        return _decode(path, self.post(path, params))


def _decode(path: str, response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DeserializationError(path, str(e)) from e
