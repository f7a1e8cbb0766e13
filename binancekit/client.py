"""HTTP client and request-building helpers."""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import requests

from binancekit.api import _Endpoint
from binancekit.errors import BinanceError, BinanceLibError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_USER_AGENT = "binancekit"


def build_request(parameters: Mapping[str, str]) -> str:
    """Join parameters as ``key=value`` pairs, ordered by key."""
    return "&".join(f"{key}={value}" for key, value in sorted(parameters.items()))


def build_signed_request(parameters: Mapping[str, str], recv_window: int) -> str:
    """Add ``recvWindow`` and the current ``timestamp`` and build the query."""
    return build_signed_request_custom(parameters, recv_window, datetime.now(timezone.utc))


def build_signed_request_custom(
    parameters: Mapping[str, str], recv_window: int, now: datetime
) -> str:
    """Like :func:`build_signed_request`, with the timestamp taken from ``now``."""
    if now.tzinfo is None:
        now = now.astimezone(timezone.utc)
    elapsed = now - _EPOCH
    if elapsed < timedelta(0):
        raise BinanceLibError("timestamp lies before the Unix epoch")
    timestamp = elapsed // timedelta(milliseconds=1)

    params = dict(parameters)
    if recv_window > 0:
        params["recvWindow"] = str(recv_window)
    params["timestamp"] = str(timestamp)
    return build_request(params)


def _valid_header_value(value: str) -> bool:
    return all(ch == "\t" or (ord(ch) >= 0x20 and ord(ch) != 0x7F) for ch in value)


class Client:
    """Sends requests to one REST host and decodes the JSON answers."""

    def __init__(self, api_key: str | None, secret_key: str | None, host: str):
        self.api_key = api_key or ""
        self._secret_key = secret_key or ""
        self.host = host
        self._session = requests.Session()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_signed(self, endpoint: _Endpoint, request: str | None) -> Any:
        url = self._sign_request(endpoint, request)
        return self._send("GET", url, headers=self._build_headers(True))

    def post_signed(self, endpoint: _Endpoint, request: str) -> Any:
        url = self._sign_request(endpoint, request)
        return self._send("POST", url, headers=self._build_headers(True))

    def delete_signed(self, endpoint: _Endpoint, request: str | None) -> Any:
        url = self._sign_request(endpoint, request)
        return self._send("DELETE", url, headers=self._build_headers(True))

    def get(self, endpoint: _Endpoint, request: str | None) -> Any:
        url = self._url(endpoint)
        if request:
            url = f"{url}?{request}"
        return self._send("GET", url)

    def post(self, endpoint: _Endpoint) -> Any:
        return self._send("POST", self._url(endpoint), headers=self._build_headers(False))

    def put(self, endpoint: _Endpoint, listen_key: str) -> Any:
        return self._send(
            "PUT",
            self._url(endpoint),
            headers=self._build_headers(False),
            data=f"listenKey={listen_key}",
        )

    def delete(self, endpoint: _Endpoint, listen_key: str) -> Any:
        return self._send(
            "DELETE",
            self._url(endpoint),
            headers=self._build_headers(False),
            data=f"listenKey={listen_key}",
        )

    def _url(self, endpoint: _Endpoint) -> str:
        return f"{self.host}{endpoint.value}"

    def _sign_request(self, endpoint: _Endpoint, request: str | None) -> str:
        payload = request or ""
        signature = hmac.new(
            self._secret_key.encode(), payload.encode(), hashlib.sha256
        ).hexdigest()
        return f"{self._url(endpoint)}?{payload}&signature={signature}"

    def _build_headers(self, content_type: bool) -> dict[str, str]:
        if not _valid_header_value(self.api_key):
            raise BinanceLibError("API key is not a valid header value")
        headers = {"User-Agent": _USER_AGENT}
        if content_type:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        headers["X-MBX-APIKEY"] = self.api_key
        return headers

    def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        data: str | None = None,
    ) -> Any:
        try:
            response = self._session.request(method, url, headers=headers, data=data)
        except requests.RequestException as err:
            raise BinanceLibError(f"request failed: {err}") from err
        return self._handle(response)

    @staticmethod
    def _handle(response: requests.Response) -> Any:
        status = response.status_code
        if status == 200:
            return _decode(response)
        if status == 500:
            raise BinanceLibError("Internal Server Error")
        if status == 503:
            raise BinanceLibError("Service Unavailable")
        if status == 401:
            raise BinanceLibError("Unauthorized")
        if status == 400:
            raise BinanceError.from_json(_decode(response))
        raise BinanceLibError(f"Received response: {status}")


def _decode(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as err:
        raise BinanceLibError(f"invalid JSON in response: {err}") from err