"""Exceptions raised by the client library."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

_I16_MIN = -(2**15)
_I16_MAX = 2**15 - 1


class BinanceLibError(Exception):
    """Base class for every error raised by this package."""


class BinanceError(BinanceLibError):
    """An error payload returned by the exchange (HTTP 400)."""

    def __init__(self, code: int, msg: str, extra: Mapping[str, Any] | None = None):
        super().__init__(f"Binance error {code}: {msg}")
        self.code = code
        self.msg = msg
        self.extra: dict[str, Any] = dict(extra or {})

    @classmethod
    def from_json(cls, payload: Any) -> BinanceError:
        """Build an error from a decoded JSON object or from raw JSON text."""
        if isinstance(payload, (str, bytes, bytearray)):
            try:
                payload = json.loads(payload)
            except ValueError as err:
                raise BinanceLibError(f"invalid error payload: {err}") from err
        if not isinstance(payload, Mapping):
            raise BinanceLibError("error payload is not a JSON object")

        fields = dict(payload)
        try:
            code = fields.pop("code")
            msg = fields.pop("msg")
        except KeyError as err:
            raise BinanceLibError(f"error payload is missing field {err.args[0]!r}") from err

        if isinstance(code, bool) or not isinstance(code, int):
            raise BinanceLibError(f"error code is not an integer: {code!r}")
        if not _I16_MIN <= code <= _I16_MAX:
            raise BinanceLibError(f"error code out of range: {code}")
        if not isinstance(msg, str):
            raise BinanceLibError(f"error message is not a string: {msg!r}")
        return cls(code, msg, fields)