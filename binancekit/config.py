"""Endpoint and request-window configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Config:
    """Where to send requests and how long a signed request stays valid."""

    rest_api_endpoint: str = "https://api.binance.com"
    ws_endpoint: str = "wss://stream.binance.com:9443/ws/"
    futures_rest_api_endpoint: str = "https://fapi.binance.com"
    futures_ws_endpoint: str = "wss://fstream.binance.com/ws"
    recv_window: int = 5000

    @classmethod
    def default(cls) -> Config:
        """The production endpoints."""
        return cls()

    @classmethod
    def testnet(cls) -> Config:
        """The test network endpoints."""
        return (
            cls.default()
            .set_rest_api_endpoint("https://testnet.binance.vision")
            .set_ws_endpoint("wss://testnet.binance.vision/ws")
            .set_futures_rest_api_endpoint("https://testnet.binancefuture.com")
            .set_futures_ws_endpoint("https://testnet.binancefuture.com/ws")
        )

    def set_rest_api_endpoint(self, rest_api_endpoint: str) -> Config:
        return replace(self, rest_api_endpoint=str(rest_api_endpoint))

    def set_ws_endpoint(self, ws_endpoint: str) -> Config:
        return replace(self, ws_endpoint=str(ws_endpoint))

    def set_futures_rest_api_endpoint(self, futures_rest_api_endpoint: str) -> Config:
        return replace(self, futures_rest_api_endpoint=str(futures_rest_api_endpoint))

    def set_futures_ws_endpoint(self, futures_ws_endpoint: str) -> Config:
        return replace(self, futures_ws_endpoint=str(futures_ws_endpoint))

    def set_recv_window(self, recv_window: int) -> Config:
        if recv_window < 0:
            raise ValueError("recv_window must not be negative")
        return replace(self, recv_window=int(recv_window))