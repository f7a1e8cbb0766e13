"""Signed spot-account endpoints: balances, orders and trade history."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from binancekit.api import Spot
from binancekit.client import Client, build_signed_request
from binancekit.config import Config
from binancekit.errors import BinanceLibError
from binancekit.orders import (
    OrderRequest,
    OrderSide,
    OrderType,
    QuoteQuantityOrderRequest,
    TimeInForce,
)


@dataclass
class Account:
    """Access to a spot account; every request is signed with the secret key."""

    client: Client
    recv_window: int

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        secret_key: str | None = None,
        config: Config | None = None,
    ) -> Account:
        """Build an account client for the REST endpoint named in ``config``."""
        config = config or Config.default()
        client = Client(api_key, secret_key, config.rest_api_endpoint)
        return cls(client=client, recv_window=config.recv_window)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> Account:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _signed(self, parameters: Mapping[str, str] | None = None) -> str:
        return build_signed_request(parameters or {}, self.recv_window)

    def _post_order(self, order: OrderRequest | QuoteQuantityOrderRequest) -> Any:
        return self.client.post_signed(Spot.ORDER, self._signed(order.to_parameters()))

    def _post_test_order(self, order: OrderRequest | QuoteQuantityOrderRequest) -> None:
        self.client.post_signed(Spot.ORDER_TEST, self._signed(order.to_parameters()))

    @staticmethod
    def _order_parameters(symbol: str, order_id: int) -> dict[str, str]:
        return {"symbol": str(symbol), "orderId": str(int(order_id))}

    def get_account(self) -> Any:
        """Account information, including the balance of every asset."""
        return self.client.get_signed(Spot.ACCOUNT, self._signed())

    def get_balance(self, asset: str) -> Any:
        """The balance entry for one asset."""
        wanted = str(asset)
        for balance in self.get_account()["balances"]:
            if balance["asset"] == wanted:
                return balance
        raise BinanceLibError("Asset not found")

    def get_open_orders(self, symbol: str) -> Any:
        """Open orders for one symbol."""
        return self.client.get_signed(Spot.OPEN_ORDERS, self._signed({"symbol": str(symbol)}))

    def get_all_open_orders(self) -> Any:
        """Open orders for every symbol."""
        return self.client.get_signed(Spot.OPEN_ORDERS, self._signed())

    def cancel_all_open_orders(self, symbol: str) -> Any:
        """Cancel every open order for one symbol."""
        return self.client.delete_signed(
            Spot.OPEN_ORDERS, self._signed({"symbol": str(symbol)})
        )

    def order_status(self, symbol: str, order_id: int) -> Any:
        """The state of one order."""
        return self.client.get_signed(
            Spot.ORDER, self._signed(self._order_parameters(symbol, order_id))
        )

    def test_order_status(self, symbol: str, order_id: int) -> None:
        """Validate an order status query without executing it."""
        self.client.get_signed(
            Spot.ORDER_TEST, self._signed(self._order_parameters(symbol, order_id))
        )

    def limit_buy(self, symbol: str, qty: float, price: float) -> Any:
        return self._post_order(
            OrderRequest(symbol, qty, price, OrderSide.BUY, OrderType.LIMIT)
        )

    def test_limit_buy(self, symbol: str, qty: float, price: float) -> None:
        self._post_test_order(
            OrderRequest(symbol, qty, price, OrderSide.BUY, OrderType.LIMIT)
        )

    def limit_sell(self, symbol: str, qty: float, price: float) -> Any:
        return self._post_order(
            OrderRequest(symbol, qty, price, OrderSide.SELL, OrderType.LIMIT)
        )

    def test_limit_sell(self, symbol: str, qty: float, price: float) -> None:
        self._post_test_order(
            OrderRequest(symbol, qty, price, OrderSide.SELL, OrderType.LIMIT)
        )

    def market_buy(self, symbol: str, qty: float) -> Any:
        return self._post_order(
            OrderRequest(symbol, qty, 0.0, OrderSide.BUY, OrderType.MARKET)
        )

    def test_market_buy(self, symbol: str, qty: float) -> None:
        self._post_test_order(
            OrderRequest(symbol, qty, 0.0, OrderSide.BUY, OrderType.MARKET)
        )

    def market_buy_using_quote_quantity(self, symbol: str, quote_order_qty: float) -> Any:
        return self._post_order(
            QuoteQuantityOrderRequest(symbol, quote_order_qty, OrderSide.BUY, OrderType.MARKET)
        )

    def test_market_buy_using_quote_quantity(
        self, symbol: str, quote_order_qty: float
    ) -> None:
        self._post_test_order(
            QuoteQuantityOrderRequest(symbol, quote_order_qty, OrderSide.BUY, OrderType.MARKET)
        )

    def market_sell(self, symbol: str, qty: float) -> Any:
        return self._post_order(
            OrderRequest(symbol, qty, 0.0, OrderSide.SELL, OrderType.MARKET)
        )

    def test_market_sell(self, symbol: str, qty: float) -> None:
        self._post_test_order(
            OrderRequest(symbol, qty, 0.0, OrderSide.SELL, OrderType.MARKET)
        )

    def market_sell_using_quote_quantity(self, symbol: str, quote_order_qty: float) -> Any:
        return self._post_order(
            QuoteQuantityOrderRequest(symbol, quote_order_qty, OrderSide.SELL, OrderType.MARKET)
        )

    def test_market_sell_using_quote_quantity(
        self, symbol: str, quote_order_qty: float
    ) -> None:
        self._post_test_order(
            QuoteQuantityOrderRequest(symbol, quote_order_qty, OrderSide.SELL, OrderType.MARKET)
        )

    @staticmethod
    def _stop_limit(
        symbol: str,
        qty: float,
        price: float,
        stop_price: float,
        side: OrderSide,
        time_in_force: TimeInForce,
    ) -> OrderRequest:
        return OrderRequest(
            symbol,
            qty,
            price,
            side,
            OrderType.STOP_LOSS_LIMIT,
            time_in_force=time_in_force,
            stop_price=stop_price,
        )

    def stop_limit_buy_order(
        self,
        symbol: str,
        qty: float,
        price: float,
        stop_price: float,
        time_in_force: TimeInForce,
    ) -> Any:
        """Place a stop-loss limit buy order."""
        return self._post_order(
            self._stop_limit(symbol, qty, price, stop_price, OrderSide.BUY, time_in_force)
        )

    def test_stop_limit_buy_order(
        self,
        symbol: str,
        qty: float,
        price: float,
        stop_price: float,
        time_in_force: TimeInForce,
    ) -> None:
        self._post_test_order(
            self._stop_limit(symbol, qty, price, stop_price, OrderSide.BUY, time_in_force)
        )

    def stop_limit_sell_order(
        self,
        symbol: str,
        qty: float,
        price: float,
        stop_price: float,
        time_in_force: TimeInForce,
    ) -> Any:
        """Place a stop-loss limit sell order."""
        return self._post_order(
            self._stop_limit(symbol, qty, price, stop_price, OrderSide.SELL, time_in_force)
        )

    def test_stop_limit_sell_order(
        self,
        symbol: str,
        qty: float,
        price: float,
        stop_price: float,
        time_in_force: TimeInForce,
    ) -> None:
        self._post_test_order(
            self._stop_limit(symbol, qty, price, stop_price, OrderSide.SELL, time_in_force)
        )

    def custom_order(
        self,
        symbol: str,
        qty: float,
        price: float,
        stop_price: float | None,
        order_side: OrderSide,
        order_type: OrderType,
        time_in_force: TimeInForce,
        new_client_order_id: str | None,
    ) -> Any:
        """Place an order with every parameter chosen by the caller."""
        return self._post_order(
            OrderRequest(
                symbol,
                qty,
                price,
                order_side,
                order_type,
                time_in_force=time_in_force,
                stop_price=stop_price,
                new_client_order_id=new_client_order_id,
            )
        )

    def test_custom_order(
        self,
        symbol: str,
        qty: float,
        price: float,
        stop_price: float | None,
        order_side: OrderSide,
        order_type: OrderType,
        time_in_force: TimeInForce,
        new_client_order_id: str | None,
    ) -> None:
        self._post_test_order(
            OrderRequest(
                symbol,
                qty,
                price,
                order_side,
                order_type,
                time_in_force=time_in_force,
                stop_price=stop_price,
                new_client_order_id=new_client_order_id,
            )
        )

    def cancel_order(self, symbol: str, order_id: int) -> Any:
        return self.client.delete_signed(
            Spot.ORDER, self._signed(self._order_parameters(symbol, order_id))
        )

    def cancel_order_with_client_id(self, symbol: str, orig_client_order_id: str) -> Any:
        parameters = {"symbol": str(symbol), "origClientOrderId": str(orig_client_order_id)}
        return self.client.delete_signed(Spot.ORDER, self._signed(parameters))

    def test_cancel_order(self, symbol: str, order_id: int) -> None:
        self.client.delete_signed(
            Spot.ORDER_TEST, self._signed(self._order_parameters(symbol, order_id))
        )

    def trade_history(self, symbol: str) -> Any:
        """Trades of this account for one symbol."""
        return self.client.get_signed(Spot.MY_TRADES, self._signed({"symbol": str(symbol)}))