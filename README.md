# binancekit

A small synchronous client for the Binance spot REST API. It builds query
strings, signs them with HMAC-SHA256, reads account information and places,
queries and cancels spot orders.

## Installation

```
pip install binancekit
```

To run the test suite, install the `test` extra:

```
pip install "binancekit[test]"
pytest
```

## Configuration

`binancekit.config.Config` is a frozen dataclass holding the REST and
websocket endpoints and the receive window sent with every signed request
(5000 ms by default). Its `set_*` methods return a new configuration, so calls
can be chained:

```python
from binancekit.config import Config

config = Config.default().set_recv_window(10000)
testnet = Config.testnet()
local = Config.default().set_rest_api_endpoint("http://localhost:8080")
```

`set_recv_window` raises `ValueError` for a negative value.

## Account and orders

`binancekit.account.Account` signs every request with the secret key. Answers
are returned as the decoded JSON (dictionaries and lists), exactly as the
exchange sent them.

```python
from binancekit.account import Account
from binancekit.config import Config
from binancekit.orders import OrderSide, OrderType, TimeInForce

with Account.create("placeholder", "secret", Config.default()) as account:
    info = account.get_account()
    btc = account.get_balance("BTC")          # {"asset": "BTC", "free": ..., "locked": ...}

    order = account.limit_buy("LTCBTC", 1, 0.1)
    status = account.order_status("LTCBTC", order["orderId"])
    account.cancel_order("LTCBTC", order["orderId"])

    account.stop_limit_sell_order("LTCBTC", 1, 0.1, 0.09, TimeInForce.GTC)
    account.custom_order(
        "LTCBTC", 1, 0.1, None, OrderSide.BUY, OrderType.LIMIT, TimeInForce.GTC, None
    )
    trades = account.trade_history("LTCBTC")
```

Other methods: `get_open_orders`, `get_all_open_orders`,
`cancel_all_open_orders`, `cancel_order_with_client_id`, `market_buy`,
`market_sell`, `market_buy_using_quote_quantity`,
`market_sell_using_quote_quantity`, `limit_sell` and `stop_limit_buy_order`.

Every order method has a `test_` variant (for example `test_limit_buy`,
`test_order_status`, `test_cancel_order`) that sends the request to the test
endpoint: the exchange validates it but does not pass it to the matching
engine. These variants return `None`.

## Order parameters

`binancekit.orders` holds the `OrderType`, `OrderSide` and `TimeInForce`
enums and the `OrderRequest` and `QuoteQuantityOrderRequest` dataclasses.
Their `to_parameters()` gives the request parameters sorted by name. A price
of zero leaves out both `price` and `timeInForce`; `stopPrice` and
`newClientOrderId` are sent only when set. Numbers are written by
`format_number`, in plain decimal form without trailing zeros or exponent:

```python
from binancekit.orders import OrderRequest, OrderSide, OrderType

OrderRequest("LTCBTC", 1, 0.1, OrderSide.BUY, OrderType.LIMIT).to_parameters()
# {'price': '0.1', 'quantity': '1', 'side': 'BUY', 'symbol': 'LTCBTC',
#  'timeInForce': 'GTC', 'type': 'LIMIT'}
```

## Errors

Failures are raised as `binancekit.errors.BinanceLibError`: network errors,
invalid JSON, HTTP 401, 500, 503 and other unexpected statuses, an API key that
cannot be sent as a header, and `get_balance` for an asset the account does not
hold ("Asset not found"). When the exchange answers HTTP 400, a `BinanceError`
(a subclass) is raised instead, carrying the exchange's `code`, `msg` and any
further fields in `extra`:

```python
from binancekit.errors import BinanceError, BinanceLibError

try:
    account.limit_buy("LTCBTC", 1, 0.1)
except BinanceError as err:
    print(err.code, err.msg)
except BinanceLibError as err:
    print(err)
```

## Lower-level access

`binancekit.client.Client` performs the HTTP calls against one host:
`get_signed`, `post_signed` and `delete_signed` append an HMAC-SHA256
`signature`; `get` sends an unsigned query; `post`, `put` and `delete` are
for listen-key requests. `build_request` joins a parameter mapping into a
query string sorted by key; `build_signed_request` adds `recvWindow` (when
positive) and the current millisecond `timestamp`, and
`build_signed_request_custom` does the same for a given `datetime`.

Endpoint paths are the values of the `Spot`, `Sapi` and `Futures` enums in
`binancekit.api`. Public endpoints can be reached through the client directly:

```python
from binancekit.api import Spot
from binancekit.client import Client

with Client(None, None, "https://api.binance.com") as client:
    server_time = client.get(Spot.TIME, None)
    depth = client.get(Spot.DEPTH, "symbol=LTCBTC")
```

## What the package does not do

Only the spot account has a high-level interface. There are no wrappers for
market data, exchange information, user data streams, wallet and savings
endpoints or futures; their paths are listed in `binancekit.api` and can be
called through `Client`, but their answers are not modelled. Answers are never
turned into typed objects. The websocket endpoints in `Config` are stored
only: the package has no websocket client.