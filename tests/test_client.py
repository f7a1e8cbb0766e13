import re
import string
import time
from datetime import datetime, timezone
from urllib.parse import urlsplit

import pytest
import requests
import responses

from binancekit.api import Spot
from binancekit.client import (
    Client,
    build_request,
    build_signed_request,
    build_signed_request_custom,
)
from binancekit.errors import BinanceError, BinanceLibError

HOST = "http://localhost:8080"


@pytest.fixture
def mock_http():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def client():
    with Client("placeholder", "secret", HOST) as c:
        yield c


def _signature(url):
    query = urlsplit(url).query
    match = re.search(r"&signature=([0-9a-f]+)$", query)
    assert match is not None
    return match.group(1)


# --- request building -------------------------------------------------------


def test_build_request_empty():
    assert build_request({}) == ""


def test_build_request_not_empty():
    assert build_request({"recvWindow": "1234"}) == "recvWindow=1234"


def test_build_request_sorted_by_key():
    params = {"symbol": "LTCBTC", "orderId": "1", "recvWindow": "1234"}
    assert build_request(params) == "orderId=1&recvWindow=1234&symbol=LTCBTC"


def test_build_signed_request_custom_fixed_time():
    now = datetime(2017, 7, 12, 2, 41, 59, 559000, tzinfo=timezone.utc)
    result = build_signed_request_custom({}, 1234, now)
    assert result == "recvWindow=1234&timestamp=1499827319559"


def test_build_signed_request_custom_keeps_parameters_sorted():
    now = datetime(2017, 7, 12, 2, 41, 59, 559000, tzinfo=timezone.utc)
    params = {"symbol": "LTCBTC"}
    result = build_signed_request_custom(params, 1234, now)
    assert result == "recvWindow=1234&symbol=LTCBTC&timestamp=1499827319559"
    assert params == {"symbol": "LTCBTC"}


def test_build_signed_request_before_epoch_raises():
    with pytest.raises(BinanceLibError):
        build_signed_request_custom({}, 1234, datetime(1960, 1, 1, tzinfo=timezone.utc))


def test_build_signed_request_uses_current_time():
    before = int(time.time() * 1000)
    result = build_signed_request({}, 1234)
    after = int(time.time() * 1000) + 1
    match = re.fullmatch(r"recvWindow=1234&timestamp=(\d+)", result)
    assert match is not None
    assert before <= int(match.group(1)) <= after


# --- signed requests --------------------------------------------------------


def test_get_signed_builds_url_and_headers(mock_http, client):
    mock_http.add(responses.GET, f"{HOST}/api/v3/account", json={"balances": []})
    result = client.get_signed(Spot.ACCOUNT, "recvWindow=1234&timestamp=1")
    assert result == {"balances": []}

    sent = mock_http.calls[0].request
    assert urlsplit(sent.url).path == "/api/v3/account"
    assert urlsplit(sent.url).query.startswith("recvWindow=1234&timestamp=1&signature=")
    signature = _signature(sent.url)
    assert len(signature) == 64
    assert set(signature) <= set(string.hexdigits.lower())
    assert sent.headers["X-MBX-APIKEY"] == "placeholder"
    assert sent.headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_get_signed_without_request(mock_http, client):
    mock_http.add(responses.GET, f"{HOST}/api/v3/account", json={"canTrade": True})
    result = client.get_signed(Spot.ACCOUNT, None)
    assert result == {"canTrade": True}
    query = urlsplit(mock_http.calls[0].request.url).query
    assert re.fullmatch(r"&signature=[0-9a-f]{64}", query)


def test_signature_depends_on_secret_and_payload(mock_http):
    mock_http.add(responses.GET, f"{HOST}/api/v3/account", json={})
    first = Client("placeholder", "secret", HOST)
    other_secret = Client("placeholder", "token", HOST)
    first.get_signed(Spot.ACCOUNT, "a=1")
    first.get_signed(Spot.ACCOUNT, "a=1")
    first.get_signed(Spot.ACCOUNT, "a=2")
    other_secret.get_signed(Spot.ACCOUNT, "a=1")
    sigs = [_signature(call.request.url) for call in mock_http.calls]
    assert sigs[0] == sigs[1]
    assert sigs[0] != sigs[2]
    assert sigs[0] != sigs[3]


def test_post_signed_uses_post(mock_http, client):
    mock_http.add(responses.POST, f"{HOST}/api/v3/order/test", json={})
    assert client.post_signed(Spot.ORDER_TEST, "symbol=LTCBTC") == {}
    assert mock_http.calls[0].request.method == "POST"


def test_delete_signed_uses_delete(mock_http, client):
    mock_http.add(responses.DELETE, f"{HOST}/api/v3/order", json={"orderId": 4})
    assert client.delete_signed(Spot.ORDER, "orderId=1") == {"orderId": 4}
    assert mock_http.calls[0].request.method == "DELETE"


def test_missing_keys_send_empty_api_key(mock_http):
    mock_http.add(responses.GET, f"{HOST}/api/v3/account", json={})
    Client(None, None, HOST).get_signed(Spot.ACCOUNT, "a=1")
    assert mock_http.calls[0].request.headers["X-MBX-APIKEY"] == ""


# --- unsigned requests ------------------------------------------------------


def test_get_appends_query(mock_http, client):
    mock_http.add(responses.GET, f"{HOST}/api/v3/depth", json={"lastUpdateId": 1027024})
    result = client.get(Spot.DEPTH, "symbol=LTCBTC")
    assert result == {"lastUpdateId": 1027024}
    assert urlsplit(mock_http.calls[0].request.url).query == "symbol=LTCBTC"


@pytest.mark.parametrize("request_text", [None, ""])
def test_get_without_query(mock_http, client, request_text):
    mock_http.add(responses.GET, f"{HOST}/api/v3/ping", json={})
    assert client.get(Spot.PING, request_text) == {}
    assert mock_http.calls[0].request.url == f"{HOST}/api/v3/ping"


def test_post_sends_api_key_without_content_type(mock_http, client):
    mock_http.add(responses.POST, f"{HOST}/api/v3/userDataStream", json={"listenKey": "abc"})
    assert client.post(Spot.USER_DATA_STREAM) == {"listenKey": "abc"}
    sent = mock_http.calls[0].request
    assert sent.headers["X-MBX-APIKEY"] == "placeholder"
    assert "Content-Type" not in sent.headers


def test_put_sends_listen_key_body(mock_http, client):
    mock_http.add(responses.PUT, f"{HOST}/api/v3/userDataStream", json={})
    assert client.put(Spot.USER_DATA_STREAM, "abc") == {}
    assert mock_http.calls[0].request.body == "listenKey=abc"


def test_delete_sends_listen_key_body(mock_http, client):
    mock_http.add(responses.DELETE, f"{HOST}/api/v3/userDataStream", json={})
    assert client.delete(Spot.USER_DATA_STREAM, "abc") == {}
    sent = mock_http.calls[0].request
    assert sent.method == "DELETE"
    assert sent.body == "listenKey=abc"


# --- error handling ---------------------------------------------------------


@pytest.mark.parametrize(
    "status, message",
    [
        (500, "Internal Server Error"),
        (503, "Service Unavailable"),
        (401, "Unauthorized"),
    ],
)
def test_known_error_statuses(mock_http, client, status, message):
    mock_http.add(responses.GET, f"{HOST}/api/v3/ping", status=status, json={})
    with pytest.raises(BinanceLibError) as info:
        client.get(Spot.PING, None)
    assert str(info.value) == message
    assert not isinstance(info.value, BinanceError)


def test_bad_request_raises_binance_error(mock_http, client):
    mock_http.add(
        responses.GET,
        f"{HOST}/api/v3/ping",
        status=400,
        json={"code": -1121, "msg": "Invalid symbol."},
    )
    with pytest.raises(BinanceError) as info:
        client.get(Spot.PING, None)
    assert info.value.code == -1121
    assert info.value.msg == "Invalid symbol."


def test_other_status_reports_code(mock_http, client):
    mock_http.add(responses.GET, f"{HOST}/api/v3/ping", status=404, body="nope")
    with pytest.raises(BinanceLibError) as info:
        client.get(Spot.PING, None)
    assert "Received response" in str(info.value)
    assert "404" in str(info.value)


def test_invalid_json_raises(mock_http, client):
    mock_http.add(responses.GET, f"{HOST}/api/v3/ping", status=200, body="not json")
    with pytest.raises(BinanceLibError):
        client.get(Spot.PING, None)


def test_connection_error_is_wrapped(mock_http, client):
    mock_http.add(
        responses.GET,
        f"{HOST}/api/v3/ping",
        body=requests.ConnectionError("refused"),
    )
    with pytest.raises(BinanceLibError) as info:
        client.get(Spot.PING, None)
    assert isinstance(info.value.__cause__, requests.ConnectionError)