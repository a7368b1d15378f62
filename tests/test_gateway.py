import pytest
import requests

from services.errors import GatewayError
from utils.gateway import RazorpayClient


class FakeResponse:

    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("no JSON")
        return self._body


class FakeSession:

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.auth = None
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def _client(session, key_id="rzp_test_key", key_secret="secret"):
    return RazorpayClient(key_id, key_secret, base_url="https://api.example.test/v1/", session=session)


def test_create_order_posts_amount_and_currency():
    session = FakeSession(FakeResponse(200, {"id": "order_1", "amount": 50000, "currency": "INR"}))
    client = _client(session)

    order = client.create_order(50000, "INR", receipt="rcpt_1", notes={"visit_id": "v1"})

    assert order["id"] == "order_1"
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "https://api.example.test/v1/orders")
    assert kwargs["json"] == {"amount": 50000, "currency": "INR", "receipt": "rcpt_1", "notes": {"visit_id": "v1"}}
    assert kwargs["timeout"] == 20.0
    assert session.auth == ("rzp_test_key", "secret")


def test_fetch_payment():
    session = FakeSession(FakeResponse(200, {"id": "pay_1", "method": "upi", "amount": 50000}))

    payment = _client(session).fetch_payment("pay_1")

    assert payment["method"] == "upi"
    assert session.calls[0][:2] == ("GET", "https://api.example.test/v1/payments/pay_1")


@pytest.mark.parametrize("error", [
    requests.Timeout("read timed out"),
    requests.ConnectionError("connection refused"),
])
def test_transport_errors_become_gateway_error(error):
    with pytest.raises(GatewayError):
        _client(FakeSession(error=error)).create_order(50000, "INR")


@pytest.mark.parametrize("response", [
    FakeResponse(400, {"error": {"code": "BAD_REQUEST_ERROR"}}, text="bad request"),
    FakeResponse(500, None, text="oops"),
    FakeResponse(200, None, text="<html>"),
])
def test_bad_answers_become_gateway_error(response):
    with pytest.raises(GatewayError):
        _client(FakeSession(response)).create_order(50000, "INR")


def test_unconfigured_client_does_not_call_out():
    session = FakeSession(FakeResponse(200, {"id": "order_1"}))
    client = _client(session, key_id=None, key_secret=None)

    assert not client.configured
    with pytest.raises(GatewayError):
        client.create_order(50000, "INR")
    assert session.calls == []


def test_close_closes_session():
    session = FakeSession()
    _client(session).close()
    assert session.closed


def test_fetch_order():
    session = FakeSession(FakeResponse(200, {"id": "order_1", "status": "created"}))

    order = _client(session).fetch_order("order_1")

    assert order["status"] == "created"
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "https://api.example.test/v1/orders/order_1")
    assert kwargs["timeout"] == 20.0


def test_timeout_is_configurable():
    session = FakeSession(FakeResponse(200, {"id": "pay_1", "amount": 100}))
    client = RazorpayClient("rzp_test_key", "secret", timeout=5, session=session)

    client.fetch_payment("pay_1")

    assert session.calls[0][2]["timeout"] == 5
