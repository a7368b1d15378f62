import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import create_db_engine, init_db, make_session_factory
from main import create_app
from services import build_password_context, compute_payment_signature

KEY_SECRET = "test_key_secret"


class FakeGateway:
    """In-memory stand-in for RazorpayClient."""

    def __init__(self):
        self.orders = []
        self.payments = {}
        self.fail = None
        self.closed = False

    def create_order(self, amount, currency, receipt=None, notes=None):
        if self.fail is not None:
            raise self.fail
        order = {
            "id": f"order_{len(self.orders) + 1:04d}",
            "entity": "order",
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
            "status": "created",
        }
        self.orders.append(order)
        return order

    def fetch_order(self, order_id):
        if self.fail is not None:
            raise self.fail
        return next(order for order in self.orders if order["id"] == order_id)

    def fetch_payment(self, payment_id):
        if self.fail is not None:
            raise self.fail
        return self.payments.get(payment_id, {
            "id": payment_id,
            "amount": 50000,
            "currency": "INR",
            "method": "upi",
            "status": "captured",
        })

    def close(self):
        self.closed = True


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret=KEY_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def pwd_context():
    return build_password_context(rounds=4)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def sign():
    def _sign(order_id, payment_id, secret=KEY_SECRET):
        return compute_payment_signature(order_id, payment_id, secret)
    return _sign


@pytest.fixture
def client(settings, gateway, engine):
    app = create_app(settings, gateway=gateway, engine=engine)
    with TestClient(app) as client:
        yield client
