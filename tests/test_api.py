import pytest
from fastapi.testclient import TestClient

import main
from database import session_scope
from models import Account, Visit, PaymentStatus, PaymentLedgerEntry
from services.errors import GatewayError

SIGNUP = {
    "name": "Asha",
    "email": "asha@example.com",
    "password": "hunter22",
    "phone": "555",
    "address": "12 MG Road",
}
VISIT = {
    "name": "A",
    "email": "a@x.com",
    "phone": "555",
    "date": "2024-01-01",
    "timeSlot": "10:00",
}


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_signup_login_and_profile(client):
    response = client.post("/signup", json=SIGNUP)
    assert response.status_code == 200
    assert response.json() == {"message": "Account created successfully!"}

    response = client.post("/login", json={"email": SIGNUP["email"], "password": "hunter22"})
    assert response.status_code == 200
    assert response.json() == {"message": "Login successful", "name": "Asha"}

    response = client.get("/user/profile", params={"email": SIGNUP["email"]})
    assert response.status_code == 200
    assert response.json() == {
        "name": "Asha",
        "email": "asha@example.com",
        "phone": "555",
        "address": "12 MG Road",
    }


def test_signup_twice(client, session_factory):
    client.post("/signup", json=SIGNUP)
    response = client.post("/signup", json=dict(SIGNUP, name="Other", password="different"))

    assert response.status_code == 400
    assert response.json()["error"] == "AlreadyRegistered"
    with session_scope(session_factory) as db:
        assert db.query(Account).count() == 1


def test_bad_login_is_uninformative(client):
    client.post("/signup", json=SIGNUP)

    wrong_password = client.post("/login", json={"email": SIGNUP["email"], "password": "nope"})
    unknown_email = client.post("/login", json={"email": "who@example.com", "password": "hunter22"})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"] == "InvalidCredentials"


def test_profile_errors(client):
    assert client.get("/user/profile", params={"email": "who@example.com"}).status_code == 404
    response = client.get("/user/profile")
    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


def test_submit_visit(client, session_factory):
    response = client.post("/submit-visit", json=dict(VISIT, contactMethods=["phone"], propertyId="p-1"))

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    with session_scope(session_factory) as db:
        visit = db.get(Visit, body["visitId"])
        assert visit.payment_status == PaymentStatus.PENDING
        assert visit.contact_methods == ["phone"]
        assert visit.property_id == "p-1"


@pytest.mark.parametrize("field", ["name", "email", "phone", "date", "timeSlot"])
def test_submit_visit_missing_field(client, session_factory, field):
    payload = {k: v for k, v in VISIT.items() if k != field}

    response = client.post("/submit-visit", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert field in response.json()["message"]
    with session_scope(session_factory) as db:
        assert db.query(Visit).count() == 0


def test_malformed_body_is_400(client):
    response = client.post("/submit-visit", json=dict(VISIT, contactMethods=5))
    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


def test_create_order_with_empty_body(client, settings):
    response = client.post("/create-order", json={})

    assert response.status_code == 200
    order = response.json()["order"]
    assert response.json()["success"] is True
    assert order["amount"] == settings.visit_fee_amount
    assert order["currency"] == settings.payment_currency


def test_create_order_gateway_down(client, gateway):
    gateway.fail = GatewayError()

    response = client.post("/create-order", json={})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "GatewayError",
        "message": "Payment service is temporarily unavailable",
    }


def test_booking_to_paid_end_to_end(client, session_factory, sign):
    visit_id = client.post("/submit-visit", json=VISIT).json()["visitId"]
    order = client.post("/create-order", json={"visitId": visit_id}).json()["order"]
    callback = {
        "razorpay_order_id": order["id"],
        "razorpay_payment_id": "pay_001",
        "razorpay_signature": sign(order["id"], "pay_001"),
    }

    response = client.post("/verify-payment", json=callback)

    assert response.status_code == 200
    assert response.json() == {"success": True, "paymentId": "pay_001", "visitId": visit_id}
    with session_scope(session_factory) as db:
        visit = db.get(Visit, visit_id)
        assert visit.payment_status == PaymentStatus.PAID
        assert visit.payment_id == "pay_001"
        assert db.query(PaymentLedgerEntry).count() == 1

    replay = client.post("/verify-payment", json=callback)
    assert replay.status_code == 409
    assert replay.json()["error"] == "DuplicatePayment"
    with session_scope(session_factory) as db:
        assert db.query(PaymentLedgerEntry).count() == 1


def test_verify_payment_bad_signature(client, session_factory, sign):
    order = client.post("/create-order", json={}).json()["order"]

    response = client.post("/verify-payment", json={
        "razorpay_order_id": order["id"],
        "razorpay_payment_id": "pay_001",
        "razorpay_signature": sign(order["id"], "pay_002"),
    })

    assert response.status_code == 400
    assert response.json()["error"] == "SignatureMismatch"
    with session_scope(session_factory) as db:
        assert db.query(PaymentLedgerEntry).count() == 0


def test_create_order_for_unknown_visit(client):
    response = client.post("/create-order", json={"visitId": "does-not-exist"})
    assert response.status_code == 404


def test_startup_fails_without_database(settings, gateway, engine, monkeypatch):
    monkeypatch.setattr(main, "check_connection", lambda engine: False)
    app = main.create_app(settings, gateway=gateway, engine=engine)

    with pytest.raises(RuntimeError):
        with TestClient(app):
            pass


def test_shutdown_closes_gateway(settings, gateway, engine):
    app = main.create_app(settings, gateway=gateway, engine=engine)
    with TestClient(app) as client:
        assert client.get("/").status_code == 200
        assert not gateway.closed
    assert gateway.closed
