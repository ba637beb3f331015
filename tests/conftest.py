from datetime import date

import pytest

from maizebiz import create_app, db
from maizebiz.auth.utils import create_user
from maizebiz.config import TestConfig
from maizebiz.models import (
    PaymentMethod,
    SalePaymentMethod,
    DeliveryMethod,
    QualityComment,
)
from maizebiz.store import get_store

PASSWORD = "maize-secret"


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Application context for tests that talk to the store directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(app, email, username):
    with app.app_context():
        user = create_user(email, username, PASSWORD)
        return user.id


@pytest.fixture
def user_id(app):
    return _make_user(app, "wanjiku@maizebiz.co.ke", "Wanjiku")


@pytest.fixture
def other_user_id(app):
    return _make_user(app, "otieno@maizebiz.co.ke", "Otieno")


@pytest.fixture
def auth_client(client, user_id):
    response = client.post(
        "/auth/login",
        data={"email": "wanjiku@maizebiz.co.ke", "password": PASSWORD},
    )
    assert response.status_code == 302
    return client


@pytest.fixture
def purchase_data():
    return {
        "supplier_name": "Kiprono Farm",
        "location_of_origin": "Eldoret",
        "date_of_purchase": date(2024, 3, 10),
        "quantity_bought": 500.0,
        "price_per_unit": 40.0,
        "payment_method": PaymentMethod.MPESA,
        "truck_number_plate": "KCA 123A",
        "origin_weight": 510.0,
        "destination_weight": 500.0,
    }


@pytest.fixture
def sale_data():
    return {
        "customer_name": "Unga Millers",
        "driver_phone": "0712345678",
        "date_of_sale": date(2024, 3, 11),
        "quantity_sold": 450.0,
        "selling_price_per_unit": 4000.0,
        "payment_method_sale": SalePaymentMethod.CHEQUE,
        "deposited_amount": 1500.0,
        "cheque_paid": 20000.0,
        "delivery_method": DeliveryMethod.DELIVERY,
        "comment": QualityComment.GOOD,
        "small_comment": "Dry, well sorted",
    }


@pytest.fixture
def laborer_data():
    return {
        "date": date(2024, 3, 11),
        "number_of_laborers": 9,
        "total_labour": 4500.0,
    }


@pytest.fixture
def store(ctx):
    return get_store()
