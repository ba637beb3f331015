from datetime import date, timedelta

from flask import current_app

from maizebiz.models import (
    PaymentMethod,
    SalePaymentMethod,
    DeliveryMethod,
    QualityComment,
)
from maizebiz.store import get_store

SUPPLIERS = ["Kiprono Farm", "Wanjiku Traders", "Eldoret Growers Co-op"]
CUSTOMERS = ["Unga Millers", "Nakuru Feeds", "Kisumu Posho Mill"]
DRIVER_PHONES = ["0712345678", "0722111222", "0733444555"]


def demo_records_for(day: date, index: int) -> dict:
    """One purchase, one sale and one laborer payment for a given day."""
    quantity_bought = 900.0 + 90 * (index % 4)
    quantity_sold = 720.0 + 90 * (index % 3)

    purchase = {
        "supplier_name": SUPPLIERS[index % len(SUPPLIERS)],
        "location_of_origin": "Uasin Gishu",
        "date_of_purchase": day,
        "quantity_bought": quantity_bought,
        "price_per_unit": 38.0 + index % 3,
        "payment_method": list(PaymentMethod)[index % len(PaymentMethod)],
        "truck_number_plate": f"KC{chr(65 + index % 26)} {100 + index}A",
        "origin_weight": quantity_bought + 10,
        "destination_weight": quantity_bought,
    }
    sale = {
        "customer_name": CUSTOMERS[index % len(CUSTOMERS)],
        "driver_phone": DRIVER_PHONES[index % len(DRIVER_PHONES)],
        "date_of_sale": day,
        "quantity_sold": quantity_sold,
        "selling_price_per_unit": 4200.0,
        "payment_method_sale": list(SalePaymentMethod)[index % len(SalePaymentMethod)],
        "deposited_amount": 1500.0,
        "cheque_paid": quantity_sold / 90 * 4200.0,
        "delivery_method": DeliveryMethod.DELIVERY if index % 2 else DeliveryMethod.PICK_UP,
        "comment": QualityComment.GOOD,
        "small_comment": None,
    }
    laborer = {
        "date": day,
        "number_of_laborers": 3 + index % 3,
        "total_labour": 1500.0,
    }
    return {"purchases": purchase, "sales": sale, "laborers": laborer}


def seed_demo_records(user_id: int, end_date: date, days: int = 7) -> int:
    """
    Inserts a purchase, a sale and a laborer payment for each of the last
    ``days`` days ending at ``end_date``. Derived fields are computed by the
    store like any other write. Returns the number of records created.
    """
    store = get_store()
    created = 0

    for index in range(days):
        day = end_date - timedelta(days=days - 1 - index)
        for kind, data in demo_records_for(day, index).items():
            store.create(kind, user_id, data)
            created += 1

    current_app.logger.info(
        f"Seeded {created} demo records for user #{user_id} ending {end_date}."
    )
    return created
