import math
from enum import Enum

from flask_wtf import FlaskForm
from wtforms import (
    StringField,
    SubmitField,
    SelectField,
    IntegerField,
    FloatField,
    DateField,
    TextAreaField,
)
from wtforms.validators import (
    DataRequired,
    InputRequired,
    Optional,
    Length,
    NumberRange,
    ValidationError,
)
from maizebiz.models import (
    PaymentMethod,
    SalePaymentMethod,
    DeliveryMethod,
    QualityComment,
)
from maizebiz.main.utils import get_local_today


def enum_choices(enum_cls, placeholder=None):
    choices = [(member.value, member.value) for member in enum_cls]
    if placeholder is not None:
        choices.insert(0, ("", placeholder))
    return choices


def coerce_enum_value(value):
    """Lets SelectFields be filled from model objects holding enum members."""
    if isinstance(value, Enum):
        return value.value
    return "" if value is None else str(value)


def finite(form, field):
    """Reject inf and nan, which FloatField accepts."""
    if field.data is not None and not math.isfinite(field.data):
        raise ValidationError("Must be a finite number")


def positive(form, field):
    """Reject zero, negative and non-finite numbers (empty values are left to other validators)."""
    finite(form, field)
    if field.data is not None and field.data <= 0:
        raise ValidationError("Must be positive")


class RecordForm(FlaskForm):
    """
    Base class for the purchase, sale and laborer forms.

    record_data() returns the validated values keyed by column name, ready for
    RecordStore.create/update. Derived fields are not form inputs.
    """

    # field name -> Enum class for SelectFields
    enum_fields = {}
    # values stored when an optional numeric field is left empty
    empty_defaults = {}

    submit = SubmitField("Save")

    def record_data(self) -> dict:
        data = {}
        for name, field in self._fields.items():
            if name in ("submit", "csrf_token"):
                continue
            value = field.data
            if isinstance(value, str):
                value = value.strip() or None
            if name in self.enum_fields:
                value = self.enum_fields[name](value) if value else None
            if value is None and name in self.empty_defaults:
                value = self.empty_defaults[name]
            data[name] = value
        return data


class PurchaseForm(RecordForm):
    """Mirror of the purchase entry form. total_amount_paid is derived."""

    enum_fields = {"payment_method": PaymentMethod}

    supplier_name = StringField(
        "Supplier Name",
        validators=[DataRequired(message="Supplier name is required"), Length(max=128)],
        render_kw={"placeholder": "Enter supplier name"},
    )
    location_of_origin = StringField(
        "Location of Origin",
        validators=[Optional(), Length(max=128)],
        render_kw={"placeholder": "Where the maize came from (optional)"},
    )
    date_of_purchase = DateField(
        "Date of Purchase",
        default=get_local_today,
        validators=[DataRequired(message="Date is required")],
    )
    quantity_bought = FloatField(
        "Quantity Bought (kg)",
        validators=[InputRequired(message="Quantity is required"), positive],
        render_kw={"step": "0.01"},
    )
    price_per_unit = FloatField(
        "Price per Unit (KES/kg)",
        validators=[InputRequired(message="Price per unit is required"), positive],
        render_kw={"step": "0.01"},
    )
    payment_method = SelectField(
        "Payment Method",
        choices=enum_choices(PaymentMethod, "Select payment method"),
        coerce=coerce_enum_value,
        validators=[DataRequired(message="Payment method is required")],
    )
    truck_number_plate = StringField(
        "Truck Number Plate",
        validators=[Optional(), Length(max=32)],
        render_kw={"placeholder": "e.g. KCA 123A (optional)"},
    )
    origin_weight = FloatField(
        "Origin Weight (kg)",
        validators=[Optional(), positive],
        render_kw={"step": "0.01"},
    )
    destination_weight = FloatField(
        "Destination Weight (kg)",
        validators=[Optional(), positive],
        render_kw={"step": "0.01"},
    )
    submit = SubmitField("Save Purchase")


class SaleForm(RecordForm):
    """
    Sale entry form.

    number_of_bags, expected_amount and total_amount_received are derived.
    Payment method is optional on sales.
    """

    enum_fields = {
        "payment_method_sale": SalePaymentMethod,
        "delivery_method": DeliveryMethod,
        "comment": QualityComment,
    }
    empty_defaults = {"deposited_amount": 0.0, "cheque_paid": 0.0}

    customer_name = StringField(
        "Customer Name",
        validators=[DataRequired(message="Customer name is required"), Length(max=128)],
        render_kw={"placeholder": "Enter customer name"},
    )
    driver_phone = StringField(
        "Driver Phone Number",
        validators=[DataRequired(message="Driver phone is required"), Length(max=32)],
        render_kw={"placeholder": "Enter driver phone number"},
    )
    date_of_sale = DateField(
        "Date of Sale",
        default=get_local_today,
        validators=[DataRequired(message="Date is required")],
    )
    quantity_sold = FloatField(
        "Quantity Sold (kg)",
        validators=[InputRequired(message="Quantity is required"), positive],
        render_kw={"step": "0.01"},
    )
    selling_price_per_unit = FloatField(
        "Selling Price per Bag (KES)",
        validators=[InputRequired(message="Selling price is required"), positive],
        render_kw={"step": "0.01"},
    )
    payment_method_sale = SelectField(
        "Payment Method",
        choices=enum_choices(SalePaymentMethod, "Select payment method (optional)"),
        coerce=coerce_enum_value,
        validators=[Optional()],
    )
    deposited_amount = FloatField(
        "Deposited Amount (Labour, KES)",
        default=0.0,
        validators=[
            Optional(),
            finite,
            NumberRange(min=0, message="Amount cannot be negative"),
        ],
        render_kw={"step": "0.01"},
    )
    cheque_paid = FloatField(
        "Cheque / Revenue Received (KES)",
        default=0.0,
        validators=[
            Optional(),
            finite,
            NumberRange(min=0, message="Amount cannot be negative"),
        ],
        render_kw={"step": "0.01"},
    )
    delivery_method = SelectField(
        "Delivery Method",
        choices=enum_choices(DeliveryMethod, "Select delivery method"),
        coerce=coerce_enum_value,
        validators=[DataRequired(message="Delivery method is required")],
    )
    comment = SelectField(
        "Quality",
        choices=enum_choices(QualityComment, "Select comment"),
        coerce=coerce_enum_value,
        validators=[DataRequired(message="Comment is required")],
    )
    small_comment = TextAreaField(
        "Additional Comment",
        validators=[Optional(), Length(max=1000)],
        render_kw={"rows": 3, "placeholder": "Enter additional comments (optional)"},
    )
    submit = SubmitField("Save Sale")


class LaborerForm(RecordForm):
    """Laborer payment form. price_per_laborer is derived."""

    date = DateField(
        "Date",
        default=get_local_today,
        validators=[DataRequired(message="Date is required")],
    )
    number_of_laborers = IntegerField(
        "Number of Laborers",
        validators=[
            InputRequired(message="Number of laborers is required"),
            NumberRange(min=1, message="Number of laborers must be positive"),
        ],
    )
    total_labour = FloatField(
        "Total Labour Cost (KES)",
        validators=[InputRequired(message="Total labour is required"), positive],
        render_kw={"step": "0.01"},
    )
    submit = SubmitField("Save Payment")


RECORD_FORMS = {
    "purchases": PurchaseForm,
    "sales": SaleForm,
    "laborers": LaborerForm,
}


# Form for confirming deletion of a record
class DeleteConfirmForm(FlaskForm):
    submit = SubmitField("Yes, Delete", validators=[DataRequired()])
