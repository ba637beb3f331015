"""
MaizeBiz Database Models

Every record (purchase, sale, laborer payment) belongs to exactly one user.
Derived columns are filled by maizebiz.core.calculator on create and edit;
they are never taken from user input.
"""

from datetime import datetime, date, timezone
from typing import Optional, List
from enum import Enum as PyEnum
from flask_login import UserMixin
from maizebiz import db
from hashlib import md5
from werkzeug.security import generate_password_hash, check_password_hash
import sqlalchemy as sa
import sqlalchemy.orm as so

# LaborerPayment has a column called "date"
CalendarDate = date


# ===========================================
# Enums
# ===========================================

class PaymentMethod(PyEnum):
    """How a supplier was paid."""
    CASH = "Cash"
    MPESA = "M-Pesa"
    BANK_TRANSFER = "Bank Transfer"


class SalePaymentMethod(PyEnum):
    """How a customer paid. Cheque is only accepted on sales."""
    CASH = "Cash"
    MPESA = "M-Pesa"
    BANK_TRANSFER = "Bank Transfer"
    CHEQUE = "Cheque"


class DeliveryMethod(PyEnum):
    DELIVERY = "Delivery"
    PICK_UP = "Pick-up"


class QualityComment(PyEnum):
    """Quality of the maize as reported on the sale."""
    GOOD = "Good"
    POOR = "Poor"
    BAD = "Bad"


def _utcnow():
    return datetime.now(timezone.utc)


def _enum_value(value):
    return value.value if isinstance(value, PyEnum) else value


# ===========================================
# User Model
# ===========================================

class User(db.Model, UserMixin):
    """
    Account owning a set of records.

    Email is the login identifier. Records are never shared between users.
    """
    __tablename__ = "users"

    id: so.Mapped[int] = so.mapped_column(primary_key=True, autoincrement=True)

    created_at: so.Mapped[datetime] = so.mapped_column(
        sa.DateTime(timezone=True), default=_utcnow
    )
    updated_at: so.Mapped[datetime] = so.mapped_column(
        sa.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    email: so.Mapped[str] = so.mapped_column(
        sa.String(120), unique=True, nullable=False, index=True
    )
    username: so.Mapped[str] = so.mapped_column(
        sa.String(64), nullable=False
    )
    password_hash: so.Mapped[str] = so.mapped_column(
        sa.String(256), nullable=False
    )

    last_login: so.Mapped[Optional[datetime]] = so.mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )
    is_active: so.Mapped[bool] = so.mapped_column(default=True)

    # Relationships
    purchases: so.Mapped[List["Purchase"]] = so.relationship(
        back_populates="owner", cascade="all, delete-orphan"
    )
    sales: so.Mapped[List["Sale"]] = so.relationship(
        back_populates="owner", cascade="all, delete-orphan"
    )
    laborer_payments: so.Mapped[List["LaborerPayment"]] = so.relationship(
        back_populates="owner", cascade="all, delete-orphan"
    )

    def set_password(self, password: str) -> None:
        """Hash and set the user's password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return check_password_hash(self.password_hash, password)

    def set_email(self, email: str) -> None:
        self.email = email.strip().lower()

    def avatar(self, size: int = 80) -> str:
        """Get Gravatar URL for user."""
        digest = md5(self.email.lower().encode("utf-8")).hexdigest()
        return f"https://www.gravatar.com/avatar/{digest}?d=identicon&s={size}"

    def __repr__(self) -> str:
        return f"<User {self.email}>"


# ===========================================
# Record Models
# ===========================================

class RecordMixin:
    """Columns shared by every user-owned record."""

    id: so.Mapped[int] = so.mapped_column(primary_key=True, autoincrement=True)

    created_at: so.Mapped[datetime] = so.mapped_column(
        sa.DateTime(timezone=True), default=_utcnow
    )
    updated_at: so.Mapped[datetime] = so.mapped_column(
        sa.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    @so.declared_attr
    def user_id(cls) -> so.Mapped[int]:
        return so.mapped_column(
            sa.ForeignKey("users.id"), nullable=False, index=True
        )

    # Column names copied by to_dict(), set per model
    serialized_fields = ()

    def to_dict(self) -> dict:
        data = {"id": self.id, "user_id": self.user_id}
        for name in self.serialized_fields:
            value = _enum_value(getattr(self, name))
            if isinstance(value, date):
                value = value.isoformat()
            data[name] = value
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data


class Purchase(RecordMixin, db.Model):
    """Maize bought from a supplier."""
    __tablename__ = "purchases"

    supplier_name: so.Mapped[str] = so.mapped_column(sa.String(128), nullable=False)
    location_of_origin: so.Mapped[Optional[str]] = so.mapped_column(sa.String(128))
    date_of_purchase: so.Mapped[date] = so.mapped_column(
        sa.Date, nullable=False, index=True
    )

    # Kilograms
    quantity_bought: so.Mapped[float] = so.mapped_column(sa.Float, nullable=False)
    price_per_unit: so.Mapped[float] = so.mapped_column(sa.Float, nullable=False)
    total_amount_paid: so.Mapped[float] = so.mapped_column(
        sa.Float, nullable=False, default=0.0
    )

    payment_method: so.Mapped[PaymentMethod] = so.mapped_column(
        sa.Enum(PaymentMethod), nullable=False
    )

    truck_number_plate: so.Mapped[Optional[str]] = so.mapped_column(sa.String(32))
    origin_weight: so.Mapped[Optional[float]] = so.mapped_column(sa.Float)
    destination_weight: so.Mapped[Optional[float]] = so.mapped_column(sa.Float)

    owner: so.Mapped[User] = so.relationship(back_populates="purchases")

    serialized_fields = (
        "supplier_name",
        "location_of_origin",
        "date_of_purchase",
        "quantity_bought",
        "price_per_unit",
        "total_amount_paid",
        "payment_method",
        "truck_number_plate",
        "origin_weight",
        "destination_weight",
    )

    @property
    def record_date(self) -> date:
        return self.date_of_purchase

    @property
    def weight_loss(self) -> Optional[float]:
        """Kilograms lost between origin and destination weighbridges."""
        if self.origin_weight is None or self.destination_weight is None:
            return None
        return self.origin_weight - self.destination_weight

    def __repr__(self) -> str:
        return f"<Purchase #{self.id} from {self.supplier_name}: {self.quantity_bought} kg>"


class Sale(RecordMixin, db.Model):
    """Maize sold to a customer."""
    __tablename__ = "sales"

    customer_name: so.Mapped[str] = so.mapped_column(sa.String(128), nullable=False)
    driver_phone: so.Mapped[str] = so.mapped_column(sa.String(32), nullable=False)
    date_of_sale: so.Mapped[date] = so.mapped_column(
        sa.Date, nullable=False, index=True
    )

    quantity_sold: so.Mapped[float] = so.mapped_column(sa.Float, nullable=False)
    number_of_bags: so.Mapped[float] = so.mapped_column(
        sa.Float, nullable=False, default=0.0
    )
    selling_price_per_unit: so.Mapped[float] = so.mapped_column(
        sa.Float, nullable=False
    )
    expected_amount: so.Mapped[float] = so.mapped_column(
        sa.Float, nullable=False, default=0.0
    )

    payment_method_sale: so.Mapped[Optional[SalePaymentMethod]] = so.mapped_column(
        sa.Enum(SalePaymentMethod), nullable=True
    )

    # Labor paid out of the proceeds
    deposited_amount: so.Mapped[float] = so.mapped_column(
        sa.Float, nullable=False, default=0.0
    )
    # Gross proceeds collected
    cheque_paid: so.Mapped[float] = so.mapped_column(
        sa.Float, nullable=False, default=0.0
    )
    total_amount_received: so.Mapped[float] = so.mapped_column(
        sa.Float, nullable=False, default=0.0
    )

    delivery_method: so.Mapped[DeliveryMethod] = so.mapped_column(
        sa.Enum(DeliveryMethod), nullable=False
    )
    comment: so.Mapped[QualityComment] = so.mapped_column(
        sa.Enum(QualityComment), nullable=False
    )
    small_comment: so.Mapped[Optional[str]] = so.mapped_column(sa.Text)

    owner: so.Mapped[User] = so.relationship(back_populates="sales")

    serialized_fields = (
        "customer_name",
        "driver_phone",
        "date_of_sale",
        "quantity_sold",
        "number_of_bags",
        "selling_price_per_unit",
        "expected_amount",
        "payment_method_sale",
        "deposited_amount",
        "cheque_paid",
        "total_amount_received",
        "delivery_method",
        "comment",
        "small_comment",
    )

    @property
    def record_date(self) -> date:
        return self.date_of_sale

    def __repr__(self) -> str:
        return f"<Sale #{self.id} to {self.customer_name}: {self.quantity_sold} kg>"


class LaborerPayment(RecordMixin, db.Model):
    """A day's payment to a crew of laborers."""
    __tablename__ = "laborers"

    date: so.Mapped[CalendarDate] = so.mapped_column(
        sa.Date, nullable=False, index=True
    )
    number_of_laborers: so.Mapped[int] = so.mapped_column(sa.Integer, nullable=False)
    price_per_laborer: so.Mapped[float] = so.mapped_column(
        sa.Float, nullable=False, default=0.0
    )
    total_labour: so.Mapped[float] = so.mapped_column(sa.Float, nullable=False)

    owner: so.Mapped[User] = so.relationship(back_populates="laborer_payments")

    serialized_fields = (
        "date",
        "number_of_laborers",
        "price_per_laborer",
        "total_labour",
    )

    @property
    def record_date(self):
        return self.date

    def __repr__(self) -> str:
        return f"<LaborerPayment #{self.id} on {self.date}: {self.number_of_laborers} laborers>"


# Collection name -> model, as used by the store, the API and the views
RECORD_MODELS = {
    "purchases": Purchase,
    "sales": Sale,
    "laborers": LaborerPayment,
}
