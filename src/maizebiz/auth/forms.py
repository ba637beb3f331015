"""
Authentication Forms - email and password
"""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField, SubmitField
from wtforms.validators import (
    DataRequired,
    Length,
    Email,
    EqualTo,
    ValidationError,
)
from maizebiz import db
from maizebiz.models import User
import sqlalchemy as sa


class LoginForm(FlaskForm):
    email = StringField(
        "Email",
        id="email_login",
        validators=[
            DataRequired(message="Email is required"),
            Email(message="Invalid email address"),
        ],
        render_kw={
            "placeholder": "you@example.com",
            "class": "form-control",
            "autofocus": True
        }
    )

    password = PasswordField(
        "Password",
        id="pwd_login",
        validators=[DataRequired(message="Password is required")],
        render_kw={
            "placeholder": "Your password",
            "class": "form-control"
        }
    )

    remember_me = BooleanField("Remember me")

    submit = SubmitField("Sign in")


class RegistrationForm(FlaskForm):
    """
    Self-service account creation. Each account only ever sees its own
    purchases, sales and laborer payments.
    """

    username = StringField(
        "Name",
        validators=[
            DataRequired(message="Name is required"),
            Length(min=2, max=64, message="Name must be between 2 and 64 characters")
        ],
        render_kw={"placeholder": "e.g. Jane Wanjiku", "class": "form-control"}
    )

    email = StringField(
        "Email",
        validators=[
            DataRequired(message="Email is required"),
            Email(message="Invalid email address"),
            Length(max=120)
        ],
        render_kw={"placeholder": "you@example.com", "class": "form-control"}
    )

    password = PasswordField(
        "Password",
        validators=[
            DataRequired(message="Password is required"),
            Length(min=6, message="Password must be at least 6 characters")
        ],
        render_kw={"placeholder": "At least 6 characters", "class": "form-control"}
    )

    confirm_password = PasswordField(
        "Confirm Password",
        validators=[
            DataRequired(message="Please confirm your password"),
            EqualTo("password", message="Passwords must match")
        ],
        render_kw={"class": "form-control"}
    )

    submit = SubmitField("Create account")

    def validate_email(self, field):
        """Email must not already be registered."""
        existing = db.session.scalar(
            sa.select(User).where(User.email == field.data.strip().lower())
        )
        if existing:
            raise ValidationError("An account with this email already exists.")
