"""
Authentication Routes - email login and self-service registration

Flows:
1. Login: Email + Password
2. Registration: Name + Email + Password
3. Logout: Standard Flask-Login
"""

from flask import render_template, redirect, request, url_for, flash, current_app
from flask_login import current_user, login_user, logout_user, login_required
from datetime import datetime, timezone
from urllib.parse import urlparse
from sqlalchemy.exc import SQLAlchemyError


from maizebiz.auth import bp
from maizebiz.auth.forms import LoginForm, RegistrationForm
from maizebiz.auth.utils import create_user, find_user_by_email
from maizebiz import db


def is_safe_next_url(target):
    """
    Only same-site paths. "//host" and "/\\host" are both treated as another
    host by browsers.
    """
    if not target or not target.startswith("/"):
        return False
    if target[1:2] in ("/", "\\"):
        return False
    return urlparse(target).netloc == ""


@bp.route("/")
def route_default():
    """Redirect root to login."""
    return redirect(url_for("auth_bp.login"))


@bp.route("/login", methods=["GET", "POST"])
def login():
    # Already logged in? Go to dashboard
    if current_user.is_authenticated:
        return redirect(url_for("main_bp.index"))

    form = LoginForm()

    if form.validate_on_submit():
        user = find_user_by_email(form.email.data)

        if user is None or not user.check_password(form.password.data):
            current_app.logger.warning(f"Failed login for '{form.email.data}'")
            flash("Invalid email or password", "danger")
            return render_template("auth/login.html", form=form)

        if not user.is_active:
            flash("This account has been deactivated.", "warning")
            return render_template("auth/login.html", form=form)

        login_user(user, remember=form.remember_me.data)

        user.last_login = datetime.now(timezone.utc)
        db.session.commit()

        flash(f"Welcome, {user.username}!", "success")

        next_page = request.args.get("next")
        if is_safe_next_url(next_page):
            return redirect(next_page)

        return redirect(url_for("main_bp.index"))

    return render_template("auth/login.html", form=form)


@bp.route("/register", methods=["GET", "POST"])
def register():
    if current_user.is_authenticated:
        return redirect(url_for("main_bp.index"))

    form = RegistrationForm()

    if form.validate_on_submit():
        try:
            user = create_user(
                form.email.data, form.username.data, form.password.data
            )
        except SQLAlchemyError:
            flash("An error occurred while creating the account", "danger")
            return render_template("auth/register.html", form=form)

        if user is None:
            flash("An account with this email already exists.", "danger")
            return render_template("auth/register.html", form=form)

        flash("Account created! Please sign in.", "success")
        return redirect(url_for("auth_bp.login"))

    return render_template("auth/register.html", form=form)


@bp.route("/logout")
@login_required
def logout():
    """Log out the current user."""
    username = current_user.username
    logout_user()
    flash(f"Goodbye, {username}!", "info")
    return redirect(url_for("auth_bp.login"))
