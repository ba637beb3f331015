import sqlalchemy as sa
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError


def find_user_by_email(email):
    from maizebiz.models import User
    from maizebiz import db

    if not email:
        return None
    return db.session.scalar(
        sa.select(User).where(User.email == email.strip().lower())
    )


def create_user(email, username, password):
    """
    Create and commit a new account.

    Returns the User, or None if the email is already registered.
    """
    from maizebiz.models import User
    from maizebiz import db

    if find_user_by_email(email) is not None:
        current_app.logger.info(f"User '{email}' already exists.")
        return None

    user = User(username=username.strip(), is_active=True)
    user.set_email(email)
    user.set_password(password)

    try:
        db.session.add(user)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating user '{email}': {e}", exc_info=True)
        raise

    current_app.logger.info(f"User '{user.email}' (ID: {user.id}) created.")
    return user
