import click
from flask.cli import with_appcontext
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from maizebiz.auth.utils import create_user, find_user_by_email
from maizebiz.main.utils import RANGE_OPTIONS, DEFAULT_RANGE


def register_cli_commands(app):
    """
    Registers custom commands with the Flask CLI under the 'setup' group.
    Called from create_app().
    """

    @app.cli.group()
    def setup():
        """Database setup, accounts, demo data and summaries."""
        pass

    # --- Database & Setup Commands ---

    @setup.command("init-db")
    @with_appcontext
    def init_db_command():
        """Creates database tables from models."""
        from maizebiz import db

        db.create_all()
        click.echo("Initialized the database.")

    @setup.command("create-user")
    @with_appcontext
    @click.option("--email", required=True, help="Login email.")
    @click.option("--username", required=True, help="Display name.")
    @click.option(
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password (prompted if omitted).",
    )
    def create_user_command(email, username, password):
        """Creates an account if the email is not registered yet."""
        try:
            user = create_user(email, username, password)
        except SQLAlchemyError as e:
            click.echo(f"Failed to create user: {e}")
            return

        if user:
            click.echo(f"User {user.email} created.")
        else:
            click.echo(f"User {email} already exists.")

    # --- Data & Reporting Commands ---

    @setup.command("seed-demo")
    @with_appcontext
    @click.option("--email", required=True, help="Owner of the demo records.")
    @click.option("--days", default=7, type=int, help="Number of days to fill.")
    def seed_demo_command(email, days):
        """Inserts sample purchases, sales and laborer payments for a user."""
        from maizebiz.main.seed_data import seed_demo_records
        from maizebiz.main.utils import get_local_today

        user = find_user_by_email(email)
        if user is None:
            click.echo(f"No user with email {email}.")
            return

        try:
            created = seed_demo_records(user.id, get_local_today(), days=days)
        except SQLAlchemyError as e:
            click.echo(f"Failed to seed demo data: {e}")
            current_app.logger.error(f"Seed demo failed: {e}", exc_info=True)
            return

        click.echo(f"Created {created} demo records for {user.email}.")

    @setup.command("summary")
    @with_appcontext
    @click.option("--email", required=True, help="Whose records to summarize.")
    @click.option(
        "--range",
        "range_key",
        type=click.Choice(list(RANGE_OPTIONS)),
        default=DEFAULT_RANGE,
        show_default=True,
        help="Chart window for the daily breakdown.",
    )
    def summary_command(email, range_key):
        """Prints the dashboard figures for a user."""
        from maizebiz.main.utils import get_dashboard_data

        user = find_user_by_email(email)
        if user is None:
            click.echo(f"No user with email {email}.")
            return

        data = get_dashboard_data(user.id, RANGE_OPTIONS[range_key])
        stats = data["stats"]
        currency = current_app.config.get("CURRENCY", "KES")

        click.echo(f"Summary for {user.email} as of {data['reference_date']}")
        click.echo(f"  Total purchases:  {currency} {stats.total_purchases:,.2f}")
        click.echo(f"  Total sales:      {currency} {stats.total_sales:,.2f}")
        click.echo(f"  Profit:           {currency} {stats.profit:,.2f}")
        click.echo(f"  Stock remaining:  {stats.stock_remaining:,.2f} kg")
        click.echo(f"  Today:            {stats.today_purchases:,.2f} bought / {stats.today_sales:,.2f} sold")
        click.echo(f"  Last 7 days:      {stats.weekly_purchases:,.2f} bought / {stats.weekly_sales:,.2f} sold")
        click.echo(f"  Last 30 days:     {stats.monthly_purchases:,.2f} bought / {stats.monthly_sales:,.2f} sold")
        click.echo("")
        click.echo(f"Daily breakdown ({range_key}):")
        for point in data["series"]:
            click.echo(
                f"  {point.label}  purchases {point.purchases:,.2f}"
                f"  sales {point.sales:,.2f}  profit {point.profit:,.2f}"
            )
