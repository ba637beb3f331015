from maizebiz.main.utils import RANGE_OPTIONS
from maizebiz.store import get_store


def test_init_db(app):
    result = app.test_cli_runner().invoke(args=["setup", "init-db"])
    assert "Initialized the database." in result.output


def test_create_user(app):
    runner = app.test_cli_runner()
    args = [
        "setup", "create-user",
        "--email", "Kamau@MaizeBiz.co.ke",
        "--username", "Kamau",
        "--password", "secret12",
    ]

    result = runner.invoke(args=args)
    assert "User kamau@maizebiz.co.ke created." in result.output

    result = runner.invoke(args=args)
    assert "already exists" in result.output


def test_seed_demo_and_summary(app, user_id):
    runner = app.test_cli_runner()

    result = runner.invoke(
        args=["setup", "seed-demo", "--email", "wanjiku@maizebiz.co.ke", "--days", "3"]
    )
    assert "Created 9 demo records" in result.output

    with app.app_context():
        store = get_store()
        sales = store.list("sales", user_id)
        assert len(sales) == 3
        for sale in sales:
            assert sale.number_of_bags == round(sale.quantity_sold / 90, 2)
            assert sale.total_amount_received == sale.cheque_paid - sale.deposited_amount
        assert len(store.list("laborers", user_id)) == 3

    result = runner.invoke(
        args=["setup", "summary", "--email", "wanjiku@maizebiz.co.ke", "--range", "30days"]
    )
    assert result.exit_code == 0
    assert "Total purchases" in result.output
    assert "Daily breakdown (30days)" in result.output
    assert len([line for line in result.output.splitlines() if "profit" in line]) == RANGE_OPTIONS["30days"]


def test_commands_report_unknown_user(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["setup", "summary", "--email", "nobody@maizebiz.co.ke"])
    assert "No user with email" in result.output
