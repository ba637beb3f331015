import logging
from logging.config import fileConfig
import os

from alembic import context

from maizebiz import create_app, db
from maizebiz.config import config_dict

# Alembic Config object
config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

# Which config class to migrate against: Debug (SQLite file) unless overridden,
# e.g. MIGRATION_CONFIG=Production
config_mode = os.environ.get("MIGRATION_CONFIG", "Debug")
logger.info(f"Running migrations with the {config_mode} configuration.")

app = create_app(config_dict[config_mode])
app.app_context().push()

target_metadata = db.metadata

config.set_main_option("sqlalchemy.url", app.config["SQLALCHEMY_DATABASE_URI"])


def run_migrations_offline():
    """
    Emit SQL to stdout instead of applying it; no database connection needed.
    """
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Apply migrations over a live connection from the app's engine."""
    connectable = db.engine

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite cannot ALTER columns in place
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
