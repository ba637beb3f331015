import os
from decouple import config

class Config(object):
    # Base directory for relative paths (e.g., SQLite DB)
    basedir = os.path.abspath(os.path.dirname(__file__))

    # SECRET_KEY is accessed via os.environ, falling back to a default via decouple
    SECRET_KEY = os.environ.get("SECRET_KEY", config("SECRET_KEY", default="S#perS3crEt_007"))

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    PURCHASES_PER_PAGE = 10
    SALES_PER_PAGE = 10
    LABORERS_PER_PAGE = 10

    # Calendar day boundaries for "today" / "this week" on the dashboard
    APP_TIMEZONE = config("APP_TIMEZONE", default="Africa/Nairobi")
    CURRENCY = config("CURRENCY", default="KES")
    LOG_LEVEL = config("LOG_LEVEL", default="INFO")

    # Base configuration for database connection parameters, retrieved from OS environment
    DBUSER = os.environ.get("DBUSER")
    DBPASS = os.environ.get("DBPASS")
    DBHOST = os.environ.get("DBHOST")
    DBNAME = os.environ.get("DBNAME")


class ProductionConfig(Config):
    """Hosted deployment (Postgres with SSL)"""
    DEBUG = False

    SQLALCHEMY_DATABASE_URI = (
        f"postgresql+psycopg2://{Config.DBUSER}:{Config.DBPASS}"
        f"@{Config.DBHOST}/{Config.DBNAME}?sslmode=require"
    )
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}


class DevelopmentConfig(Config):
    """Docker Compose development (Postgres without SSL)"""
    DEBUG = True

    SQLALCHEMY_DATABASE_URI = (
        f"postgresql+psycopg2://{Config.DBUSER}:{Config.DBPASS}"
        f"@{Config.DBHOST}/{Config.DBNAME}"
    )


class DebugConfig(Config):
    """Simple local debugging (SQLite file)"""
    DEBUG = True

    SQLALCHEMY_DATABASE_URI = (
        "sqlite:///" + os.path.join(Config.basedir, "db.sqlite3")
    )


class TestConfig(Config):
    """In-memory SQLite for the test suite"""
    TESTING = True
    DEBUG = False
    WTF_CSRF_ENABLED = False
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"


config_dict = {
    "Production": ProductionConfig,
    "Development": DevelopmentConfig,
    "Debug": DebugConfig,
    "Test": TestConfig,
}
