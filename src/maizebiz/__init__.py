import logging
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager


from .config import DebugConfig

# --- Extension Instantiation ---
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
login_manager.login_view = "auth_bp.login"
login_manager.login_message_category = "warning"

app_logger = logging.getLogger(__name__)


def configure_logging(app):
    """Single stream handler on the package logger, level from LOG_LEVEL."""
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    package_logger = logging.getLogger("maizebiz")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        package_logger.addHandler(handler)
    app.logger.setLevel(level)


# --- Application Factory Function ---
def create_app(config_object=DebugConfig):
    app = Flask(__name__)
    app.config.from_object(config_object)

    configure_logging(app)

    # --- Initialize Extensions ---
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # --- Record store: the one persistence handle views and commands use ---
    from .store import RecordStore

    app.extensions["record_store"] = RecordStore(db.session)

    # --- User Loader ---
    from .models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # --- Register Blueprints ---
    with app.app_context():
        from .main import bp as main_bp

        app.register_blueprint(main_bp)

        from .auth import bp as auth_bp

        app.register_blueprint(auth_bp, url_prefix="/auth")

        from .api import api_bp

        app.register_blueprint(api_bp)

        from .errors import bp as errors_bp

        app.register_blueprint(errors_bp)

        from .health import health_bp

        app.register_blueprint(health_bp)

        from .main.pdf_routes import pdf_bp

        app.register_blueprint(pdf_bp)

        app_logger.info("Blueprints registered.")

    # --- Register CLI Commands (AFTER everything else is initialized) ---
    from .cli import register_cli_commands

    register_cli_commands(app)

    return app
