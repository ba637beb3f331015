from sys import exit
from decouple import config
from maizebiz import create_app
from maizebiz.config import config_dict
import os

# --- ENVIRONMENT DETECTION LOGIC ---

# 1. Hosted deployment
IS_PRODUCTION = "RUNNING_IN_PRODUCTION" in os.environ

if IS_PRODUCTION:
    get_config_mode = "Production"
    DEBUG = False

# 2. Local Docker Compose (Postgres container)
elif os.environ.get("FLASK_ENV") == "development" and "DBHOST" in os.environ:
    get_config_mode = "Development"
    DEBUG = True

# 3. Default local debug (SQLite file)
else:
    get_config_mode = "Debug"
    DEBUG = True

ENVIRONMENT = get_config_mode.lower()


# --- APP INITIALIZATION ---

try:
    app_config = config_dict[get_config_mode]
except KeyError:
    exit(f"Error: Invalid config mode '{get_config_mode}'. Expected one of {list(config_dict)}.")

app = create_app(app_config)
app.app_context().push()

app.logger.info(f"Environment: {ENVIRONMENT}")
app.logger.info(f"DEBUG: {DEBUG}")
app.logger.info(f"Timezone: {app.config['APP_TIMEZONE']}")

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config("PORT", default=5000, cast=int), debug=DEBUG)
