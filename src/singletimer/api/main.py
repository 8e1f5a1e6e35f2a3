# ruff: noqa: E402
from singletimer.config import Settings, configure_logging

settings = Settings.from_env()

# Log configuration (before the app is built)
configure_logging(settings.log_level)

from singletimer.api.app import create_app

app = create_app(settings)
