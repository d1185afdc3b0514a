# module elderly_assistant.app
import logging

from elderly_assistant.config import LOG_LEVEL
from elderly_assistant.app_setup.factory import create_app

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# App globale
app = create_app()
