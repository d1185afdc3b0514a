"""
ASGI entrypoint: `elderly_assistant.asgi:app` pour uvicorn/gunicorn.
run() démarre uvicorn avec HOST/PORT/UVICORN_RELOAD lus dans l'environnement.
"""
import os

import uvicorn

from elderly_assistant.app import app
from elderly_assistant.config import LOG_LEVEL


def run() -> None:
    uvicorn.run(
        "elderly_assistant.asgi:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("UVICORN_RELOAD", "").lower() in ("1", "true", "yes"),
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
