"""
Usage:
    python -m elderly_assistant

Variables: HOST (0.0.0.0), PORT (8000), UVICORN_RELOAD ("1"/"true"/"yes" en dev), LOG_LEVEL.
"""
from elderly_assistant.asgi import run

if __name__ == "__main__":
    run()
