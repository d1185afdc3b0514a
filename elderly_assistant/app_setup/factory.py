"""
Factory d'application pour les entrypoints (ex: elderly_assistant.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares
from .exception_handlers import register_exception_handlers
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de base (CORS)
      - gestionnaires d'exceptions (enveloppe uniforme)
      - tous les routers (payment, voice, health)
    """
    app = FastAPI(title="Elderly Assistant API", version="1.0.0", lifespan=lifespan)
    register_basic_middlewares(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
