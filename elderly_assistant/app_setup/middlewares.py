"""
Middlewares transverses de l'application.
- register_basic_middlewares: CORS (l'app mobile et les mini-programmes appellent depuis d'autres origines).
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from elderly_assistant.config import CORS_ORIGINS

def register_basic_middlewares(app: FastAPI) -> None:
    # allow_credentials est incompatible avec l'origine "*" côté navigateur
    wildcard = "*" in CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=not wildcard,
        allow_methods=["*"],
        allow_headers=["*"],
    )
