"""
Registre central des routers.
- API: payment (缴费), voice (语音识别)
- Health: health_router
"""
from fastapi import FastAPI
from elderly_assistant.payments import views as payments_views
from elderly_assistant.voice import views as voice_views
from elderly_assistant.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(voice_views.router)
    app.include_router(health_router)
