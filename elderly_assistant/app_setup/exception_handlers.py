"""
Gestionnaires d'exceptions globaux.
- Paramètre obligatoire manquant / corps invalide: enveloppe {code: 400, message, data: null} (HTTP 200),
  à la place du corps 422 standard de FastAPI, pour que l'app mobile ne lise qu'un seul format.
- AppError échappée d'une route: même enveloppe avec le code porté par l'erreur.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from elderly_assistant.common.errors import AppError
from elderly_assistant.common.result import error, from_exception, to_envelope

logger = logging.getLogger(__name__)

def _describe(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("query", "body"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "请求参数错误"

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def envelope_on_validation_error(request: Request, exc: RequestValidationError):
        logger.info("validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=200, content=error(_describe(exc), code=400))

    @app.exception_handler(AppError)
    async def envelope_on_app_error(request: Request, exc: AppError):
        logger.warning("unhandled %s on %s: %s", exc.__class__.__name__, request.url.path, exc.message)
        return JSONResponse(status_code=200, content=to_envelope(from_exception(exc)))
