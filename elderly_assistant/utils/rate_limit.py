import logging
import os
import time
from typing import Any, Dict

from fastapi import HTTPException, Request, Response

from elderly_assistant import config

logger = logging.getLogger(__name__)


def _client_key(req: Request) -> str:
    # Clé: IP du client + chemin (l'API mobile n'a pas de session cookie).
    # X-Forwarded-For est falsifiable: lu seulement si TRUST_FORWARDED_FOR (proxy de confiance devant l'API)
    ip = req.client.host if req.client else "local"
    if config.TRUST_FORWARDED_FOR:
        ip = (req.headers.get("x-forwarded-for") or "").split(",")[0].strip() or ip
    return f"ip:{ip}:{req.url.path}"


def optional_rate_limit(times: int, seconds: int):
    async def _dep(request: Request, response: Response):
        # Forcer le fallback mémoire en DEV si demandé
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            now = time.time()
            key = _client_key(request)
            store = getattr(request.app.state, "_rl_store", {})
            hits = [t for t in store.get(key, []) if now - t < seconds]
            if len(hits) >= times:
                raise HTTPException(status_code=429, detail="Too Many Requests")
            hits.append(now)
            store[key] = hits
            request.app.state._rl_store = store
            return

        # Respecter le flag global
        if getattr(request.app.state, "rate_limit_enabled", None) is not True:
            return

        from fastapi_limiter.depends import RateLimiter

        async def _identifier(req: Request) -> str:
            return _client_key(req)
        try:
            return await RateLimiter(times=times, seconds=seconds, identifier=_identifier)(request, response)
        except HTTPException:
            raise
        except Exception:
            # Redis indisponible en cours de route: pas de 429 en prod
            logger.warning("rate limiter unavailable on %s", request.url.path, exc_info=True)
            return
    return _dep


def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)
    return {
        "enabled": (bool(enabled) if enabled is not None else None),
        "local_fallback": os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1",
    }
