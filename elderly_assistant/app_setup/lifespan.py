"""
Lifespan FastAPI: connexion Redis du rate limiting (fastapi-limiter) au démarrage, fermeture à l'arrêt.
Variables d'environnement:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: aucune initialisation (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: fakeredis à la place de RATE_LIMIT_REDIS_URL
  - LOCAL_RATE_LIMIT_FALLBACK=1: compteur en mémoire (voir utils.rate_limit), Redis ignoré
Redis injoignable au démarrage: l'API sert quand même, sans limitation (rate_limit_enabled=False).
"""
import os
import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

from elderly_assistant.config import RATE_LIMIT_REDIS_URL

logger = logging.getLogger(__name__)


def _redis_connection():
    if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
        from fakeredis.aioredis import FakeRedis
        return FakeRedis(decode_responses=True)
    return redis.from_url(RATE_LIMIT_REDIS_URL, encoding="utf-8", decode_responses=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.rate_limit_enabled = False
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        logger.info("rate limiting: init disabled for tests")
        yield
        return

    connection = None
    try:
        connection = _redis_connection()
        await FastAPILimiter.init(connection)
        app.state.rate_limit_enabled = True
        logger.info("rate limiting: enabled (redis)")
    except Exception as e:
        mode = "local in-memory fallback" if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1" else "disabled"
        logger.warning("rate limiting: %s, redis init failed: %s", mode, e)
        if connection is not None:
            await connection.aclose()

    try:
        yield
    finally:
        if app.state.rate_limit_enabled:
            await FastAPILimiter.close()
