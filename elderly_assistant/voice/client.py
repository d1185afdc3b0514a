"""
Adaptateur Baidu ASR: centralise les appels HTTP (httpx) vers le fournisseur.
- fetch_token: échange client_credentials (API key/secret) -> access_token.
- get_token: fetch_token à chaque appel, ou réutilisation jusqu'à expiration si config.cache_token.
- transcribe: POST JSON (audio base64) sur server_api, timeout 30 s; retourne le JSON brut du fournisseur.
Les erreurs de transport/parsing remontent telles quelles (httpx.HTTPError, ValueError);
un token absent lève ExternalServiceError.
"""
import asyncio
import base64
import logging
import time
from typing import Any, Dict, Optional, Tuple

import httpx

from elderly_assistant.common.errors import ExternalServiceError
from .config import VoiceConfig

logger = logging.getLogger(__name__)


class BaiduSpeechClient:
    def __init__(self, config: VoiceConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport
        self._token: Optional[str] = None
        self._token_expires_at = 0.0
        self._token_lock = asyncio.Lock()

    def _http(self, timeout: Any = httpx.USE_CLIENT_DEFAULT) -> httpx.AsyncClient:
        if timeout is httpx.USE_CLIENT_DEFAULT:
            return httpx.AsyncClient(transport=self._transport)
        return httpx.AsyncClient(transport=self._transport, timeout=timeout)

    async def fetch_token(self) -> Tuple[str, int]:
        """Retourne (access_token, expires_in secondes). Pas de timeout explicite (défaut httpx)."""
        params = {
            "grant_type": "client_credentials",
            "client_id": self.config.api_key,
            "client_secret": self.config.secret_key,
        }
        async with self._http() as client:
            resp = await client.post(self.config.token_url, params=params)
        data = resp.json()
        token = (data or {}).get("access_token")
        if not token:
            reason = (data or {}).get("error_description") or (data or {}).get("error") or "access_token 缺失"
            raise ExternalServiceError(f"获取访问令牌失败: {reason}")
        return token, int(data.get("expires_in") or 0)

    async def get_token(self) -> str:
        if not self.config.cache_token:
            token, _ = await self.fetch_token()
            return token

        async with self._token_lock:
            now = time.monotonic()
            if self._token and now < self._token_expires_at:
                return self._token
            token, expires_in = await self.fetch_token()
            self._token = token
            self._token_expires_at = now + max(0.0, expires_in - self.config.token_refresh_margin)
            logger.info("voice.client token refreshed expires_in=%s", expires_in)
            return token

    def invalidate_token(self) -> None:
        self._token = None
        self._token_expires_at = 0.0

    def build_payload(self, audio: bytes, token: str, audio_format: str) -> Dict[str, Any]:
        return {
            "format": audio_format,
            "rate": self.config.rate,
            "channel": self.config.channel,
            "cuid": self.config.cuid,
            "token": token,
            "speech": base64.b64encode(audio).decode("ascii"),
            "len": len(audio),
            "dev_pid": self.config.dev_pid,
        }

    async def transcribe(self, audio: bytes, audio_format: str) -> Dict[str, Any]:
        token = await self.get_token()
        payload = self.build_payload(audio, token, audio_format)
        logger.info("voice.client calling ASR size=%s bytes format=%s", len(audio), audio_format)
        async with self._http(timeout=self.config.timeout) as client:
            resp = await client.post(
                self.config.asr_url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        logger.info("voice.client ASR response: %s", resp.text)
        return resp.json()
