"""
Service de reconnaissance vocale: jeton OAuth puis transcription, et mise en forme du résultat.
- err_no == 0: renvoie le premier élément de "result".
- Sinon (ou toute exception: transport, parsing, URL invalide...):
  - mode legacy (défaut): renvoie une chaîne "识别失败：<err_msg>" / "识别异常：<message>" comme texte;
  - mode strict: lève ExternalServiceError.
"""
import logging
from typing import Optional

from elderly_assistant.common.errors import ExternalServiceError
from .client import BaiduSpeechClient
from .config import DEFAULT_FORMAT, VoiceConfig

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "识别失败："
EXCEPTION_PREFIX = "识别异常："


def audio_format_for(filename: Optional[str]) -> str:
    """Format Baidu déduit de l'extension (défaut enregistreur mini-programme WeChat: mp3)."""
    if not filename:
        return "wav"
    name = filename.lower()
    for ext in ("mp3", "wav", "pcm", "amr"):
        if name.endswith("." + ext):
            return ext
    return "mp3"


class VoiceService:
    def __init__(self, config: VoiceConfig, client: Optional[BaiduSpeechClient] = None):
        self.config = config
        self.client = client or BaiduSpeechClient(config)

    def resolve_format(self, filename: Optional[str]) -> str:
        return audio_format_for(filename) if self.config.detect_format else DEFAULT_FORMAT

    async def recognize_strict(self, audio: bytes, filename: Optional[str] = None) -> str:
        audio_format = self.resolve_format(filename)
        try:
            result = await self.client.transcribe(audio, audio_format)
            err_no = int(result.get("err_no", -1))
            if err_no == 0:
                return result["result"][0]
        except ExternalServiceError:
            raise
        except Exception as e:
            logger.exception("voice.service recognition exception")
            raise ExternalServiceError(str(e) or e.__class__.__name__) from e

        err_msg = result.get("err_msg") or ""
        logger.error("voice.service recognition failed err_no=%s err_msg=%s", err_no, err_msg)
        if self.config.cache_token:
            # Jeton possiblement expiré/révoqué: le prochain appel en redemandera un
            self.client.invalidate_token()
        raise ExternalServiceError(err_msg, provider_code=err_no)

    async def recognize(self, audio: bytes, filename: Optional[str] = None) -> str:
        try:
            return await self.recognize_strict(audio, filename)
        except ExternalServiceError as e:
            if not self.config.legacy_errors:
                raise
            prefix = FAILURE_PREFIX if e.provider_code is not None else EXCEPTION_PREFIX
            return prefix + e.message
