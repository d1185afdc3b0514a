"""
Endpoint de reconnaissance vocale (préfixe /voice).
- POST /recognize: upload multipart "file", renvoie {"text": "..."} dans l'enveloppe.
- Rate limité (10 req / 60 s): chaque appel consomme le quota du fournisseur.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from elderly_assistant.common.result import error, success
from elderly_assistant.utils.rate_limit import optional_rate_limit
from .config import VoiceConfig
from .service import VoiceService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/voice", tags=["Voice API"])

_voice_service: Optional[VoiceService] = None


def get_voice_service() -> VoiceService:
    global _voice_service
    if _voice_service is None:
        _voice_service = VoiceService(VoiceConfig.from_settings())
    return _voice_service


@router.post("/recognize", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def recognize_voice(file: UploadFile = File(...), voice_service: VoiceService = Depends(get_voice_service)):
    audio = await file.read()
    logger.info("voice.recognize filename=%s size=%s bytes", file.filename, len(audio))
    try:
        text = await voice_service.recognize(audio, file.filename)
        logger.info("voice.recognize text=%s", text)
        return success({"text": text})
    except Exception as e:
        logger.exception("Erreur recognize_voice")
        return error(f"语音识别失败：{getattr(e, 'message', None) or e}")
