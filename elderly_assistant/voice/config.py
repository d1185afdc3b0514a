"""
Configuration explicite du proxy de reconnaissance vocale.
Passée au constructeur du client/service (pas d'état global); from_settings() lit elderly_assistant.config.
"""
from dataclasses import dataclass

DEFAULT_CUID = "elderly_assistant"
MANDARIN_DEV_PID = 1537  # 普通话 (anglais simple toléré)
SAMPLE_RATE = 16000
CHANNELS = 1
DEFAULT_FORMAT = "pcm"
ASR_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class VoiceConfig:
    api_key: str
    secret_key: str
    app_id: str = ""
    token_url: str = "https://aip.baidubce.com/oauth/2.0/token"
    asr_url: str = "https://vop.baidu.com/server_api"
    cuid: str = DEFAULT_CUID
    dev_pid: int = MANDARIN_DEV_PID
    rate: int = SAMPLE_RATE
    channel: int = CHANNELS
    timeout: float = ASR_TIMEOUT_SECONDS
    legacy_errors: bool = True
    cache_token: bool = False
    detect_format: bool = False
    # Marge avant expiration au-delà de laquelle un token en cache est renouvelé
    token_refresh_margin: float = 60.0

    @classmethod
    def from_settings(cls) -> "VoiceConfig":
        from elderly_assistant import config
        return cls(
            api_key=config.BAIDU_API_KEY,
            secret_key=config.BAIDU_SECRET_KEY,
            app_id=config.BAIDU_APP_ID,
            token_url=config.BAIDU_TOKEN_URL,
            asr_url=config.BAIDU_ASR_URL,
            legacy_errors=config.VOICE_LEGACY_ERRORS,
            cache_token=config.VOICE_TOKEN_CACHE,
            detect_format=config.VOICE_DETECT_FORMAT,
        )
