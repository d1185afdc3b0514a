# elderly_assistant.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale du backend.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Supabase, API vocale Baidu), CORS
- Expose les options du proxy de reconnaissance vocale (mode legacy, cache du token, format)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _flag(name: str, default: str = "false") -> bool:
    return _clean_env(os.getenv(name, default)).lower() in ("1", "true", "yes")

# Supabase: URL et clés (anon/service)
# - SUPABASE_URL peut parfois être sans schéma: on préfixe en https:// si nécessaire
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or "")
SUPABASE_KEY = _clean_env(os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_ANON_KEY") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# CORS: l'application mobile appelle l'API depuis n'importe quelle origine par défaut
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Baidu: reconnaissance vocale (OAuth client_credentials puis server_api)
BAIDU_APP_ID = _clean_env(os.getenv("BAIDU_APP_ID") or "")
BAIDU_API_KEY = _clean_env(os.getenv("BAIDU_API_KEY") or "")
BAIDU_SECRET_KEY = _clean_env(os.getenv("BAIDU_SECRET_KEY") or "")
BAIDU_TOKEN_URL = _clean_env(os.getenv("BAIDU_TOKEN_URL") or "https://aip.baidubce.com/oauth/2.0/token")
BAIDU_ASR_URL = _clean_env(os.getenv("BAIDU_ASR_URL") or "https://vop.baidu.com/server_api")

# Options du proxy vocal
# - VOICE_LEGACY_ERRORS: les échecs sont renvoyés comme texte ("识别失败：...") et non comme erreur
# - VOICE_TOKEN_CACHE: réutilise le token OAuth jusqu'à son expiration
# - VOICE_DETECT_FORMAT: déduit le format audio de l'extension du fichier (sinon "pcm")
VOICE_LEGACY_ERRORS = _flag("VOICE_LEGACY_ERRORS", "true")
VOICE_TOKEN_CACHE = _flag("VOICE_TOKEN_CACHE")
VOICE_DETECT_FORMAT = _flag("VOICE_DETECT_FORMAT")

# Rate limiting (fastapi-limiter)
RATE_LIMIT_REDIS_URL = _clean_env(os.getenv("RATE_LIMIT_REDIS_URL") or "redis://127.0.0.1:6379/0")

LOG_LEVEL = _clean_env(os.getenv("LOG_LEVEL") or "info")

# Derrière un reverse proxy de confiance uniquement: clé de rate limit = premier hop X-Forwarded-For
TRUST_FORWARDED_FOR = _flag("TRUST_FORWARDED_FOR")
