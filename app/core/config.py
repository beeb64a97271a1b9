import os
from dotenv import load_dotenv

# Carrega o .env da raiz do projeto
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./festalog.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}
IS_PROD = ENV_NORMALIZED in {"prod", "production"}

# Timeout único para chamadas HTTP externas (IA, geocoding, rotas, WhatsApp)
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

# WhatsApp (Evolution API)
WHATSAPP_PROVIDER = os.getenv("WHATSAPP_PROVIDER", "evolution").strip().lower()
EVOLUTION_API_URL = os.getenv("EVOLUTION_API_URL", "http://localhost:8080").rstrip("/")
EVOLUTION_API_KEY = os.getenv("EVOLUTION_API_KEY", "")
EVOLUTION_INSTANCE_NAME = os.getenv("EVOLUTION_INSTANCE_NAME", "lufestas")
DEFAULT_COUNTRY_CODE = os.getenv("DEFAULT_COUNTRY_CODE", "55")

# IA (Gemini)
AI_PROVIDER = os.getenv("AI_PROVIDER", "gemini").strip().lower()
GOOGLE_GEMINI_API_KEY = os.getenv("GOOGLE_GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")

# Frete
STORE_ADDRESS = os.getenv("STORE_ADDRESS", "Rua Ariramba 121, Belo Horizonte, MG, Brasil")
FREIGHT_PRICE_PER_KM = float(os.getenv("FREIGHT_PRICE_PER_KM", "2.00"))
FREIGHT_MINIMUM = float(os.getenv("FREIGHT_MINIMUM", "15.00"))
HOME_CITY = os.getenv("HOME_CITY", "Belo Horizonte")
HOME_STATE = os.getenv("HOME_STATE", "MG")
HOME_COUNTRY = os.getenv("HOME_COUNTRY", "Brasil")

NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org").rstrip("/")
OSRM_URL = os.getenv("OSRM_URL", "https://router.project-osrm.org").rstrip("/")
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "FestaLog/1.0")
GEOCODER_COUNTRY_CODES = os.getenv("GEOCODER_COUNTRY_CODES", "br")

# Notificações automáticas (0 desliga o loop de geração)
NOTIFICATIONS_POLL_SECONDS = int(os.getenv("NOTIFICATIONS_POLL_SECONDS", "0"))

# CORS
_cors_env = os.getenv("ORIGENS_CORS", os.getenv("CORS_ORIGINS", ""))
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

# Rotas administrativas do WhatsApp / notificações (header X-Admin-Token)
ADMIN_API_TOKEN = os.getenv("ADMIN_API_TOKEN", "").strip()

APP_TIMEZONE = os.getenv("APP_TIMEZONE", "America/Sao_Paulo")
