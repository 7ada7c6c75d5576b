from pydantic import Field
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file="./.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # WhatsApp Cloud API
    WHATSAPP_ACCESS_TOKEN: Optional[str] = None
    WHATSAPP_PHONE_NUMBER_ID: Optional[str] = None
    WHATSAPP_VERIFY_TOKEN: Optional[str] = None
    WHATSAPP_APP_SECRET: Optional[str] = None
    WHATSAPP_API_BASE_URL: str = "https://graph.facebook.com"
    WHATSAPP_API_VERSION: str = "v18.0"
    MOCK_WHATSAPP: bool = Field(False, description="Record outbound messages instead of calling the Graph API")

    # Gemini
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_MAX_RETRIES: int = 3
    GEMINI_RETRY_DELAY_SECONDS: float = 3.0

    # Database
    STORAGE_BACKEND: str = Field("mongo", description="Options: 'mongo', 'memory'")
    MONGODB_URI: str = Field("mongodb://localhost:27017", description="MongoDB URI")
    DB_NAME: str = "healthbot"
    USER_TABLE: str = "users"
    SESSION_TABLE: str = "user_sessions"
    ALERT_PREFERENCES_TABLE: str = "user_alert_preferences"
    OUTBREAK_CACHE_TABLE: str = "disease_outbreak_cache"
    STATES_TABLE: str = "indian_states"
    ACTIVE_DISEASES_TABLE: str = "active_diseases"
    ALERT_HISTORY_TABLE: str = "disease_alert_history"
    FEEDBACK_TABLE: str = "feedback"

    # Outbreak cache and alerts
    TIMEZONE: str = "Asia/Kolkata"
    CACHE_RETENTION_DAYS: int = 7
    DISEASE_INACTIVE_DAYS: int = 30
    ALERT_HISTORY_RETENTION_DAYS: int = 60
    ALERT_SEND_DELAY_SECONDS: float = 0.5

    # Scheduler (cron expressions, evaluated in TIMEZONE)
    SCHEDULER_ENABLED: bool = True
    ALERT_PROCESSING_CRON: str = "0 * * * *"
    AI_SCAN_CRON: str = "0 */6 * * *"
    MORNING_SUMMARY_CRON: str = "0 8 * * *"
    CLEANUP_CRON: str = "0 2 * * *"

    # Bot
    BOT_NAME: str = "Health Assistant"
    DEFAULT_LANGUAGE: str = "en"
    EMERGENCY_NUMBER: str = "108"
    CHAT_HISTORY_MESSAGES: int = Field(6, description="Recent chat messages sent to the model as context")
    FEEDBACK_STATS_DAYS: int = 30

    # Admin endpoints
    ADMIN_API_KEY: Optional[str] = None

    # CORS/Frontend/Backend
    CLIENT_ORIGIN: Optional[str] = None
    CLIENT_ORIGIN_ONLINE: Optional[str] = None

    # Environment & Mode
    ENVIRONMENT: str = Field("development", description="Options: 'development', 'production'")
    HOST: str = "127.0.0.1"
    PORT: int = 8000

settings = Settings()
