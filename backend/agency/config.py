from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    APP_ENV: str = "dev"
    APP_ID: str = "booking-agency"
    LOG_LEVEL: str = "INFO"

    # Sessione (token firmato nel cookie)
    SECRET_KEY: str
    SESSION_EXPIRES_DAYS: int = 365

    # DB: se manca, le letture tornano vuote e le scritture falliscono (503)
    DB_URL: str | None = None

    # Admin: passcode condiviso + open-id del proprietario (promosso ad admin)
    ADMIN_PASSCODE: str | None = None
    OWNER_OPEN_ID: str = "owner"

    # OAuth esterno: accettato ma non usato dal flusso a passcode
    OAUTH_SERVER_URL: str | None = None

    # Origini ammesse con credenziali (CSV). Vuoto -> nessun middleware CORS
    CORS_ORIGINS: str = ""

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
