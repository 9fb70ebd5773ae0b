from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    SERVICE_CATALOG_DIR: str = "data/services"

    DEFAULT_CURRENCY: str = "INR"
    DEFAULT_LOCALE: str = "en"
    DURATION_UNITS: list[str] = ["weeks", "months"]

    # Append [QUESTION_KEY]/[SUGGESTIONS] tags to reply text for clients that only read text
    EMBED_PROTOCOL_TAGS: bool = True


settings = Settings()
