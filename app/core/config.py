from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Off by default: only choices the user actually made are sent
    AUTO_SELECT_DEFAULTS: bool = False
    PREFERRED_OPTION_TOKENS: list[str] = ["split"]
    AUTO_SELECT_FIRST_SEGMENT: bool = True

    SESSION_LIMIT: int = 500


settings = Settings()
