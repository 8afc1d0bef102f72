from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    MODEL_TEMPERATURE: float = 0.4
    MAX_TOOL_ITERATIONS: int = 5
    REQUEST_TIMEOUT_SECONDS: float = 90.0
    LOG_LEVEL: str = "INFO"


settings = Settings()
