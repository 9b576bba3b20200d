from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = Field("Ticket Triage API", alias="APP_NAME")
    app_version: str = Field("1.0.0", alias="APP_VERSION")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, alias="PORT")
    cors_origins: str = Field("*", alias="CORS_ORIGINS")  # comma-separated

    # LLM provider (default: OpenAI). You can extend later.
    llm_provider: str = Field("openai", alias="LLM_PROVIDER")
    llm_model: str = Field("gpt-4o-mini", alias="LLM_MODEL")
    llm_timeout_seconds: float = Field(10.0, alias="LLM_TIMEOUT_SECONDS", gt=0)

    # OpenAI
    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")

    # Runtime
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("%(asctime)s %(levelname)s %(name)s %(message)s", alias="LOG_FORMAT")

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
