from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAIConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GENSAFE_OPENAI__",
        env_file=".env",
        extra="ignore",
    )

    api_key: str = ""
    model: str = "gpt-4"
    base_url: str | None = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GENSAFE_",
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "INFO"
    version: str = "1.0.0"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GENSAFE__", env_file=".env", extra="ignore")

    openai: OpenAIConfig = OpenAIConfig()
    app: AppConfig = AppConfig()


settings = Settings()
