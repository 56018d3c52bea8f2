from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


CAT_API_URL = "https://cat-fact.herokuapp.com/facts/random?animal_type=cat"
DOG_API_URL = "http://dog-api.kinduff.com/api/facts"


class Settings(BaseSettings):
    app_name: str = "Animal Fact Service"
    app_env: str = "development"
    app_version: str = "0.1.0"

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=0, le=65535)
    log_level: str = "INFO"

    # Animal used when the request doesn't name one ("any" picks at random)
    default_animal: str = "any"
    # When set, every request gets this animal regardless of the query param
    forced_animal: str | None = None

    # Upstream fact providers
    cat_api_url: str = CAT_API_URL
    dog_api_url: str = DOG_API_URL
    http_timeout_seconds: float = Field(default=5.0, gt=0)
    user_agent: str = Field(default="animal-facts/0.1", min_length=1)

    cors_origins: list[str] = ["http://localhost:8080"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ANIMAL_FACTS_",
        extra="ignore",
    )


settings = Settings()
