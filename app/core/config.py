from typing import Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "CADUAE Mail Relay"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # --- Environment & Debug ---
    # NODE_ENV is accepted so the same .env works for the frontend deploy.
    ENVIRONMENT: str = Field(
        default="local",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # --- SMTP relay ---
    SMTP_HOST: str = "mail.caduae.com"
    SMTP_PORT: int = 465
    SMTP_USE_SSL: bool = True  # implicit TLS on 465, STARTTLS otherwise
    SMTP_USER: str = "noreply@caduae.com"
    SMTP_PASSWORD: SecretStr = Field(
        default=SecretStr(""),
        description="Relay password. Missing means auth fails at send time.",
    )
    SMTP_TIMEOUT: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @field_validator("ENVIRONMENT", mode="after")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower() or "local"

    @field_validator("SMTP_PASSWORD", mode="before")
    @classmethod
    def default_smtp_password(cls, v):
        if v is None:
            return ""
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
