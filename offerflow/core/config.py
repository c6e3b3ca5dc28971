from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "offerflow"
    app_env: str = "development"
    app_debug: bool = False
    app_log_level: str = "INFO"

    # HubSpot CRM
    hubspot_api_token: str = ""
    hubspot_api_url: str = "https://api.hubapi.com"
    hubspot_timeout: float = 30.0

    # Offer workflow
    offer_decision_stage: str = "34528397"
    # Deployed deal schema spells this property with a transposition.
    requested_periods_property: str = "plazos_solcitados"
    default_weekly_rate: float = 0.0288
    default_contact_name: str = "Cliente"

    # CORS
    cors_allowed_origins: str = "*"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Allowed origins parsed from the comma-separated setting."""
        if self.cors_allowed_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    @model_validator(mode="after")
    def validate_production_secrets(self) -> Settings:
        if self.is_production and not self.hubspot_api_token:
            raise ValueError("hubspot_api_token must be set in production")
        return self


settings = Settings()
