from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from paygate.integrations.payment_gateways.options import MessagesOptions, VirtualGatewayOptions


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = Field(default="Paygate")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Virtual gateway
    virtual_gateway_path: str = Field(default="/virtual/gw", description="Path of the virtual provider page")
    virtual_gateway_accounts: List[str] = Field(default_factory=lambda: ["default"])

    messages: MessagesOptions = Field(default_factory=MessagesOptions)

    @field_validator("virtual_gateway_path")
    @classmethod
    def validate_gateway_path(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("/"):
            raise ValueError(f"virtual_gateway_path must start with '/', got '{value}'")
        if len(value) > 1:
            value = value.rstrip("/")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        value = value.upper()
        if value not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}, got '{value}'")
        return value

    def virtual_gateway_options(self) -> VirtualGatewayOptions:
        return VirtualGatewayOptions(gateway_path=self.virtual_gateway_path)


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    The same instance is returned for the lifetime of the process so every
    gateway sees one consistent configuration.

    Returns:
        Settings: The cached settings instance
    """
    return Settings()


def clear_settings_cache() -> None:
    """
    Clear the cached settings instance.

    Useful for testing or when configuration needs to be reloaded.
    """
    get_settings.cache_clear()
