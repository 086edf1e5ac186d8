from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from the process + optionally from .env
    model_config = SettingsConfigDict(
        env_file=(".env",),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="gst_engine", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))

    # Portal export
    PORTAL_MAX_FILE_SIZE_BYTES: int = Field(
        default=5 * 1024 * 1024,
        validation_alias=AliasChoices("PORTAL_MAX_FILE_SIZE_BYTES", "portal_max_file_size_bytes"),
    )

    # HSN provider cache: "memory" (per-process) or "redis"
    HSN_CACHE_BACKEND: str = Field(default="memory", validation_alias=AliasChoices("HSN_CACHE_BACKEND", "hsn_cache_backend"))
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("REDIS_URL", "redis_url"),
    )

    # Sandbox.co.in HSN API
    SANDBOX_ENABLED: bool = Field(default=False, validation_alias=AliasChoices("SANDBOX_ENABLED", "sandbox_enabled"))
    SANDBOX_PRIORITY: int = Field(default=2, validation_alias=AliasChoices("SANDBOX_PRIORITY", "sandbox_priority"))
    SANDBOX_BASE_URL: str = Field(default="https://api.sandbox.co.in/v2", validation_alias=AliasChoices("SANDBOX_BASE_URL", "sandbox_base_url"))
    SANDBOX_API_KEY: str = Field(default="", validation_alias=AliasChoices("SANDBOX_API_KEY", "sandbox_api_key"))
    SANDBOX_API_SECRET: str = Field(default="", validation_alias=AliasChoices("SANDBOX_API_SECRET", "sandbox_api_secret"))
    SANDBOX_TIMEOUT: float = Field(default=5.0, validation_alias=AliasChoices("SANDBOX_TIMEOUT", "sandbox_timeout"))
    SANDBOX_CACHE_ENABLED: bool = Field(default=True, validation_alias=AliasChoices("SANDBOX_CACHE_ENABLED", "sandbox_cache_enabled"))
    SANDBOX_CACHE_TTL: int = Field(default=86_400, validation_alias=AliasChoices("SANDBOX_CACHE_TTL", "sandbox_cache_ttl"))

    # MasterGST / WhiteBooks e-WayBill HSN master
    EWAYBILL_ENABLED: bool = Field(default=False, validation_alias=AliasChoices("EWAYBILL_ENABLED", "ewaybill_enabled"))
    EWAYBILL_PRIORITY: int = Field(default=1, validation_alias=AliasChoices("EWAYBILL_PRIORITY", "ewaybill_priority"))
    EWAYBILL_BASE_URL: str = Field(default="https://api.mastergst.com", validation_alias=AliasChoices("EWAYBILL_BASE_URL", "ewaybill_base_url"))
    EWAYBILL_USERNAME: str = Field(default="", validation_alias=AliasChoices("EWAYBILL_USERNAME", "ewaybill_username"))
    EWAYBILL_PASSWORD: str = Field(default="", validation_alias=AliasChoices("EWAYBILL_PASSWORD", "ewaybill_password"))
    EWAYBILL_GSTIN: str = Field(default="", validation_alias=AliasChoices("EWAYBILL_GSTIN", "ewaybill_gstin"))
    EWAYBILL_EMAIL: str = Field(default="", validation_alias=AliasChoices("EWAYBILL_EMAIL", "ewaybill_email"))
    EWAYBILL_CLIENT_ID: str = Field(default="", validation_alias=AliasChoices("EWAYBILL_CLIENT_ID", "ewaybill_client_id"))
    EWAYBILL_CLIENT_SECRET: str = Field(default="", validation_alias=AliasChoices("EWAYBILL_CLIENT_SECRET", "ewaybill_client_secret"))
    EWAYBILL_IP_ADDRESS: str = Field(default="127.0.0.1", validation_alias=AliasChoices("EWAYBILL_IP_ADDRESS", "ewaybill_ip_address"))
    EWAYBILL_TIMEOUT: float = Field(default=5.0, validation_alias=AliasChoices("EWAYBILL_TIMEOUT", "ewaybill_timeout"))
    EWAYBILL_CACHE_ENABLED: bool = Field(default=True, validation_alias=AliasChoices("EWAYBILL_CACHE_ENABLED", "ewaybill_cache_enabled"))
    EWAYBILL_CACHE_TTL: int = Field(default=86_400, validation_alias=AliasChoices("EWAYBILL_CACHE_TTL", "ewaybill_cache_ttl"))


settings = Settings()
