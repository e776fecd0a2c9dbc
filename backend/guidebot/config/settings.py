# /guidebot/config/settings.py

import sys
from typing import Annotated, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017/guidebot"
    max_pool_size: int = 10
    min_pool_size: int = 1
    mongo_ssl: bool = False

    # Redis (flow document cache)
    redis_url: str = "redis://localhost:6379"
    flow_cache_ttl: int = 60

    # Chatbot Behavior
    flow_category: str = "AI 지니 채팅봇(구매)"
    tracking_param: str = "partner"
    terminal_placeholder_origin: str = "http://localhost"
    default_media_tag: str = "크루즈"
    testimonial_fetch_factor: int = 3

    # Security
    api_key: str | None = None

    # Deployment
    workers: int = 4
    environment: str = Field(default="production")
    log_level: str | None = None

    cors_allowed_origins: Annotated[List[str], NoDecode] = Field(
        default=[
            "https://cruisedot.co.kr",
            "https://www.cruisedot.co.kr",
        ]
    )

    allowed_hosts: str = Field(default="cruisedot.co.kr,*.cruisedot.co.kr")

    # App Metadata & Limits
    api_version: str = "v1"
    rate_limit_per_minute: int = 120

    # ---------------- Validators ---------------- #

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def parse_cors_allowed_origins(cls, v):
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("terminal_placeholder_origin")
    @classmethod
    def origin_must_be_absolute(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError("TERMINAL_PLACEHOLDER_ORIGIN must be an absolute http(s) origin")
        return v.rstrip("/")

    @field_validator("testimonial_fetch_factor", "flow_cache_ttl")
    @classmethod
    def must_be_positive(cls, v):
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


def validate_environment(settings_obj: Settings):
    try:
        if settings_obj.environment == "production":
            if not settings_obj.mongo_uri:
                raise ValueError("MONGO_URI is required in production")
            if not settings_obj.tracking_param:
                raise ValueError("TRACKING_PARAM cannot be empty")

        return settings_obj

    except Exception as e:
        print(f"--- [ERROR] Environment validation failed: {e}")
        sys.exit(1)


settings = Settings()
validate_environment(settings)
