"""
Configuration settings for the Employment Subsidy Eligibility Engine
"""
import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (SUBSIDY_ prefix)"""

    # Application Configuration
    app_name: str = Field(default="Employment Subsidy Eligibility Engine")
    app_version: str = Field(default="1.0.0")
    log_level: str = Field(default="INFO")

    # Program Catalog
    catalog_path: Optional[str] = Field(
        default=None,
        description="Replacement catalog JSON, e.g. next fiscal year's parameters"
    )

    model_config = SettingsConfigDict(
        env_prefix="SUBSIDY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the configured log level for host applications"""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
