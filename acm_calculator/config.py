"""
Configuration settings for the ACM Claim Calculator
"""
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Configuration
    app_name: str = Field(default="ACM Claim Calculator", env="APP_NAME")
    app_version: str = Field(default="1.0.0", env="APP_VERSION")
    debug: bool = Field(default=False, env="DEBUG")
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    # API Configuration
    api_prefix: str = Field(default="", env="API_PREFIX")
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        env="CORS_ORIGINS"
    )

    # ACM snapshot source. File wins over URL; with neither, the built-in
    # baseline edition is used.
    acm_snapshot_path: Optional[str] = Field(default=None, env="ACM_SNAPSHOT_PATH")
    acm_snapshot_url: Optional[str] = Field(default=None, env="ACM_SNAPSHOT_URL")
    acm_fetch_timeout: float = Field(default=30.0, gt=0, env="ACM_FETCH_TIMEOUT")
    acm_user_agent: str = Field(default="ACM-Calculator/1.0", env="ACM_USER_AGENT")

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        if ',' in self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(',')]
        return [self.cors_origins.strip()]

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()
