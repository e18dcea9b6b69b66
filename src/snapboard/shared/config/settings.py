"""
Centralized configuration management for snapboard.

All environment variables and settings are managed here. Credentials are
optional at load time and only demanded when the component that needs them
is actually used, so the service can start (and serve previews with one
backend) while another credential is still missing.
"""

from functools import lru_cache
from typing import Optional, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ..exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Centralized settings for snapboard.
    
    Values come from the environment or a local .env file. Field names double
    as variable names except where an explicit alias such as PORT is given.
    """
    
    # === Application ===
    app_name: str = Field(default="snapboard", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")
    
    # === HTTP Server ===
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3000, description="API port", validation_alias="PORT")
    max_upload_size: int = Field(default=10 * 1024 * 1024, description="Max upload size in bytes (10MB)")
    processing_timeout: float = Field(default=300.0, description="Per-request conversion timeout in seconds")
    
    # === Vision Settings ===
    gemini_api_key: Optional[str] = Field(default=None, description="Google Gemini API key", validation_alias="GEMINI_API_KEY")
    anthropic_api_key: Optional[str] = Field(default=None, description="Anthropic API key", validation_alias="ANTHROPIC_API_KEY")
    default_vision_backend: str = Field(default="gemini", description="Backend used when none or an unknown one is requested")
    gemini_model: str = Field(default="gemini-2.0-flash-exp", description="Gemini vision model")
    claude_model: str = Field(default="claude-sonnet-4-20250514", description="Claude vision model")
    vision_max_tokens: int = Field(default=4096, description="Maximum vision response tokens")
    
    # === Board Service Settings ===
    miro_access_token: Optional[str] = Field(default=None, description="Miro REST API access token", validation_alias="MIRO_ACCESS_TOKEN")
    miro_team_id: Optional[str] = Field(default=None, description="Team that will own created boards", validation_alias="MIRO_TEAM_ID")
    miro_api_base: str = Field(default="https://api.miro.com/v2", description="Miro REST API base URL")
    board_request_timeout: float = Field(default=30.0, description="Timeout for a single board API call")
    board_max_attempts: int = Field(default=3, description="Attempts per board API call when rate limited")
    board_retry_fallback_seconds: float = Field(default=2.0, description="Wait used when Retry-After is absent")
    board_retry_max_seconds: float = Field(default=60.0, gt=0, description="Upper bound on any single rate-limit wait")
    item_concurrency: int = Field(default=4, ge=1, description="Max concurrent item creations per pass")
    
    # === Canvas Settings ===
    canvas_width: int = Field(default=2000, description="Canvas width the 0-100 space maps onto")
    canvas_height: int = Field(default=1500, description="Canvas height the 0-100 space maps onto")
    
    # === Derived Configuration ===
    @property
    def logging_config(self) -> Dict[str, Any]:
        """Logging level and optional file."""
        return {
            'level': self.log_level,
            'file': self.log_file,
        }
    
    # === Board Configuration ===
    @property
    def board_config(self) -> Dict[str, Any]:
        """Get board client configuration."""
        return {
            'api_base': self.miro_api_base,
            'team_id': self.miro_team_id,
            'timeout': self.board_request_timeout,
            'max_attempts': self.board_max_attempts,
            'retry_fallback_seconds': self.board_retry_fallback_seconds,
            'retry_max_seconds': self.board_retry_max_seconds,
        }
    
    def require_gemini_api_key(self) -> str:
        if not self.gemini_api_key:
            raise ConfigurationError(
                "Gemini API key not configured. Please set GEMINI_API_KEY in your environment."
            )
        return self.gemini_api_key
    
    def require_anthropic_api_key(self) -> str:
        if not self.anthropic_api_key:
            raise ConfigurationError(
                "Anthropic API key not configured. Please set ANTHROPIC_API_KEY in your environment."
            )
        return self.anthropic_api_key
    
    def require_miro_access_token(self) -> str:
        if not self.miro_access_token:
            raise ConfigurationError("MIRO_ACCESS_TOKEN is not set in environment variables")
        return self.miro_access_token
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in levels:
            raise ValueError(f"Log level must be one of {sorted(levels)}")
        return v.upper()
    
    @field_validator('default_vision_backend')
    @classmethod
    def validate_default_backend(cls, v):
        return v.strip().lower()
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Load settings once and reuse them.
    
    Tests build their own ``Settings`` instead of going through this cache.
    """
    return Settings()
