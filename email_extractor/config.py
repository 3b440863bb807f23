"""
email_extractor/config.py
Centralized configuration management with validation
"""
import os
from typing import Optional
from pydantic import BaseModel, Field, ValidationError, field_validator
from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class GeminiConfig(BaseModel):
    """Google Gemini configuration"""
    api_key: str = Field(default="", description="Gemini API key")
    model_name: str = Field(default="gemini-2.5-flash")
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    base_url: str = Field(default=GEMINI_OPENAI_BASE_URL)

    @field_validator('api_key')
    @classmethod
    def strip_api_key(cls, v):
        return v.strip()

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v):
        if not v or not v.startswith(('http://', 'https://')):
            raise ValueError("Invalid Gemini base URL")
        return v


class PathConfig(BaseModel):
    """File paths configuration"""
    log_file: Optional[str] = Field(default=None)


class Config(BaseModel):
    """Main configuration class combining all sub-configs"""
    gemini: GeminiConfig
    paths: PathConfig

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables"""
        return cls(
            gemini=GeminiConfig(
                api_key=os.getenv("GEMINI_API_KEY", ""),
                model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
                temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.1")),
                base_url=os.getenv("GEMINI_BASE_URL", GEMINI_OPENAI_BASE_URL)
            ),
            paths=PathConfig(
                log_file=os.getenv("LOG_FILE")
            )
        )

    def validate_all(self) -> list[str]:
        """Validate all configurations and return list of errors"""
        errors = []

        if not self.gemini.api_key:
            errors.append("GEMINI_API_KEY is not set")

        return errors

    def print_summary(self):
        """Print configuration summary"""
        print("\n" + "="*70)
        print("CONFIGURATION SUMMARY")
        print("="*70)
        print(f"\n Gemini:")
        print(f"  - Model: {self.gemini.model_name}")
        print(f"  - Temperature: {self.gemini.temperature}")
        print(f"  - Endpoint: {self.gemini.base_url}")

        print(f"\n Paths:")
        print(f"  - Log file: {self.paths.log_file or 'stderr'}")
        print("="*70 + "\n")


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create configuration singleton"""
    global _config
    if _config is None:
        try:
            config = Config.from_env()
        except (ValidationError, ValueError) as e:
            raise ConfigurationError(f"Configuration could not be loaded: {e}") from e

        errors = config.validate_all()
        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )
        _config = config

    return _config


def reload_config():
    """Reload configuration from environment"""
    global _config
    _config = None
    return get_config()
