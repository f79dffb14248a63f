"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import Dict, List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

# Project root: silo-results/
PROJECT_ROOT = Path(__file__).parent.parent.parent
# Content directory: silo-results/content/
CONTENT_DIR = PROJECT_ROOT / "content"


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./silo.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Import ===
    results_sheet_name: str = Field(
        default="results",
        description="Preferred worksheet name when decoding uploaded workbooks"
    )
    max_upload_mb: int = Field(default=20, ge=1)

    # === Column mapping ===
    synonyms_file: Optional[Path] = Field(
        default=CONTENT_DIR / "mapping" / "synonyms.yaml",
        description="YAML file with historically-seen header variants per role"
    )

    # === Analytics ===
    max_competitors: int = Field(
        default=4, ge=2,
        description="Maximum number of competitors in one head-to-head"
    )
    preview_limit: int = Field(
        default=250, ge=1,
        description="Default number of rows returned by query previews"
    )
    title_keywords: Dict[str, str] = Field(
        default_factory=lambda: {"WK": "wk", "OS": "os"},
        description="Championship title label -> competition text keyword"
    )

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
