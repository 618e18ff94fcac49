"""Configuration management."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GRIDGEN_",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    # Grid Generation Configuration
    default_dimension: int = Field(default=33, description="Grid size, must be 2^n+1")
    default_steps: int = Field(default=25, ge=0, description="Walk steps per generation")
    default_step_range: int = Field(
        default=5, ge=2, description="Exclusive upper bound of a step distance"
    )
    default_scale: float = Field(default=1.0, description="Render scale for cell positions")
    default_roughness: float = Field(
        default=5.0, ge=0, description="Corner amplitude of the height synthesis"
    )
    default_seed: Optional[str] = Field(default=None, description="Fixed generation seed")
    use_random_seed: bool = Field(default=True, description="Derive the seed from the clock")
    generate_elevation: bool = Field(default=True, description="Run the height synthesis")
    mark_endpoints: bool = Field(default=False, description="Tag random start and end cells")
