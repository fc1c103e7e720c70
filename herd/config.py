# herd/config.py

from pydantic_settings import BaseSettings


class HerdConfig(BaseSettings):
    """Configuration for relationship evaluation."""

    # Logging
    log_level: str = "INFO"

    # Bounds
    default_minimum: float = 0.0
    default_maximum: float = 1.0
    bounds_epsilon: float = 0.01  # Gap kept between min and max when one overtakes the other

    # Curves
    default_curve: str = "linear"

    # Patches
    strict_patches: bool = False  # Raise instead of skipping a foreign metric in apply()

    class Config:
        env_file = ".env"
        env_prefix = "HERD_"


# Global config instance
config = HerdConfig()
