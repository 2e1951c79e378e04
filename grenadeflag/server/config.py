# grenadeflag/server/config.py
"""Harness configuration with sensible defaults for local play-testing."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Harness settings, overridable via environment variables."""

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8091

    # Ambient ballistics seeded into the arena's variable store
    SHOT_SPEED: float = 100.0
    SHOT_RANGE: float = 350.0
    MUZZLE_FRONT: float = 4.42
    MUZZLE_HEIGHT: float = 1.57

    # Accuracy perturbation RNG (None = nondeterministic)
    SEED: int | None = None

    model_config = SettingsConfigDict(env_prefix="GRENADEFLAG_", env_file=".env", extra="ignore")


settings = Settings()
