"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment variables and .env file.

    Every field can be overridden with a ``PAPEREDGE_``-prefixed variable,
    e.g. ``PAPEREDGE_UNIT_SIZE=50``.
    """

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "PAPEREDGE_",
        "extra": "ignore",
    }

    # Notebook defaults
    unit_size: float = 100.0
    starting_bankroll: float = 1000.0

    # Kelly sizing (percent of bankroll, multiplier of full Kelly)
    max_bet_pct: float = 5.0
    kelly_fraction: float = 1.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
