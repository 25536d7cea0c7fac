"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _parse_seed() -> int | None:
    """Parse TWENTY_ONE_SEED environment variable."""
    seed = os.getenv("TWENTY_ONE_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class GameConfig:
    """Default game configuration."""

    player_name: str = field(
        default_factory=lambda: os.getenv("TWENTY_ONE_PLAYER_NAME", "Player 1")
    )
    seed: int | None = field(default_factory=_parse_seed)
    dealer_threshold: int = 17


@dataclass(frozen=True)
class UIConfig:
    """Console configuration."""

    clear_screen: bool = field(
        default_factory=lambda: os.getenv("TWENTY_ONE_CLEAR_SCREEN", "true").lower() == "true"
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    game: GameConfig = field(default_factory=GameConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = AppConfig()
