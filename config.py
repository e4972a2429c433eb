"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field

from core.strategy.rules import RuleSet


def _env_flag(name: str, default: str) -> bool:
    """Read a true/false environment variable."""
    return os.getenv(name, default).lower() == "true"


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED", "true"))
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class GameConfig:
    """Default table rules for new training sessions."""

    num_decks: int = field(default_factory=lambda: int(os.getenv("NUM_DECKS", "1")))
    dealer_hits_soft_17: bool = field(
        default_factory=lambda: _env_flag("DEALER_HITS_SOFT_17", "true")
    )
    surrender_allowed: bool = field(
        default_factory=lambda: _env_flag("SURRENDER_ALLOWED", "true")
    )
    double_after_split: bool = field(
        default_factory=lambda: _env_flag("DOUBLE_AFTER_SPLIT", "true")
    )
    max_split_hands: int = field(
        default_factory=lambda: int(os.getenv("MAX_SPLIT_HANDS", "4"))
    )

    def to_rules(self) -> RuleSet:
        """Build the rule set these settings describe."""
        return RuleSet(
            num_decks=self.num_decks,
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            surrender_allowed=self.surrender_allowed,
            double_after_split=self.double_after_split,
            max_split_hands=self.max_split_hands,
        )


@dataclass(frozen=True)
class SessionConfig:
    """Session analytics configuration."""

    skill_min_decisions: int = field(
        default_factory=lambda: int(os.getenv("SKILL_MIN_DECISIONS", "20"))
    )
    max_history_entries: int = field(
        default_factory=lambda: int(os.getenv("MAX_HISTORY_ENTRIES", "100"))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    session_ttl: int = field(
        default_factory=lambda: int(os.getenv("SESSION_TTL", "3600"))
    )  # Session timeout in seconds

    game: GameConfig = field(default_factory=GameConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
