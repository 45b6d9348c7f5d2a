"""Configuration management for segabank."""

import os
from dataclasses import dataclass, field

from segabank.exceptions import ConfigurationError


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "segabank"
    user: str = "postgres"
    password: str = "postgres"
    url: str | None = None

    @property
    def connection_string(self) -> str:
        """Get connection string (an explicit ``url`` wins)."""
        if self.url:
            return self.url
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class DemoConfig:
    """Sizes used when seeding an empty database with demo data."""

    agencies: int = 3
    accounts_per_agency: int = 4
    operations_per_account: int = 5
    seed: int | None = None


@dataclass
class SegaBankConfig:
    """Main configuration for segabank."""

    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "SegaBankConfig":
        """Create config from environment variables."""
        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_int_env("POSTGRES_PORT", 5432),
            database=os.getenv("POSTGRES_DB", "segabank"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            url=os.getenv("DATABASE_URL") or None,
        )

        demo = DemoConfig(
            agencies=_int_env("DEMO_AGENCIES", 3),
            accounts_per_agency=_int_env("DEMO_ACCOUNTS_PER_AGENCY", 4),
            operations_per_account=_int_env("DEMO_OPERATIONS_PER_ACCOUNT", 5),
            seed=_int_env("SEED", None),
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            postgres=postgres,
            demo=demo,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )


def _int_env(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e
