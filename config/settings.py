"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass, field


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database (SQLite path)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "maintenance.db")
    SEED_DEMO_DATA: bool = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"

    # Demo history
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))
    HISTORY_DAYS: int = int(os.getenv("HISTORY_DAYS", "365"))

    # Public URL embedded in QR codes
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8050").rstrip("/")

    # Dashboard refresh interval in milliseconds
    REFRESH_INTERVAL_MS: int = int(os.getenv("REFRESH_INTERVAL_MS", "60000"))

    # Mail
    SMTP_HOST: str = os.getenv("SMTP_HOST", "")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USER: str = os.getenv("SMTP_USER", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    SMTP_USE_TLS: bool = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "maintenance-tracker@localhost")
    EMAIL_RECIPIENTS: list[str] = field(
        default_factory=lambda: _csv(os.getenv("EMAIL_RECIPIENTS", ""))
    )
    # Per record type overrides, keyed by record kind
    EMAIL_RECIPIENTS_BY_KIND: dict[str, list[str]] = field(
        default_factory=lambda: {
            "carbon-brush": _csv(os.getenv("EMAIL_RECIPIENTS_CARBON_BRUSH", "")),
            "winding-resistance": _csv(os.getenv("EMAIL_RECIPIENTS_WINDING_RESISTANCE", "")),
            "thermography": _csv(os.getenv("EMAIL_RECIPIENTS_THERMOGRAPHY", "")),
        }
    )

    def recipients_for(self, kind: str) -> list[str]:
        """Recipients for a record kind, falling back to the default list."""
        return self.EMAIL_RECIPIENTS_BY_KIND.get(kind) or self.EMAIL_RECIPIENTS

    @property
    def smtp_configured(self) -> bool:
        return bool(self.SMTP_HOST)


settings = Settings()
