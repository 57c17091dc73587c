"""Configuration management for the Alert Service."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
else:
    # Fall back to template for defaults
    template_path = Path(__file__).parent.parent / ".env.template"
    if template_path.exists():
        load_dotenv(template_path)


def parse_target_webhooks(raw: str) -> dict[str, str]:
    """Parse "service=url,service2=url2" into a mapping.

    Entries without "=" are skipped.
    """
    webhooks = {}
    for entry in raw.split(","):
        if "=" in entry:
            service, url = entry.strip().split("=", 1)
            if service.strip() and url.strip():
                webhooks[service.strip()] = url.strip()
    return webhooks


def parse_timeout(raw: str | float | None) -> float | None:
    """Parse a timeout in seconds. Empty or "none" means no timeout.

    Raises:
        ValueError: If the value is not a positive number
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        if raw.strip().lower() in ("", "none"):
            return None
        raw = float(raw)
    if raw <= 0:
        raise ValueError(f"Timeout must be positive or \"none\", got {raw}")
    return float(raw)


class Config:
    """Application configuration."""

    # Alert store
    ALERT_DB_PATH: str = os.getenv("ALERT_DB_PATH", "~/.alert-service/alerts.db")
    ALERT_DB_URL: str | None = os.getenv("ALERT_DB_URL")

    # Notifier selection: webhook, teams, or log
    NOTIFIER: str | None = os.getenv("NOTIFIER")

    # Webhook notifier
    # Format: "billing=https://billing.internal/alerts,orders=https://..."
    ALERT_TARGET_WEBHOOKS: dict[str, str] = parse_target_webhooks(
        os.getenv("ALERT_TARGET_WEBHOOKS", "")
    )
    # e.g. "http://{target_service}.svc.cluster.local/alerts"
    ALERT_WEBHOOK_URL_TEMPLATE: str | None = os.getenv("ALERT_WEBHOOK_URL_TEMPLATE")

    # Teams notifier
    TEAMS_WEBHOOK_URL: str | None = os.getenv("TEAMS_WEBHOOK_URL")

    # Seconds to wait on an outbound notification; "none" waits indefinitely
    NOTIFIER_TIMEOUT: float | None = parse_timeout(os.getenv("NOTIFIER_TIMEOUT", "30"))


config = Config()
