"""pagelift configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class PageliftSettings(BaseSettings):
    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///pagelift.db"
    echo_sql: bool = False
    app_title: str = "pagelift"
    service_name: str = "pagelift"

    # Owner API access (comma-separated subdomain:token pairs)
    site_access_tokens: str = ""
    site_token_header: str = "X-Site-Token"
    site_auth_required: bool = False

    # Public endpoints
    trust_forwarded_for: bool = False
    lead_webhook_url: str | None = None
    lead_webhook_timeout_seconds: float = 5.0

    reserved_subdomains: str = "www,app,api,admin,static"

    model_config = {"env_prefix": "PAGELIFT_", "env_file": ".env", "extra": "ignore"}

    @property
    def base_dir(self) -> Path:
        return Path(__file__).resolve().parent

    @property
    def templates_dir(self) -> Path:
        return self.base_dir / "templates"

    @property
    def site_access_tokens_map(self) -> dict[str, str]:
        """Parse comma-separated subdomain:token pairs."""
        mapping: dict[str, str] = {}
        if not self.site_access_tokens.strip():
            return mapping

        for item in self.site_access_tokens.split(","):
            pair = item.strip()
            if not pair or ":" not in pair:
                continue
            subdomain, token = pair.split(":", 1)
            subdomain = subdomain.strip().lower()
            token = token.strip()
            if subdomain and token:
                mapping[subdomain] = token
        return mapping

    @property
    def reserved_subdomain_set(self) -> set[str]:
        return {s.strip().lower() for s in self.reserved_subdomains.split(",") if s.strip()}

    @property
    def webhook_configured(self) -> bool:
        return bool(self.lead_webhook_url)


settings = PageliftSettings()
