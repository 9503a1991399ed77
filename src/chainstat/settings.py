from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class FetchSettings(BaseModel):
    timeout: float = Field(default=10.0, gt=0)
    backoff_step: float = Field(default=1.0, ge=0)
    user_agent: str = "Mozilla/5.0 (compatible; chainstat/0.1)"

    model_config = {"extra": "forbid"}


class AggregationSettings(BaseModel):
    batch_size: int = Field(default=5, ge=1)
    batch_pause: float = Field(default=0.5, ge=0)
    # Seconds for the whole run; None keeps only the per-call timeouts.
    deadline: float | None = Field(default=None, gt=0)

    model_config = {"extra": "forbid"}


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)
    cache_max_age: int = Field(default=300, ge=0)
    stale_while_revalidate: int = Field(default=600, ge=0)

    model_config = {"extra": "forbid"}


class ExchangeSettings(BaseModel):
    enabled: bool = True
    max_attempts: int | None = Field(default=None, ge=1)
    base_url: str | None = None

    model_config = {"extra": "forbid"}


class Settings(BaseModel):
    env: str = "dev"
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    aggregation: AggregationSettings = Field(default_factory=AggregationSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    exchanges: dict[str, ExchangeSettings] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}

    def exchange(self, slug: str) -> ExchangeSettings:
        """Settings for *slug*, falling back to defaults when not configured."""
        return self.exchanges.get(slug) or ExchangeSettings()

    def redacted(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        for exch in data.get("exchanges", {}).values():
            base_url = exch.get("base_url")
            if isinstance(base_url, str) and "@" in base_url:
                scheme, _, rest = base_url.partition("://")
                exch["base_url"] = f"{scheme}://***@{rest.split('@', 1)[1]}"
        return data
