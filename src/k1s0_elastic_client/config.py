"""Elastic client configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for one engine node."""

    host: str = "localhost"
    port: int = 9200
    https: bool = False
    timeout_seconds: float = 10.0

    @property
    def scheme(self) -> str:
        return "https" if self.https else "http"

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"
