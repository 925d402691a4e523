"""HTTP トランスポート実装"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from .config import ClientConfig
from .exceptions import TransportError


@dataclass
class TransportResponse:
    """トランスポートが返す生のレスポンス。"""

    status: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)


class Transport(Protocol):
    """1 回の HTTP リクエストを実行するトランスポート。

    通信自体に失敗した場合は status=0 の TransportError を送出する。
    """

    def send(
        self,
        method: str,
        url: str,
        *,
        params: Sequence[tuple[str, str]] = (),
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> TransportResponse: ...

    def close(self) -> None: ...


class HttpxTransport:
    """httpx を使ったトランスポート。"""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: ClientConfig) -> HttpxTransport:
        """設定から専用の httpx.Client を作成する。"""
        # 3xx はデコーダ側で異常ステータスとして扱うため、リダイレクトは追わない。
        return cls(httpx.Client(timeout=config.timeout_seconds, follow_redirects=False))

    def send(
        self,
        method: str,
        url: str,
        *,
        params: Sequence[tuple[str, str]] = (),
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> TransportResponse:
        """HTTP リクエストを送信する。"""
        try:
            resp = self._client.request(
                method,
                url,
                params=list(params),
                content=content,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}", status=0, cause=e) from e
        return TransportResponse(
            status=resp.status_code,
            body=resp.content,
            headers=dict(resp.headers),
        )

    def close(self) -> None:
        self._client.close()
